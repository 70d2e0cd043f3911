"""A growable array with explicit capacity and memory accounting."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from .memory import MemoryCategory, MemoryTracker

T = TypeVar("T")

DEFAULT_CAPACITY = 1
RESIZE_FACTOR = 2

_HEADER_SIZE = 3 * 8
_SLOT_SIZE = 8


class DArray(Generic[T]):
    """Dynamic array that doubles its capacity when full."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, tracker: MemoryTracker | None = None) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative: {capacity}")
        self._capacity = capacity
        self._items: list[T] = []
        self._tracker = tracker
        self._destroyed = False
        self._account(capacity, allocate=True)

    @staticmethod
    def _block_size(capacity: int) -> int:
        return _HEADER_SIZE + capacity * _SLOT_SIZE

    def _account(self, capacity: int, *, allocate: bool) -> None:
        if self._tracker is None:
            return
        size = self._block_size(capacity)
        if allocate:
            self._tracker.allocate(size, MemoryCategory.DARRAY)
        else:
            self._tracker.free(size, MemoryCategory.DARRAY)

    def _check_alive(self) -> None:
        if self._destroyed:
            raise RuntimeError("array has been destroyed")

    def _check_index(self, index: int) -> None:
        length = len(self._items)
        if not 0 <= index < length:
            raise IndexError(f"Index out of bounds of array. Length: {length}, index: {index}")

    def _grow(self) -> None:
        new_capacity = max(1, self._capacity * RESIZE_FACTOR)
        self._account(new_capacity, allocate=True)
        self._account(self._capacity, allocate=False)
        self._capacity = new_capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, value: T) -> None:
        self._check_alive()
        if len(self._items) >= self._capacity:
            self._grow()
        self._items.append(value)

    def pop(self) -> T:
        self._check_alive()
        if not self._items:
            raise IndexError("pop from empty array")
        return self._items.pop()

    def pop_at(self, index: int) -> T:
        self._check_alive()
        self._check_index(index)
        return self._items.pop(index)

    def insert(self, index: int, value: T) -> None:
        """Insert before an existing element; the index must already be in use."""
        self._check_alive()
        self._check_index(index)
        if len(self._items) >= self._capacity:
            self._grow()
        self._items.insert(index, value)

    def clear(self) -> None:
        self._check_alive()
        self._items.clear()

    def destroy(self) -> None:
        self._check_alive()
        self._account(self._capacity, allocate=False)
        self._items.clear()
        self._capacity = 0
        self._destroyed = True

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self) -> str:
        return f"DArray({self._items!r}, capacity={self._capacity})"