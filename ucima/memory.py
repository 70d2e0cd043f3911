"""Categorised memory accounting."""

from __future__ import annotations

import enum

from .logger import trace_info, trace_warn

KIB = 1024
MIB = 1024 * 1024
GIB = 1024 * 1024 * 1024

REPORT_HEADER = "Engine categorized memory usage:\n"


class MemoryCategory(enum.IntEnum):
    """What an allocation is used for."""

    UNKNOWN = 0
    ARRAY = enum.auto()
    DARRAY = enum.auto()
    DICT = enum.auto()
    RING_QUEUE = enum.auto()
    RING_BST = enum.auto()
    STRING = enum.auto()
    APPLICATION = enum.auto()
    JOB = enum.auto()
    TEXTURE = enum.auto()
    MAT_INST = enum.auto()
    RENDERER = enum.auto()
    GAME = enum.auto()
    TRANSFORM = enum.auto()
    ENTITY = enum.auto()
    ENTITY_NONE = enum.auto()
    SCENE = enum.auto()

    @property
    def label(self) -> str:
        return _LABELS[self.value]


_LABELS = (
    "UNKNOWN",
    "ARRAY",
    "DARRAY",
    "DICT",
    "RING_QUEUE",
    "BST",
    "STRING",
    "APPLICATION",
    "JOB",
    "TEXTURE",
    "MAT_INST",
    "RENDERER",
    "GAME",
    "TRANSFRORM",
    "ENTITY",
    "ENTITY_NONE",
    "SCENE",
)


def format_amount(size: int) -> str:
    """Render a byte count with a binary unit and two decimals."""
    if size >= GIB:
        return f"{size / GIB:.2f}GiB"
    if size >= MIB:
        return f"{size / MIB:.2f}MiB"
    if size >= KIB:
        return f"{size / KIB:.2f}KiB"
    return f"{float(size):.2f}B"


def _warn_unknown(category: MemoryCategory) -> None:
    if category == MemoryCategory.UNKNOWN:
        trace_warn("Using MEMORY_CATEGORY_UNKNOWN. This allocator should be re-classed")


class MemoryTracker:
    """Keeps running totals of allocated bytes, overall and per category."""

    def __init__(self) -> None:
        self.total = 0
        self._by_category = dict.fromkeys(MemoryCategory, 0)
        trace_info("Memory subsystem initialized successfuly")

    def allocate(self, size: int, category: MemoryCategory) -> bytearray:
        """Record an allocation and return a zeroed block of that size."""
        if size < 0:
            raise ValueError(f"allocation size must not be negative: {size}")
        category = MemoryCategory(category)
        _warn_unknown(category)
        self.total += size
        self._by_category[category] += size
        return bytearray(size)

    def free(self, size: int, category: MemoryCategory) -> None:
        """Record that a block of the given size was released."""
        category = MemoryCategory(category)
        _warn_unknown(category)
        if size < 0 or size > self._by_category[category]:
            raise ValueError(
                f"cannot free {size} bytes from {category.label}: "
                f"{self._by_category[category]} allocated"
            )
        self.total -= size
        self._by_category[category] -= size

    def usage(self, category: MemoryCategory) -> int:
        return self._by_category[MemoryCategory(category)]

    def usage_report(self) -> str:
        lines = (
            f"\t{category.label}: {format_amount(amount)}\n"
            for category, amount in self._by_category.items()
        )
        return REPORT_HEADER + "".join(lines)

    def duplicate_string(self, text: str) -> str:
        """Copy a string, accounting its bytes plus terminator as STRING memory."""
        self.allocate(len(text.encode("utf-8")) + 1, MemoryCategory.STRING)
        return str(text)