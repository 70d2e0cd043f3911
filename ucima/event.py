"""Event codes, event payloads and the listener registry."""

from __future__ import annotations

import enum
import struct
from typing import Any, Callable

from .logger import trace_info, trace_warn

MAX_MESSAGE_CODES = 16384
CONTEXT_SIZE = 16

EventCallback = Callable[[int, Any, Any, "EventContext"], bool]


class EventCode(enum.IntEnum):
    """Codes of the events the engine itself fires."""

    APPLICATION_QUIT = 0x01
    KEY_PRESSED = 0x02
    KEY_RELEASED = 0x03
    BUTTON_PRESSED = 0x04
    BUTTON_RELEASED = 0x05
    MOUSE_MOVE = 0x06
    MOUSE_WHEEL = 0x07
    WINDOW_RESIZED = 0x08
    MAX_EVENT_CODE = 0xFF


# Each view of the payload: struct code, whether it is an integer, whether signed.
_FORMATS: dict[str, tuple[str, bool, bool]] = {
    "i64": ("q", True, True),
    "u64": ("Q", True, False),
    "f64": ("d", False, False),
    "i32": ("i", True, True),
    "u32": ("I", True, False),
    "f32": ("f", False, False),
    "i16": ("h", True, True),
    "u16": ("H", True, False),
    "i8": ("b", True, True),
    "u8": ("B", True, False),
    "c": ("c", False, False),
}


class EventContext:
    """A 16-byte event payload readable as arrays of different element types."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        if data is None:
            self._data = bytearray(CONTEXT_SIZE)
        else:
            if len(data) != CONTEXT_SIZE:
                raise ValueError(f"event context holds exactly {CONTEXT_SIZE} bytes, got {len(data)}")
            self._data = bytearray(data)

    @property
    def data(self) -> bytes:
        return bytes(self._data)

    @staticmethod
    def _layout(fmt: str, index: int) -> tuple[str, bool, bool, int]:
        try:
            code, is_int, signed = _FORMATS[fmt]
        except KeyError:
            raise ValueError(f"unknown event context format: {fmt!r}") from None
        size = struct.calcsize(code)
        count = CONTEXT_SIZE // size
        if not 0 <= index < count:
            raise IndexError(f"index {index} out of range for {fmt} view of {count} elements")
        return code, is_int, signed, size

    def get(self, fmt: str, index: int = 0) -> Any:
        """Read element ``index`` of the payload viewed as ``fmt`` (e.g. "u16")."""
        code, _, _, size = self._layout(fmt, index)
        return struct.unpack_from("<" + code, self._data, index * size)[0]

    def set(self, fmt: str, index: int, value: Any) -> None:
        """Store a value; integers wrap to the element width as a C store would."""
        code, is_int, signed, size = self._layout(fmt, index)
        if is_int:
            value = int(value) & ((1 << (size * 8)) - 1)
            code = code.upper()
        elif code == "c" and isinstance(value, str):
            value = value.encode("latin-1")
        struct.pack_into("<" + code, self._data, index * size, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventContext):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"EventContext({self.data!r})"


def _check_code(code: int) -> int:
    code = int(code)
    if not 0 <= code < MAX_MESSAGE_CODES:
        raise ValueError(f"event code must be in [0, {MAX_MESSAGE_CODES}), got {code}")
    return code


class EventSystem:
    """Registry of listeners per event code, dispatching fired events in order."""

    def __init__(self) -> None:
        self._registered: dict[int, list[tuple[Any, EventCallback]]] = {}
        self._initialized = True
        trace_info("Event subsystem initialized successfuly")

    @property
    def initialized(self) -> bool:
        return self._initialized

    def register(self, code: int, listener: Any, callback: EventCallback) -> bool:
        """Register a callback; a listener may listen to a code only once."""
        code = _check_code(code)
        if not self._initialized:
            return False
        entries = self._registered.setdefault(code, [])
        if any(existing is listener for existing, _ in entries):
            trace_warn("Event code listener already been registered, so can't listen it more then once")
            return False
        entries.append((listener, callback))
        return True

    def unregister(self, code: int, listener: Any, callback: EventCallback) -> bool:
        """Remove a registration; returns False when it was not registered."""
        code = _check_code(code)
        if not self._initialized:
            return False
        entries = self._registered.get(code)
        if not entries:
            return False
        for position, (existing, existing_callback) in enumerate(entries):
            if existing is listener and existing_callback == callback:
                del entries[position]
                return True
        return False

    def fire(self, code: int, sender: Any = None, context: EventContext | None = None) -> bool:
        """Call listeners in registration order until one reports the event handled."""
        code = _check_code(code)
        if not self._initialized:
            return False
        entries = self._registered.get(code)
        if not entries:
            return False
        if context is None:
            context = EventContext()
        for listener, callback in list(entries):
            if callback(code, sender, listener, context):
                return True
        return False

    def shutdown(self) -> None:
        """Drop every registration and stop accepting new ones."""
        self._registered.clear()
        self._initialized = False