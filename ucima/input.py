"""Keyboard and mouse state tracking."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .event import EventCode, EventContext, EventSystem
from .logger import trace_info

KEY_COUNT = 256


class MouseButton(enum.IntEnum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2
    MAX_BUTTON = 3


class Keys(enum.IntEnum):
    """Key codes, laid out like the virtual-key codes of desktop systems."""

    BACKSPACE = 0x08
    ENTER = 0x0D
    TAB = 0x09
    SHIFT = 0x10
    CONTROL = 0x11
    PAUSE = 0x13
    CAPITAL = 0x14
    ESCAPE = 0x1B
    CONVERT = 0x1C
    NONCONVERT = 0x1D
    ACCEPT = 0x1E
    MODECHANGE = 0x1F
    SPACE = 0x20
    PAGEUP = 0x21
    PAGEDOWN = 0x22
    END = 0x23
    HOME = 0x24
    LEFT = 0x25
    UP = 0x26
    RIGHT = 0x27
    DOWN = 0x28
    SELECT = 0x29
    PRINT = 0x2A
    EXECUTE = 0x2B
    PRINTSCREEN = 0x2C
    INSERT = 0x2D
    DELETE = 0x2E
    HELP = 0x2F
    DIGIT_0 = 0x30
    DIGIT_1 = 0x31
    DIGIT_2 = 0x32
    DIGIT_3 = 0x33
    DIGIT_4 = 0x34
    DIGIT_5 = 0x35
    DIGIT_6 = 0x36
    DIGIT_7 = 0x37
    DIGIT_8 = 0x38
    DIGIT_9 = 0x39
    A = 0x41
    B = 0x42
    C = 0x43
    D = 0x44
    E = 0x45
    F = 0x46
    G = 0x47
    H = 0x48
    I = 0x49  # noqa: E741
    J = 0x4A
    K = 0x4B
    L = 0x4C
    M = 0x4D
    N = 0x4E
    O = 0x4F  # noqa: E741
    P = 0x50
    Q = 0x51
    R = 0x52
    S = 0x53
    T = 0x54
    U = 0x55
    V = 0x56
    W = 0x57
    X = 0x58
    Y = 0x59
    Z = 0x5A
    LSUPER = 0x5B
    RSUPER = 0x5C
    APPS = 0x5D
    SLEEP = 0x5F
    NUMPAD0 = 0x60
    NUMPAD1 = 0x61
    NUMPAD2 = 0x62
    NUMPAD3 = 0x63
    NUMPAD4 = 0x64
    NUMPAD5 = 0x65
    NUMPAD6 = 0x66
    NUMPAD7 = 0x67
    NUMPAD8 = 0x68
    NUMPAD9 = 0x69
    MULTIPLY = 0x6A
    ADD = 0x6B
    SEPARATOR = 0x6C
    SUBTRACT = 0x6D
    DECIMAL = 0x6E
    DIVIDE = 0x6F
    F1 = 0x70
    F2 = 0x71
    F3 = 0x72
    F4 = 0x73
    F5 = 0x74
    F6 = 0x75
    F7 = 0x76
    F8 = 0x77
    F9 = 0x78
    F10 = 0x79
    F11 = 0x7A
    F12 = 0x7B
    F13 = 0x7C
    F14 = 0x7D
    F15 = 0x7E
    F16 = 0x7F
    F17 = 0x80
    F18 = 0x81
    F19 = 0x82
    F20 = 0x83
    F21 = 0x84
    F22 = 0x85
    F23 = 0x86
    F24 = 0x87
    NUMLOCK = 0x90
    SCROLL = 0x91
    NUMPAD_EQUAL = 0x92
    LSHIFT = 0xA0
    RSHIFT = 0xA1
    LCONTROL = 0xA2
    RCONTROL = 0xA3
    LALT = 0xA4
    RALT = 0xA5
    SEMICOLON = 0x3B
    APOSTROPHE = 0xDE
    QUOTE = 0xDE
    EQUAL = 0xBB
    COMMA = 0xBC
    MINUS = 0xBD
    PERIOD = 0xBE
    SLASH = 0xBF
    GRAVE = 0xC0
    LBRACKET = 0xDB
    PIPE = 0xDC
    BACKSLASH = 0xDC
    RBRACKET = 0xDD
    MAX_KEYS = 0xFF


def _check_key(key: int) -> int:
    key = int(key)
    if not 0 <= key < KEY_COUNT:
        raise ValueError(f"key code must be in [0, {KEY_COUNT}), got {key}")
    return key


def _check_button(button: int) -> int:
    button = int(button)
    if not 0 <= button < MouseButton.MAX_BUTTON:
        raise ValueError(f"mouse button must be in [0, {int(MouseButton.MAX_BUTTON)}), got {button}")
    return button


def _wrap_s16(value: int) -> int:
    value = int(value) & 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


@dataclass
class _KeyboardState:
    keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)

    def copy(self) -> _KeyboardState:
        return _KeyboardState(list(self.keys))


@dataclass
class _MouseState:
    x: int = 0
    y: int = 0
    buttons: list[bool] = field(default_factory=lambda: [False] * int(MouseButton.MAX_BUTTON))

    def copy(self) -> _MouseState:
        return _MouseState(self.x, self.y, list(self.buttons))


class InputSystem:
    """Current and previous-frame keyboard and mouse state, firing events on change."""

    def __init__(self, events: EventSystem | None = None) -> None:
        self._events = events
        self._keyboard = _KeyboardState()
        self._keyboard_previous = _KeyboardState()
        self._mouse = _MouseState()
        self._mouse_previous = _MouseState()
        self._initialized = True
        trace_info("Input subsystem initialized successfuly")

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _fire(self, code: EventCode, context: EventContext) -> None:
        if self._events is not None:
            self._events.fire(code, None, context)

    def shutdown(self) -> None:
        self._initialized = False

    def update(self, delta_time: float = 0.0) -> None:
        """Make the current state the previous one; call once at the end of a frame."""
        if not self._initialized:
            return
        self._keyboard_previous = self._keyboard.copy()
        self._mouse_previous = self._mouse.copy()

    def process_key(self, key: int, pressed: bool) -> None:
        key = _check_key(key)
        pressed = bool(pressed)
        if self._keyboard.keys[key] != pressed:
            self._keyboard.keys[key] = pressed
            context = EventContext()
            context.set("u16", 0, key)
            self._fire(EventCode.KEY_PRESSED if pressed else EventCode.KEY_RELEASED, context)

    def process_mouse_button(self, button: int, pressed: bool) -> None:
        button = _check_button(button)
        pressed = bool(pressed)
        if self._mouse.buttons[button] != pressed:
            self._mouse.buttons[button] = pressed
            context = EventContext()
            context.set("u16", 0, button)
            self._fire(EventCode.BUTTON_PRESSED if pressed else EventCode.BUTTON_RELEASED, context)

    def process_mouse_move(self, x: int, y: int) -> None:
        x, y = _wrap_s16(x), _wrap_s16(y)
        if self._mouse.x != x or self._mouse.y != y:
            self._mouse.x = x
            self._mouse.y = y
            context = EventContext()
            context.set("u16", 0, x)
            context.set("u16", 1, y)
            self._fire(EventCode.MOUSE_MOVE, context)

    def process_mouse_wheel(self, z_delta: int) -> None:
        context = EventContext()
        context.set("u8", 0, z_delta)
        self._fire(EventCode.MOUSE_WHEEL, context)

    def is_key_down(self, key: int) -> bool:
        if not self._initialized:
            return False
        return self._keyboard.keys[_check_key(key)]

    def is_key_up(self, key: int) -> bool:
        if not self._initialized:
            return True
        return not self._keyboard.keys[_check_key(key)]

    def was_key_down(self, key: int) -> bool:
        if not self._initialized:
            return False
        return self._keyboard_previous.keys[_check_key(key)]

    def was_key_up(self, key: int) -> bool:
        if not self._initialized:
            return True
        return not self._keyboard_previous.keys[_check_key(key)]

    def is_mouse_button_down(self, button: int) -> bool:
        if not self._initialized:
            return False
        return self._mouse.buttons[_check_button(button)]

    def is_mouse_button_up(self, button: int) -> bool:
        if not self._initialized:
            return True
        return not self._mouse.buttons[_check_button(button)]

    def was_mouse_button_down(self, button: int) -> bool:
        if not self._initialized:
            return False
        return self._mouse_previous.buttons[_check_button(button)]

    def was_mouse_button_up(self, button: int) -> bool:
        if not self._initialized:
            return True
        return not self._mouse_previous.buttons[_check_button(button)]

    def mouse_position(self) -> tuple[int, int]:
        """Mouse position as of the last update; (0, 0) once shut down."""
        if not self._initialized:
            return (0, 0)
        return (self._mouse_previous.x, self._mouse_previous.y)