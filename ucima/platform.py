"""Windowing, input polling, console output and timing for the desktop platform."""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass
from typing import Any, TextIO

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .event import EventCode, EventContext, EventSystem  # noqa: E402
from .input import InputSystem, Keys, MouseButton  # noqa: E402
from .logger import trace_error  # noqa: E402

CONSOLE_COLORS = ("0;41", "1;31", "1;33", "1;34", "1;32", "1;30")

_KEYSYM_TABLE: dict[int, Keys] = {
    0xFF08: Keys.BACKSPACE,
    0xFF0D: Keys.ENTER,
    0xFF09: Keys.TAB,
    0xFF13: Keys.PAUSE,
    0xFFE5: Keys.CAPITAL,
    0xFF1B: Keys.ESCAPE,
    0xFF7E: Keys.MODECHANGE,
    0x0020: Keys.SPACE,
    0xFF55: Keys.PAGEUP,
    0xFF56: Keys.PAGEDOWN,
    0xFF57: Keys.END,
    0xFF50: Keys.HOME,
    0xFF51: Keys.LEFT,
    0xFF52: Keys.UP,
    0xFF53: Keys.RIGHT,
    0xFF54: Keys.DOWN,
    0xFF60: Keys.SELECT,
    0xFF61: Keys.PRINT,
    0xFF62: Keys.EXECUTE,
    0xFF63: Keys.INSERT,
    0xFFFF: Keys.DELETE,
    0xFF6A: Keys.HELP,
    0xFFE7: Keys.LSUPER,
    0xFFEB: Keys.LSUPER,
    0xFFE8: Keys.RSUPER,
    0xFFEC: Keys.RSUPER,
    0x00D7: Keys.MULTIPLY,
    0xFFAB: Keys.ADD,
    0xFFAC: Keys.SEPARATOR,
    0xFFAD: Keys.SUBTRACT,
    0xFFAE: Keys.DECIMAL,
    0xFFAF: Keys.DIVIDE,
    0xFF7F: Keys.NUMLOCK,
    0xFF14: Keys.SCROLL,
    0xFFBD: Keys.NUMPAD_EQUAL,
    0xFFE1: Keys.LSHIFT,
    0xFFE2: Keys.RSHIFT,
    0xFFE3: Keys.LCONTROL,
    0xFFE4: Keys.RCONTROL,
    0xFFE9: Keys.LALT,
    0xFFEA: Keys.RALT,
    0x003B: Keys.SEMICOLON,
    0x002B: Keys.EQUAL,
    0x002C: Keys.COMMA,
    0x002D: Keys.MINUS,
    0x002E: Keys.PERIOD,
    0x002F: Keys.SLASH,
    0x0060: Keys.GRAVE,
}
_KEYSYM_TABLE.update({0xFFB0 + n: Keys(Keys.NUMPAD0 + n) for n in range(10)})
_KEYSYM_TABLE.update({0xFFBE + n: Keys(Keys.F1 + n) for n in range(24)})
_KEYSYM_TABLE.update({0x30 + n: Keys(Keys.DIGIT_0 + n) for n in range(10)})
_KEYSYM_TABLE.update({ord("a") + n: Keys(Keys.A + n) for n in range(26)})
_KEYSYM_TABLE.update({ord("A") + n: Keys(Keys.A + n) for n in range(26)})


def translate_key_code(keysym: int) -> int:
    """Map an X11 keysym to an engine key code; unknown keysyms give 0."""
    return _KEYSYM_TABLE.get(int(keysym), 0)


_PYGAME_KEY_NAMES: dict[str, Keys] = {
    "K_BACKSPACE": Keys.BACKSPACE,
    "K_RETURN": Keys.ENTER,
    "K_TAB": Keys.TAB,
    "K_PAUSE": Keys.PAUSE,
    "K_CAPSLOCK": Keys.CAPITAL,
    "K_ESCAPE": Keys.ESCAPE,
    "K_MODE": Keys.MODECHANGE,
    "K_PAGEUP": Keys.PAGEUP,
    "K_PAGEDOWN": Keys.PAGEDOWN,
    "K_END": Keys.END,
    "K_HOME": Keys.HOME,
    "K_LEFT": Keys.LEFT,
    "K_UP": Keys.UP,
    "K_RIGHT": Keys.RIGHT,
    "K_DOWN": Keys.DOWN,
    "K_PRINT": Keys.PRINT,
    "K_INSERT": Keys.INSERT,
    "K_DELETE": Keys.DELETE,
    "K_HELP": Keys.HELP,
    "K_LSUPER": Keys.LSUPER,
    "K_LMETA": Keys.LSUPER,
    "K_RSUPER": Keys.RSUPER,
    "K_RMETA": Keys.RSUPER,
    "K_KP_MULTIPLY": Keys.MULTIPLY,
    "K_KP_PLUS": Keys.ADD,
    "K_KP_MINUS": Keys.SUBTRACT,
    "K_KP_PERIOD": Keys.DECIMAL,
    "K_KP_DIVIDE": Keys.DIVIDE,
    "K_KP_EQUALS": Keys.NUMPAD_EQUAL,
    "K_NUMLOCK": Keys.NUMLOCK,
    "K_SCROLLOCK": Keys.SCROLL,
    "K_LSHIFT": Keys.LSHIFT,
    "K_RSHIFT": Keys.RSHIFT,
    "K_LCTRL": Keys.LCONTROL,
    "K_RCTRL": Keys.RCONTROL,
    "K_LALT": Keys.LALT,
    "K_RALT": Keys.RALT,
}
_PYGAME_KEY_NAMES.update({f"K_KP{n}": Keys(Keys.NUMPAD0 + n) for n in range(10)})
_PYGAME_KEY_NAMES.update({f"K_F{n + 1}": Keys(Keys.F1 + n) for n in range(24)})

_PYGAME_KEYS: dict[int, Keys] = {
    getattr(pygame, name): key for name, key in _PYGAME_KEY_NAMES.items() if hasattr(pygame, name)
}

_PYGAME_BUTTONS = {
    1: MouseButton.LEFT,
    2: MouseButton.MIDDLE,
    3: MouseButton.RIGHT,
}


def _translate_pygame_key(key: int) -> int:
    if key in _PYGAME_KEYS:
        return _PYGAME_KEYS[key]
    if 0 <= key < 0x80:
        return translate_key_code(key)
    return 0


def get_clock_time() -> float:
    """Seconds on a monotonic clock."""
    return time.monotonic()


def sleep_ms(msecs: int) -> None:
    """Block for the given number of milliseconds."""
    if msecs < 0:
        raise ValueError(f"sleep duration must not be negative: {msecs}")
    time.sleep(msecs / 1000)


def _write_colored(message: str | None, color: int, stream: TextIO) -> None:
    if message is None:
        return
    if not 0 <= color < len(CONSOLE_COLORS):
        raise ValueError(f"console color must be in [0, {len(CONSOLE_COLORS)}), got {color}")
    stream.write(f"\033[{CONSOLE_COLORS[color]}m{message}\033[0m")


def write_console(message: str | None, color: int, stream: TextIO | None = None) -> None:
    """Write a coloured message to stdout (or the given stream)."""
    _write_colored(message, color, stream if stream is not None else sys.stdout)


def write_console_error(message: str | None, color: int, stream: TextIO | None = None) -> None:
    """Write a coloured message to stderr (or the given stream)."""
    _write_colored(message, color, stream if stream is not None else sys.stderr)


@dataclass
class _WindowState:
    surface: Any
    app_name: str


class Platform:
    """A desktop window that feeds input and window events into the engine."""

    def __init__(
        self, events: EventSystem | None = None, input_system: InputSystem | None = None
    ) -> None:
        self.events = events
        self.input = input_system
        self._state: _WindowState | None = None

    @property
    def started(self) -> bool:
        return self._state is not None

    def start_up(self, app_name: str, x: int, y: int, width: int, height: int) -> bool:
        """Open the window; returns False and logs when that is not possible."""
        os.environ["SDL_VIDEO_WINDOW_POS"] = f"{int(x)},{int(y)}"
        try:
            pygame.display.init()
            surface = pygame.display.set_mode((int(width), int(height)), pygame.RESIZABLE)
            pygame.display.set_caption(app_name)
        except pygame.error as exc:
            trace_error("Failed to setup window: %s", exc)
            pygame.display.quit()
            return False
        self._state = _WindowState(surface, app_name)
        return True

    def shut_down(self) -> None:
        if self._state is None:
            return
        pygame.display.quit()
        self._state = None

    def poll_events(self) -> bool:
        """Dispatch pending window events; False once the window was asked to close."""
        if self._state is None:
            return True
        quit_flagged = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_flagged = True
            elif event.type == pygame.KEYDOWN:
                key = _translate_pygame_key(getattr(event, "key", 0))
                if self.input is not None:
                    self.input.process_key(key, True)
            elif event.type == pygame.MOUSEBUTTONUP:
                button = _PYGAME_BUTTONS.get(getattr(event, "button", 0))
                if button is not None and self.input is not None:
                    self.input.process_mouse_button(button, False)
            elif event.type == pygame.MOUSEMOTION:
                x, y = event.pos
                if self.input is not None:
                    self.input.process_mouse_move(x, y)
            elif event.type == pygame.VIDEORESIZE:
                context = EventContext()
                context.set("u16", 0, event.w)
                context.set("u16", 1, event.h)
                if self.events is not None:
                    self.events.fire(EventCode.WINDOW_RESIZED, None, context)
        return not quit_flagged