import io

import pygame
import pytest

from ucima.event import EventCode, EventSystem
from ucima.input import InputSystem, Keys, MouseButton
from ucima.platform import (
    Platform,
    get_clock_time,
    sleep_ms,
    translate_key_code,
    write_console,
    write_console_error,
)


def test_translate_escape():
    assert translate_key_code(0xFF1B) == Keys.ESCAPE


def test_translate_letters_case_insensitive():
    for offset in range(26):
        assert translate_key_code(ord("a") + offset) == translate_key_code(ord("A") + offset)
        assert translate_key_code(ord("A") + offset) == Keys.A + offset


def test_translate_digits():
    for offset in range(10):
        assert translate_key_code(ord("0") + offset) == Keys.DIGIT_0 + offset


def test_translate_function_keys():
    for offset in range(24):
        assert translate_key_code(0xFFBE + offset) == Keys.F1 + offset


def test_translate_super_and_meta_share_key():
    assert translate_key_code(0xFFE7) == translate_key_code(0xFFEB) == Keys.LSUPER
    assert translate_key_code(0xFFE8) == translate_key_code(0xFFEC) == Keys.RSUPER


def test_translate_plus_maps_to_equal():
    assert translate_key_code(ord("+")) == Keys.EQUAL


def test_translate_unknown_is_zero():
    assert translate_key_code(0x12345) == 0


def test_write_console_colors():
    out = io.StringIO()
    write_console("hello", 3, stream=out)
    assert out.getvalue() == "\033[1;34mhello\033[0m"


def test_write_console_error_colors():
    out = io.StringIO()
    write_console_error("bad", 0, stream=out)
    assert out.getvalue() == "\033[0;41mbad\033[0m"


def test_write_console_none_writes_nothing():
    out = io.StringIO()
    write_console(None, 1, stream=out)
    assert out.getvalue() == ""


def test_write_console_invalid_color():
    with pytest.raises(ValueError):
        write_console("x", 6, stream=io.StringIO())


def test_clock_is_monotonic():
    first = get_clock_time()
    sleep_ms(1)
    assert get_clock_time() > first


def test_sleep_negative_raises():
    with pytest.raises(ValueError):
        sleep_ms(-1)


def test_poll_without_window_keeps_running():
    assert Platform().poll_events() is True


@pytest.fixture
def window(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    events = EventSystem()
    input_system = InputSystem(events)
    platform = Platform(events, input_system)
    assert platform.start_up("test", 10, 20, 320, 240)
    pygame.event.clear()
    yield platform, events, input_system
    platform.shut_down()


def test_start_and_shut_down(window):
    platform, _, _ = window
    assert platform.started is True
    platform.shut_down()
    assert platform.started is False


def test_key_press_reaches_input(window):
    platform, _, input_system = window
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a))
    assert platform.poll_events() is True
    assert input_system.is_key_down(Keys.A) is True


def test_escape_key_translated(window):
    platform, _, input_system = window
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    platform.poll_events()
    assert input_system.is_key_down(Keys.ESCAPE) is True


def test_quit_stops_loop(window):
    platform, _, _ = window
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert platform.poll_events() is False


def test_mouse_move_updates_position(window):
    platform, _, input_system = window
    pygame.event.post(pygame.event.Event(pygame.MOUSEMOTION, pos=(15, 25), rel=(0, 0), buttons=(0, 0, 0)))
    platform.poll_events()
    input_system.update()
    assert input_system.mouse_position() == (15, 25)


def test_mouse_button_release_leaves_button_up(window):
    platform, _, input_system = window
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(0, 0)))
    platform.poll_events()
    assert input_system.is_mouse_button_up(MouseButton.LEFT) is True


def test_resize_fires_event(window):
    platform, events, _ = window
    seen = []

    def on_resize(code, sender, listener, context):
        seen.append((code, context.get("u16", 0), context.get("u16", 1)))
        return True

    assert events.register(EventCode.WINDOW_RESIZED, None, on_resize) is True
    pygame.event.post(pygame.event.Event(pygame.VIDEORESIZE, w=640, h=480, size=(640, 480)))
    assert platform.poll_events() is True
    assert len(seen) == 1
    code, width, height = seen[0]
    assert code == EventCode.WINDOW_RESIZED
    assert (width, height) == (640, 480)