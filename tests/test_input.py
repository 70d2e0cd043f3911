import pytest

from ucima.event import EventCode, EventSystem
from ucima.input import InputSystem, Keys, MouseButton


@pytest.fixture
def wired():
    events = EventSystem()
    received = []

    def record(code, sender, listener, context):
        received.append((code, context))
        return False

    for code in EventCode:
        events.register(code, None, record)
    return InputSystem(events), received


def test_key_codes_match_source():
    system = InputSystem()
    system.process_key(0x1B, True)
    assert system.is_key_down(Keys.ESCAPE) is True
    system.process_key(0x41, True)
    assert system.is_key_down(Keys.A) is True
    system.process_key(Keys.QUOTE, True)
    assert system.is_key_down(Keys.APOSTROPHE) is True
    system.process_key(Keys.BACKSLASH, True)
    assert system.is_key_down(Keys.PIPE) is True
    with pytest.raises(ValueError):
        system.process_mouse_button(3, True)


def test_key_press_fires_event_once(wired):
    system, received = wired
    system.process_key(Keys.W, True)
    system.process_key(Keys.W, True)
    assert len(received) == 1
    code, context = received[0]
    assert code == EventCode.KEY_PRESSED
    assert context.get("u16", 0) == Keys.W


def test_key_release_fires_released(wired):
    system, received = wired
    system.process_key(Keys.SPACE, True)
    system.process_key(Keys.SPACE, False)
    assert [code for code, _ in received] == [EventCode.KEY_PRESSED, EventCode.KEY_RELEASED]


def test_releasing_unpressed_key_is_silent(wired):
    system, received = wired
    system.process_key(Keys.Q, False)
    assert received == []
    assert system.is_key_up(Keys.Q) is True


def test_key_state_and_previous_state():
    system = InputSystem()
    system.process_key(Keys.ENTER, True)
    assert system.is_key_down(Keys.ENTER) is True
    assert system.was_key_down(Keys.ENTER) is False
    assert system.was_key_up(Keys.ENTER) is True
    system.update(0.016)
    assert system.was_key_down(Keys.ENTER) is True
    system.process_key(Keys.ENTER, False)
    assert system.is_key_up(Keys.ENTER) is True
    assert system.was_key_down(Keys.ENTER) is True


def test_untranslated_key_zero_is_accepted():
    system = InputSystem()
    system.process_key(0, True)
    assert system.is_key_down(0) is True


def test_invalid_key_rejected():
    system = InputSystem()
    with pytest.raises(ValueError):
        system.process_key(256, True)
    with pytest.raises(ValueError):
        system.is_key_down(-1)


def test_mouse_buttons(wired):
    system, received = wired
    system.process_mouse_button(MouseButton.RIGHT, True)
    assert system.is_mouse_button_down(MouseButton.RIGHT) is True
    assert system.is_mouse_button_up(MouseButton.LEFT) is True
    assert received[0][0] == EventCode.BUTTON_PRESSED
    assert received[0][1].get("u16", 0) == MouseButton.RIGHT
    system.update()
    system.process_mouse_button(MouseButton.RIGHT, False)
    assert system.was_mouse_button_down(MouseButton.RIGHT) is True
    assert system.is_mouse_button_up(MouseButton.RIGHT) is True
    assert received[-1][0] == EventCode.BUTTON_RELEASED


def test_invalid_mouse_button_rejected():
    system = InputSystem()
    with pytest.raises(ValueError):
        system.process_mouse_button(MouseButton.MAX_BUTTON, True)


def test_mouse_move_and_position(wired):
    system, received = wired
    system.process_mouse_move(120, 45)
    system.process_mouse_move(120, 45)
    assert len(received) == 1
    code, context = received[0]
    assert code == EventCode.MOUSE_MOVE
    assert (context.get("i16", 0), context.get("i16", 1)) == (120, 45)
    assert system.mouse_position() == (0, 0)
    system.update()
    assert system.mouse_position() == (120, 45)


def test_mouse_wheel_carries_signed_delta(wired):
    system, received = wired
    system.process_mouse_wheel(-3)
    code, context = received[0]
    assert code == EventCode.MOUSE_WHEEL
    assert context.get("i8", 0) == -3


def test_shutdown_reports_defaults():
    system = InputSystem()
    system.process_key(Keys.A, True)
    system.process_mouse_move(10, 20)
    system.update()
    system.shutdown()
    assert system.is_key_down(Keys.A) is False
    assert system.is_key_up(Keys.A) is True
    assert system.was_key_down(Keys.A) is False
    assert system.was_mouse_button_up(MouseButton.LEFT) is True
    assert system.mouse_position() == (0, 0)


def test_update_after_shutdown_keeps_previous_state():
    system = InputSystem()
    system.shutdown()
    system.process_key(Keys.B, True)
    system.update()
    assert system.was_key_down(Keys.B) is False
    assert system.initialized is False