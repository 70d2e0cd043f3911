from dataclasses import dataclass, field

import pytest

from ucima.application import AppConfig, Application, ApplicationError, Game, run_game
from ucima.event import EventCode, EventContext
from ucima.input import Keys
from ucima.memory import MemoryTracker
from ucima.renderer import Renderer, RendererBackend


class FakePlatform:
    def __init__(self, frames=1, start_ok=True):
        self.events = None
        self.input = None
        self.frames = frames
        self.start_ok = start_ok
        self.polls = 0
        self.started_with = None
        self.shut = False

    def start_up(self, app_name, x, y, width, height):
        self.started_with = (app_name, x, y, width, height)
        return self.start_ok

    def shut_down(self):
        self.shut = True

    def poll_events(self):
        self.polls += 1
        return self.polls < self.frames


@dataclass
class RecordingGame(Game):
    init_ok: bool = True
    update_ok: bool = True
    render_ok: bool = True
    calls: list = field(default_factory=list)
    deltas: list = field(default_factory=list)

    def initialize(self):
        self.calls.append("initialize")
        return self.init_ok

    def update(self, delta_time):
        self.calls.append("update")
        self.deltas.append(delta_time)
        return self.update_ok

    def render(self, delta_time):
        self.calls.append("render")
        return self.render_ok

    def on_resize(self, width, height):
        self.calls.append(("resize", width, height))


def make_app(game=None, frames=1, start_ok=True):
    game = game or RecordingGame(app_config=AppConfig(10, 20, 300, 200, "demo"))
    platform = FakePlatform(frames=frames, start_ok=start_ok)
    renderer = Renderer(RendererBackend())
    app = Application(game, platform, renderer, MemoryTracker())
    return app, game, platform, renderer


def resize_context(width, height):
    context = EventContext()
    context.set("u16", 0, width)
    context.set("u16", 1, height)
    return context


def test_create_starts_platform_and_initializes_game():
    app, game, platform, _ = make_app()
    app.create()
    assert platform.started_with == ("demo", 10, 20, 300, 200)
    assert game.calls == ["initialize", ("resize", 0, 0)]
    assert app.running is True
    assert platform.events is app.events
    assert platform.input is app.input


def test_create_twice_raises():
    app, _, _, _ = make_app()
    app.create()
    with pytest.raises(ApplicationError):
        app.create()


def test_platform_failure_raises():
    app, game, _, _ = make_app(start_ok=False)
    with pytest.raises(ApplicationError):
        app.create()
    assert "initialize" not in game.calls


def test_game_initialize_failure_raises():
    game = RecordingGame(init_ok=False)
    app, _, _, _ = make_app(game=game)
    with pytest.raises(ApplicationError):
        app.create()


def test_run_before_create_raises():
    app, _, _, _ = make_app()
    with pytest.raises(ApplicationError):
        app.run()


def test_run_executes_frames_and_shuts_down():
    app, game, platform, renderer = make_app(frames=3)
    backend = renderer.backend
    app.create()
    assert app.run() is True
    assert game.calls.count("update") == 3
    assert game.calls.count("render") == 3
    assert backend.frame_number == 3
    assert platform.shut is True
    assert app.events.initialized is False
    assert app.input.initialized is False
    assert renderer.backend is None
    assert app.running is False
    assert all(delta >= 0 for delta in game.deltas)


def test_update_failure_stops_loop_before_render():
    game = RecordingGame(update_ok=False)
    app, _, platform, _ = make_app(game=game, frames=5)
    app.create()
    assert app.run() is True
    assert game.calls.count("update") == 1
    assert "render" not in game.calls
    assert platform.shut is True


def test_render_failure_stops_loop():
    game = RecordingGame(render_ok=False)
    app, _, _, renderer = make_app(game=game, frames=5)
    backend = renderer.backend
    app.create()
    app.run()
    assert game.calls.count("render") == 1
    assert backend.frame_number == 0


def test_quit_event_stops_running():
    app, _, _, _ = make_app()
    app.create()
    assert app.events.fire(EventCode.APPLICATION_QUIT, None, EventContext()) is True
    assert app.running is False


def test_key_event_is_not_consumed():
    app, _, _, _ = make_app()
    app.create()
    app.input.process_key(Keys.ESCAPE, True)
    assert app.running is True
    assert app.input.is_key_down(Keys.ESCAPE) is True


def test_resize_updates_size_game_and_renderer():
    app, game, _, renderer = make_app()
    app.create()
    handled = app.events.fire(EventCode.WINDOW_RESIZED, None, resize_context(800, 600))
    assert handled is False
    assert app.framebuffer_size() == (800, 600)
    assert game.calls[-1] == ("resize", 800, 600)
    assert (renderer.backend.width, renderer.backend.height) == (800, 600)


def test_resize_same_size_is_ignored():
    app, game, _, _ = make_app()
    app.create()
    app.on_resize(EventCode.WINDOW_RESIZED, None, None, resize_context(640, 480))
    calls_before = list(game.calls)
    app.on_resize(EventCode.WINDOW_RESIZED, None, None, resize_context(640, 480))
    assert game.calls == calls_before


def test_minimize_suspends_and_restore_resumes():
    app, game, _, _ = make_app()
    app.create()
    assert app.events.fire(EventCode.WINDOW_RESIZED, None, resize_context(0, 0)) is False
    app.on_resize(EventCode.WINDOW_RESIZED, None, None, resize_context(640, 480))
    assert app.suspended is False
    assert app.on_resize(EventCode.WINDOW_RESIZED, None, None, resize_context(0, 480)) is True
    assert app.suspended is True
    assert app.framebuffer_size() == (0, 480)
    app.on_resize(EventCode.WINDOW_RESIZED, None, None, resize_context(320, 240))
    assert app.suspended is False
    assert game.calls[-1] == ("resize", 320, 240)


def test_on_resize_ignores_other_codes():
    app, _, _, _ = make_app()
    app.create()
    assert app.on_resize(EventCode.KEY_PRESSED, None, None, resize_context(5, 5)) is False
    assert app.framebuffer_size() == (0, 0)


def test_on_event_ignores_other_codes():
    app, _, _, _ = make_app()
    app.create()
    assert app.on_event(EventCode.KEY_PRESSED, None, None, EventContext()) is False
    assert app.running is True


def test_on_key_escape_fires_quit():
    app, _, _, _ = make_app()
    app.create()
    context = EventContext()
    context.set("u16", 0, Keys.ESCAPE)
    assert app.on_key(EventCode.KEY_PRESSED, None, None, context) is True
    assert app.running is False


def test_on_key_other_key_reports(capsys):
    app, _, _, _ = make_app()
    app.create()
    capsys.readouterr()
    context = EventContext()
    context.set("u16", 0, Keys.A)
    assert app.on_key(EventCode.KEY_PRESSED, None, None, context) is False
    assert "'A' key pressed in window" in capsys.readouterr().out
    assert app.on_key(EventCode.KEY_RELEASED, None, None, context) is False
    assert "'A' key released in window" in capsys.readouterr().out


def test_run_game_returns_zero_on_success():
    game = RecordingGame()
    platform = FakePlatform(frames=2)
    assert run_game(game, platform, Renderer(RendererBackend())) == 0
    assert game.calls.count("update") == 2
    assert platform.shut is True


def test_run_game_returns_one_when_creation_fails():
    game = RecordingGame()
    assert run_game(game, FakePlatform(start_ok=False), Renderer(RendererBackend())) == 1


@dataclass
class BrokenGame(Game):
    update: object = None


def test_run_game_requires_callbacks():
    platform = FakePlatform()
    assert run_game(BrokenGame(), platform, Renderer(RendererBackend())) == -2
    assert platform.started_with is None


def test_base_game_hooks_succeed():
    game = Game()
    assert game.initialize() is True
    assert game.update(0.5) is True
    assert game.render(0.5) is True
    assert game.app_config == AppConfig()