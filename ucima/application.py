"""Application lifecycle: game interface, main loop and window event handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .clock import Clock
from .event import EventCode, EventContext, EventSystem
from .input import InputSystem, Keys
from .logger import trace_debug, trace_error, trace_info
from .memory import MemoryTracker
from .platform import Platform, get_clock_time, sleep_ms
from .renderer import RenderPacket, Renderer, RendererBackend

TARGET_FRAME_SECONDS = 1.0 / 60

GAME_CALLBACKS = ("render", "update", "initialize", "on_resize")


class ApplicationError(RuntimeError):
    """Raised when the application cannot be created or run."""


@dataclass
class AppConfig:
    """Initial window placement and title."""

    start_pos_x: int = 0
    start_pos_y: int = 0
    start_width: int = 0
    start_height: int = 0
    name: str = ""


@dataclass
class Game:
    """A game driven by the application; subclasses override the hooks."""

    app_config: AppConfig = field(default_factory=AppConfig)
    state: Any = None
    memory: MemoryTracker | None = None
    last_render_delta: float = 0.0
    window_width: int = 0
    window_height: int = 0

    def initialize(self) -> bool:
        return True

    def update(self, delta_time: float) -> bool:
        return True

    def render(self, delta_time: float) -> bool:
        """Record the frame time of the latest render and accept the frame."""
        self.last_render_delta = delta_time
        return True

    def on_resize(self, width: int, height: int) -> None:
        """Remember the size the window was last given."""
        self.window_width = width
        self.window_height = height


class Application:
    """Owns the subsystems and runs the game until it is asked to quit."""

    limit_frames = False

    def __init__(
        self,
        game: Game,
        platform: Any = None,
        renderer: Renderer | None = None,
        memory: MemoryTracker | None = None,
    ) -> None:
        self.game = game
        self.platform = platform if platform is not None else Platform()
        self.renderer = renderer if renderer is not None else Renderer(RendererBackend())
        self.memory = memory if memory is not None else MemoryTracker()
        self.events: EventSystem | None = None
        self.input: InputSystem | None = None
        self.running = False
        self.suspended = False
        self.width = 0
        self.height = 0
        self.clock = Clock(get_clock_time)
        self.last_time = 0.0
        self.frame_count = 0
        self._created = False

    def create(self) -> None:
        """Start every subsystem and initialize the game."""
        if self._created:
            trace_error("Can't call application more then once")
            raise ApplicationError("application has already been created")

        self.events = EventSystem()
        self.input = InputSystem(self.events)
        self.running = True
        self.suspended = False

        self.platform.events = self.events
        self.platform.input = self.input

        config = self.game.app_config
        if not self.platform.start_up(
            config.name,
            config.start_pos_x,
            config.start_pos_y,
            config.start_width,
            config.start_height,
        ):
            raise ApplicationError("Failed to start platform")

        if not self.renderer.initialize(config.name, self.platform):
            trace_error("Failed to initialize renderer")
            raise ApplicationError("Failed to initialize renderer")

        self.events.register(EventCode.APPLICATION_QUIT, None, self.on_event)
        self.events.register(EventCode.KEY_PRESSED, None, self.on_event)
        self.events.register(EventCode.KEY_RELEASED, None, self.on_event)
        self.events.register(EventCode.WINDOW_RESIZED, None, self.on_resize)

        if not self.game.initialize():
            trace_error("Failed to initialize game")
            raise ApplicationError("Failed to initialize game")

        self.game.on_resize(self.width, self.height)
        self._created = True

    def run(self) -> bool:
        """Run the main loop until quit, then shut every subsystem down."""
        if not self._created or self.events is None or self.input is None:
            raise ApplicationError("application must be created before it runs")

        self.clock.start()
        self.clock.update()
        self.last_time = self.clock.elapsed
        running_time = 0.0

        trace_info("%s", self.memory.usage_report())
        while self.running:
            if not self.platform.poll_events():
                self.running = False

            if self.suspended:
                continue

            self.clock.update()
            current_time = self.clock.elapsed
            delta = current_time - self.last_time
            frame_start = get_clock_time()

            if not self.game.update(delta):
                trace_error("Failed to update game. Shutting down :(")
                self.running = False
                break

            if not self.game.render(delta):
                trace_error("Failed to render game. Shutting down :(")
                self.running = False
                break

            self.renderer.draw_frame(RenderPacket(delta_time=delta))

            frame_elapsed = get_clock_time() - frame_start
            running_time += frame_elapsed
            remaining = TARGET_FRAME_SECONDS - frame_elapsed
            if remaining > 0:
                remaining_ms = int(remaining * 1000)
                if remaining_ms > 0 and self.limit_frames:
                    sleep_ms(remaining_ms - 1)
                self.frame_count += 1

            # Input state is copied only after everything for this frame was recorded.
            self.input.update(delta)
            self.last_time = current_time

        self.running = False
        self.events.unregister(EventCode.APPLICATION_QUIT, None, self.on_event)
        self.events.unregister(EventCode.KEY_PRESSED, None, self.on_event)
        self.events.unregister(EventCode.KEY_RELEASED, None, self.on_event)
        self.events.shutdown()
        self.input.shutdown()
        self.renderer.shutdown()
        self.platform.shut_down()
        return True

    def framebuffer_size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def on_event(self, code: int, sender: Any, listener: Any, context: EventContext) -> bool:
        if code == EventCode.APPLICATION_QUIT:
            trace_info("Quit event recieved")
            self.running = False
            return True
        return False

    def on_key(self, code: int, sender: Any, listener: Any, context: EventContext) -> bool:
        if code == EventCode.KEY_PRESSED:
            key_code = context.get("u16", 0)
            if key_code == Keys.ESCAPE:
                if self.events is not None:
                    self.events.fire(EventCode.APPLICATION_QUIT, None, EventContext())
                return True
            trace_info("'%c' key pressed in window", key_code)
        elif code == EventCode.KEY_RELEASED:
            key_code = context.get("u16", 0)
            trace_info("'%c' key released in window", key_code)
        return False

    def on_resize(self, code: int, sender: Any, listener: Any, context: EventContext) -> bool:
        if code != EventCode.WINDOW_RESIZED:
            return False
        width = context.get("u16", 0)
        height = context.get("u16", 1)
        if width == self.width and height == self.height:
            return False

        self.width = width
        self.height = height
        trace_debug("Window resized: %i, %i", width, height)
        if width == 0 or height == 0:
            trace_info("Window minimized, suspending application")
            self.suspended = True
            return True

        if self.suspended:
            trace_info("Window restored, resuming application")
            self.suspended = False
        self.game.on_resize(width, height)
        self.renderer.on_resize(width, height)
        return False


def run_game(game: Game, platform: Any = None, renderer: Renderer | None = None) -> int:
    """Create and run an application for a game; returns a process exit code."""
    missing = [name for name in GAME_CALLBACKS if not callable(getattr(game, name, None))]
    if missing:
        trace_error("The game function pointers must be assigned")
        return -2

    app = Application(game, platform, renderer, game.memory)
    try:
        app.create()
    except ApplicationError:
        trace_error("Failed to create application")
        return 1

    if not app.run():
        trace_error("Failed to run application")
        return 2
    return 0