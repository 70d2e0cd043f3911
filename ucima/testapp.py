"""A minimal game that opens a window and runs the engine loop."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from .application import AppConfig, Game, run_game
from .memory import MemoryCategory, MemoryTracker

APP_NAME = "Ucima engine Test app"

_GAME_STATE_SIZE = 4


@dataclass
class GameState:
    """Per-game state kept between frames."""

    delta_time: float = 0.0


@dataclass
class TestGame(Game):
    """A game that accepts every frame and remembers the last frame time."""

    __test__ = False

    def initialize(self) -> bool:
        return True

    def update(self, delta_time: float) -> bool:
        if isinstance(self.state, GameState):
            self.state.delta_time = delta_time
        return True


def create_game(memory: MemoryTracker) -> TestGame:
    """Build the test game, accounting its state as GAME memory."""
    config = AppConfig(
        start_pos_x=1920 // 2,
        start_pos_y=1080 // 2,
        start_width=900,
        start_height=800,
        name=APP_NAME,
    )
    memory.allocate(_GAME_STATE_SIZE, MemoryCategory.GAME)
    return TestGame(app_config=config, state=GameState(), memory=memory)


def main(argv: list[str] | None = None) -> int:
    """Run the test game; returns the process exit code."""
    parser = argparse.ArgumentParser(prog="ucima-testapp", description="Run the engine test game.")
    parser.parse_args(argv)
    memory = MemoryTracker()
    game = create_game(memory)
    return run_game(game)


if __name__ == "__main__":
    raise SystemExit(main())