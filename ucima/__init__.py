"""A small game engine core: events, input, memory accounting, clock, a pygame window and a renderer loop."""

__version__ = "0.1.0"

__all__ = [
    "application",
    "clock",
    "darray",
    "event",
    "input",
    "logger",
    "memory",
    "platform",
    "renderer",
    "testapp",
    "vk_result",
]