"""Renderer front end, backend interface and backend registry."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable

from .logger import trace_error, trace_warn


class RendererBackendType(enum.IntEnum):
    VULKAN = 0
    OPENGL = 1
    DIRECTX = 2
    METAL = 3


@dataclass
class RenderPacket:
    """Per-frame data handed to the renderer."""

    delta_time: float = 0.0


class RendererBackend:
    """A backend that draws nothing; concrete backends override its hooks.

    It tracks initialization, the framebuffer size and whether a frame is open.
    """

    def __init__(self, platform: Any = None) -> None:
        self.platform = platform
        self.frame_number = 0
        self.app_name: str | None = None
        self.width = 0
        self.height = 0
        self.initialized = False
        self.in_frame = False

    def initialize(self, app_name: str, platform: Any) -> bool:
        self.app_name = app_name
        self.platform = platform
        self.initialized = True
        return True

    def shutdown(self) -> None:
        self.initialized = False
        self.in_frame = False

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def begin_frame(self, delta_time: float) -> bool:
        if not self.initialized:
            return False
        self.in_frame = True
        return True

    def end_frame(self, delta_time: float) -> bool:
        if not self.in_frame:
            return False
        self.in_frame = False
        return True


BackendFactory = Callable[[Any], RendererBackend]

_BACKEND_FACTORIES: dict[RendererBackendType, BackendFactory] = {}


def register_backend(backend_type: RendererBackendType, factory: BackendFactory | None) -> None:
    """Make a backend type available; passing None removes it."""
    backend_type = RendererBackendType(backend_type)
    if factory is None:
        _BACKEND_FACTORIES.pop(backend_type, None)
    else:
        _BACKEND_FACTORIES[backend_type] = factory


def create_backend(backend_type: RendererBackendType, platform: Any) -> RendererBackend:
    """Build a backend of the given type bound to a platform."""
    try:
        factory = _BACKEND_FACTORIES[RendererBackendType(backend_type)]
    except (KeyError, ValueError):
        trace_error("Unknown renderer backend")
        raise ValueError(f"unknown renderer backend: {backend_type!r}") from None
    backend = factory(platform)
    backend.platform = platform
    return backend


class Renderer:
    """Front end that drives a backend frame by frame."""

    def __init__(self, backend: RendererBackend | None = None) -> None:
        self.backend = backend

    def _require_backend(self) -> RendererBackend:
        if self.backend is None:
            raise RuntimeError("renderer has no backend")
        return self.backend

    def initialize(self, app_name: str, platform: Any) -> bool:
        """Set up the backend; a failing backend is reported but not fatal."""
        if self.backend is None:
            self.backend = create_backend(RendererBackendType.VULKAN, platform)
        self.backend.platform = platform
        self.backend.frame_number = 0
        if not self.backend.initialize(app_name, platform):
            trace_error("Failed to init renderer backend")
        return True

    def shutdown(self) -> None:
        self._require_backend().shutdown()
        self.backend = None

    def begin_frame(self, delta_time: float) -> bool:
        return self._require_backend().begin_frame(delta_time)

    def end_frame(self, delta_time: float) -> bool:
        backend = self._require_backend()
        result = backend.end_frame(delta_time)
        backend.frame_number += 1
        return result

    def on_resize(self, width: int, height: int) -> None:
        if self.backend is not None:
            self.backend.resize(width, height)
        else:
            trace_warn("Renderer backend doesn't exist to accept resize")

    def draw_frame(self, packet: RenderPacket) -> bool:
        """Render one frame; False only when an opened frame fails to end."""
        if self.begin_frame(packet.delta_time):
            if not self.end_frame(packet.delta_time):
                trace_error("Failed to call RendererEndFrame")
                return False
        return True