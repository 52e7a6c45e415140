"""OpenGL context management."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import glfw
import moderngl
from loguru import logger

from .errors import GLContextError

# Avoids a direct dependency on glfw._GLFWwindow
WindowHandle = Any

PROFILES = ("core", "compatibility")


@dataclass
class GLConfig:
    """OpenGL context configuration."""

    major_version: int = 3
    minor_version: int = 3
    profile: str = "core"
    samples: int = 4
    vsync: bool = True

    def __post_init__(self) -> None:
        """Validate OpenGL version and profile."""
        if (
            self.major_version < 3
            or self.major_version > 4
            or self.minor_version < 0
            or (self.major_version == 4 and self.minor_version > 6)
            or (self.major_version == 3 and self.minor_version > 3)
        ):
            raise GLContextError(
                f"Unsupported OpenGL version: {self.major_version}.{self.minor_version}"
            )
        if self.profile not in PROFILES:
            raise GLContextError(f"Unknown OpenGL profile: {self.profile}")

    @property
    def require(self) -> int:
        """Version code as used by moderngl, e.g. 3.3 -> 330."""
        return self.major_version * 100 + self.minor_version * 10


def _apply_window_hints(cfg: GLConfig) -> None:
    glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, cfg.major_version)
    glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, cfg.minor_version)
    if cfg.profile == "core":
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, True)
    else:
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_COMPAT_PROFILE)
    glfw.window_hint(glfw.SAMPLES, cfg.samples)


@contextmanager
def create_window_context(
    size: tuple[int, int] = (800, 600),
    title: str = "fragview",
    config: GLConfig | None = None,
) -> Iterator[tuple[moderngl.Context, WindowHandle]]:
    """Create window context for real-time display.

    Args:
        size: Initial window size as (width, height)
        title: Window title
        config: OpenGL configuration

    Yields:
        Tuple of (ModernGL context, GLFW window)
    """
    if not glfw.init():
        raise GLContextError("Failed to initialize GLFW")

    window = None
    ctx = None
    try:
        cfg = config or GLConfig()
        _apply_window_hints(cfg)

        window = glfw.create_window(size[0], size[1], title, None, None)
        if not window:
            raise GLContextError("Failed to create GLFW window")

        glfw.make_context_current(window)
        glfw.swap_interval(1 if cfg.vsync else 0)

        # Close window on ESC key
        def key_callback(
            win: WindowHandle, key: int, _scancode: int, action: int, _mods: int
        ) -> None:
            if key == glfw.KEY_ESCAPE and action == glfw.PRESS:
                glfw.set_window_should_close(win, True)

        glfw.set_key_callback(window, key_callback)

        try:
            ctx = moderngl.create_context(require=cfg.require)
        except Exception as e:
            raise GLContextError(f"Failed to create OpenGL context: {e}") from e
        logger.info(
            f"OpenGL {ctx.version_code} context created ({cfg.profile} profile)"
        )
        yield ctx, window

    finally:
        if ctx is not None:
            ctx.release()
        if window:
            glfw.destroy_window(window)
        glfw.terminate()


@contextmanager
def create_standalone_context(
    *, config: GLConfig | None = None
) -> Iterator[moderngl.Context]:
    """Create standalone OpenGL context for offscreen work."""
    cfg = config or GLConfig()
    try:
        ctx = moderngl.create_context(standalone=True, require=cfg.require)
    except Exception as e:
        raise GLContextError(f"Failed to create standalone context: {e}") from e

    try:
        yield ctx
    finally:
        ctx.release()


def get_framebuffer_size(window: WindowHandle) -> tuple[int, int]:
    """Get window framebuffer size in device pixels."""
    return glfw.get_framebuffer_size(window)


def get_window_size(window: WindowHandle) -> tuple[int, int]:
    """Get window size in screen coordinates."""
    return glfw.get_window_size(window)
