"""GLFW event wiring and display-refresh scheduling."""

import time as time_module
from collections.abc import Callable, Mapping

import glfw
from loguru import logger

from .context import WindowHandle, get_framebuffer_size, get_window_size
from .input import EventKind, Handler, SurfaceBounds


class GlfwEventSource:
    """Routes GLFW window callbacks to subscribed handlers."""

    def __init__(self, window: WindowHandle):
        self.window = window
        self.handlers: dict[EventKind, Handler] = {}

    def subscribe(self, subscriptions: Mapping[EventKind, Handler]) -> None:
        """Register GLFW callbacks for every subscribed event kind.

        Args:
            subscriptions: Event kind to handler mapping, usually
                ``InputAdapter.subscriptions()``
        """
        self.handlers.update(subscriptions)
        kinds = set(self.handlers)

        if EventKind.RESIZE in kinds:
            glfw.set_framebuffer_size_callback(self.window, self._on_framebuffer_size)
        if EventKind.POINTER_MOVE in kinds:
            glfw.set_cursor_pos_callback(self.window, self._on_cursor_pos)
        if kinds & {EventKind.POINTER_DOWN, EventKind.POINTER_UP}:
            glfw.set_mouse_button_callback(self.window, self._on_mouse_button)
        if EventKind.POINTER_LEAVE in kinds:
            glfw.set_cursor_enter_callback(self.window, self._on_cursor_enter)

        logger.debug(f"Subscribed to {sorted(k.name for k in kinds)}")

    def sync(self) -> None:
        """Dispatch one resize with the current sizes, synchronously."""
        width, height = get_framebuffer_size(self.window)
        self._dispatch_resize(width, height)

    def _dispatch_resize(self, width: int, height: int) -> None:
        handler = self.handlers.get(EventKind.RESIZE)
        if handler is None:
            return
        win_width, win_height = get_window_size(self.window)
        handler(width, height, SurfaceBounds(0.0, 0.0, float(win_width), float(win_height)))

    def _on_framebuffer_size(self, _window: WindowHandle, width: int, height: int) -> None:
        self._dispatch_resize(width, height)

    def _on_cursor_pos(self, _window: WindowHandle, xpos: float, ypos: float) -> None:
        self.handlers[EventKind.POINTER_MOVE](xpos, ypos)

    def _on_mouse_button(
        self, _window: WindowHandle, button: int, action: int, _mods: int
    ) -> None:
        if action == glfw.PRESS:
            handler = self.handlers.get(EventKind.POINTER_DOWN)
        elif action == glfw.RELEASE:
            handler = self.handlers.get(EventKind.POINTER_UP)
        else:
            return
        if handler is not None:
            handler(button)

    def _on_cursor_enter(self, _window: WindowHandle, entered: int) -> None:
        if not entered:
            self.handlers[EventKind.POINTER_LEAVE]()


class GlfwScheduler:
    """Calls back once per display refresh until the window closes.

    Events are polled before each callback, so input arriving before a
    frame's draw is visible in that frame. Buffers are swapped after the
    callback; with vsync enabled this paces the loop to the display.
    """

    def __init__(self, window: WindowHandle):
        self.window = window
        self._pending: Callable[[], None] | None = None

    def request_frame(self, callback: Callable[[], None]) -> None:
        self._pending = callback

    def stop(self) -> None:
        self._pending = None

    def run(self) -> None:
        """Run until the window closes or no frame is requested."""
        frame_count, fps_timer = 0, time_module.perf_counter()

        while self._pending is not None and not glfw.window_should_close(self.window):
            glfw.poll_events()
            if self._pending is None:
                break

            callback, self._pending = self._pending, None
            callback()
            glfw.swap_buffers(self.window)

            # FPS measurement
            frame_count += 1
            current_time = time_module.perf_counter()
            if current_time - fps_timer >= 1.0:
                measured_fps = frame_count / (current_time - fps_timer)
                logger.debug(f"FPS: {measured_fps:.2f}")
                frame_count, fps_timer = 0, current_time

        logger.info("Frame loop stopped")
