"""Input adapter: translates window events into uniform state updates."""

from collections.abc import Callable
from enum import Enum, auto
from typing import NamedTuple

from loguru import logger

from .pointer import MouseButton, PointerVariant
from .uniforms import Resolution, UniformState


class EventKind(Enum):
    """Host events the adapter can subscribe to."""

    RESIZE = auto()
    POINTER_MOVE = auto()
    POINTER_DOWN = auto()
    POINTER_UP = auto()
    POINTER_LEAVE = auto()


class SurfaceBounds(NamedTuple):
    """Bounding box of the render surface in pointer coordinates."""

    left: float
    top: float
    width: float
    height: float


Handler = Callable[..., None]


class InputAdapter:
    """Keeps ``UniformState`` in sync with resize and pointer events.

    Handlers never fail and never clamp: whatever the host reports is
    written through as-is.
    """

    def __init__(self, uniforms: UniformState, variant: PointerVariant):
        """Initialize adapter.

        Args:
            uniforms: State record shared with the frame driver
            variant: Pointer-encoding variant
        """
        self.uniforms = uniforms
        self.variant = variant
        self.policy = variant.policy
        self.bounds: SurfaceBounds | None = None

    def resize(
        self, width: float, height: float, bounds: SurfaceBounds | None = None
    ) -> None:
        """Record a new drawable size.

        Args:
            width: Drawable width in device pixels
            height: Drawable height in device pixels
            bounds: Surface bounds in pointer coordinates; defaults to the
                drawable size anchored at the origin
        """
        self.uniforms.resolution = Resolution(float(width), float(height))
        if bounds is None:
            bounds = SurfaceBounds(0.0, 0.0, float(width), float(height))
        self.bounds = bounds
        logger.debug(f"Resolution set to {width}x{height}")

    def pointer_move(self, x: float, y: float) -> None:
        pointer = self.uniforms.pointer
        if self.policy.surface_relative and self.bounds is not None:
            x -= self.bounds.left
            y -= self.bounds.top
            if self.policy.invert_y:
                y = self.bounds.height - y

        pointer.x = float(x)
        pointer.y = float(y)

    def pointer_down(self, button: int) -> None:
        # Only the primary button is encoded
        if button != MouseButton.PRIMARY or self.policy.press_state is None:
            return
        self.uniforms.pointer.state = self.policy.press_state

    def pointer_up(self, button: int) -> None:
        if button != MouseButton.PRIMARY or self.policy.release_state is None:
            return
        self.uniforms.pointer.state = self.policy.release_state

    def pointer_leave(self) -> None:
        if self.policy.leave_state is None:
            return
        self.uniforms.pointer.state = self.policy.leave_state

    def subscriptions(self) -> dict[EventKind, Handler]:
        """Map the events this variant listens to onto their handlers.

        Returns:
            Dictionary to pass to an event source's ``subscribe``
        """
        handlers: dict[EventKind, Handler] = {
            EventKind.RESIZE: self.resize,
            EventKind.POINTER_MOVE: self.pointer_move,
        }
        if self.policy.tracks_state:
            handlers[EventKind.POINTER_DOWN] = self.pointer_down
            handlers[EventKind.POINTER_UP] = self.pointer_up
        if self.policy.leave_state is not None:
            handlers[EventKind.POINTER_LEAVE] = self.pointer_leave
        return handlers
