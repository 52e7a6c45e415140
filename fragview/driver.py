"""Frame driver: advances time and submits one draw per display refresh."""

from collections.abc import Callable
from enum import Enum, auto
from typing import Protocol

from loguru import logger

from .clock import DeltaClock
from .uniforms import UniformState


class DriverState(Enum):
    IDLE = auto()
    RUNNING = auto()


class FrameScheduler(Protocol):
    """Something that calls back on the next visual refresh."""

    def request_frame(self, callback: Callable[[], None]) -> None:
        ...


class FrameDriver:
    """Runs the render loop over a shared ``UniformState``.

    Each tick queries the delta clock, adds the delta to ``uniforms.time``,
    submits the uniforms for one draw and requests the next refresh.
    Input mutations made before ``submit`` is called are visible in that
    frame; later ones show up in the next.
    """

    def __init__(
        self,
        uniforms: UniformState,
        submit: Callable[[UniformState], None],
        scheduler: FrameScheduler,
        clock: DeltaClock | None = None,
    ):
        """Initialize driver.

        Args:
            uniforms: State record read at every submission
            submit: Draw call, receives the current uniforms
            scheduler: Source of display-refresh callbacks
            clock: Delta clock, a new ``DeltaClock`` by default
        """
        self.uniforms = uniforms
        self.submit = submit
        self.scheduler = scheduler
        self.clock = clock or DeltaClock()
        self.state = DriverState.IDLE
        self.frames = 0

    def start(self) -> None:
        """Enter the running state and schedule the first tick."""
        if self.state is DriverState.RUNNING:
            raise RuntimeError("Frame driver is already running")
        if self.uniforms.resolution is None:
            raise RuntimeError("Resolution must be set before the first frame")

        self.state = DriverState.RUNNING
        logger.info("Frame loop started")
        self.scheduler.request_frame(self.tick)

    def tick(self) -> None:
        """Advance time, draw one frame and schedule the next tick."""
        if self.state is not DriverState.RUNNING:
            raise RuntimeError("Frame driver is not running")

        delta = self.clock.get_delta()
        self.uniforms.advance(delta)
        self.submit(self.uniforms)
        self.frames += 1
        self.scheduler.request_frame(self.tick)
