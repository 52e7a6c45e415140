"""Uniform state shared by the input adapter and the frame driver."""

import math
from dataclasses import dataclass, field
from typing import NamedTuple

from .pointer import PointerVariant

# Type for uniform values (single float or vector)
UniformValue = float | tuple[float, ...]


class Resolution(NamedTuple):
    """Drawable surface size in device pixels."""

    width: float
    height: float


@dataclass
class Pointer:
    """Pointer position plus the variant-encoded button state."""

    x: float = 0.0
    y: float = 0.0
    state: float = 0.0


@dataclass
class UniformState:
    """Mutable record of every value submitted to the shader each frame.

    One instance is owned by a harness run. The input adapter writes
    ``resolution`` and ``pointer``; the frame driver writes ``time`` and reads
    the whole record when it submits a frame.
    """

    time: float = 0.0
    resolution: Resolution | None = None
    pointer: Pointer = field(default_factory=Pointer)

    @classmethod
    def create(cls, variant: PointerVariant) -> "UniformState":
        """Create the initial state for a variant.

        Args:
            variant: Active pointer variant

        Returns:
            State with zero time, unset resolution and an idle pointer
        """
        return cls(pointer=Pointer(state=variant.policy.idle_state))

    def advance(self, delta: float) -> None:
        """Accumulate elapsed seconds into ``time``."""
        if not math.isfinite(delta) or delta < 0.0:
            raise ValueError(f"Time delta must be finite and non-negative, got {delta}")
        self.time += delta

    def as_uniforms(self, variant: PointerVariant) -> dict[str, UniformValue]:
        """Build the uniform mapping for one draw.

        Args:
            variant: Active pointer variant, decides the shape of ``u_mouse``

        Returns:
            Dictionary with ``u_time``, ``u_resolution`` and ``u_mouse``
        """
        if self.resolution is None:
            raise RuntimeError("Resolution is not known yet, resize before drawing")

        mouse: tuple[float, ...] = (self.pointer.x, self.pointer.y)
        if variant.policy.tracks_state:
            mouse += (self.pointer.state,)

        return {
            "u_time": self.time,
            "u_resolution": (self.resolution.width, self.resolution.height),
            "u_mouse": mouse,
        }
