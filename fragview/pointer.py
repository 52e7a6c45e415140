"""Pointer-encoding policies.

A harness runs with exactly one pointer variant. The variant decides how a
pointer position is mapped and how button transitions are folded into the
single ``state`` scalar the shader receives through ``u_mouse``.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class MouseButton(IntEnum):
    """Mouse buttons, numbered like GLFW."""

    PRIMARY = 0
    SECONDARY = 1
    MIDDLE = 2


@dataclass(frozen=True)
class PointerPolicy:
    """How one variant maps positions and encodes button state."""

    surface_relative: bool
    invert_y: bool
    idle_state: float
    press_state: float | None
    release_state: float | None
    leave_state: float | None
    tracks_state: bool

    @property
    def sentinels(self) -> frozenset[float]:
        """Every value ``pointer.state`` may hold under this policy."""
        values = (self.idle_state, self.press_state, self.release_state, self.leave_state)
        return frozenset(v for v in values if v is not None)

    @property
    def mouse_components(self) -> int:
        """Number of components in ``u_mouse`` (vec3 with state, vec2 without)."""
        return 3 if self.tracks_state else 2


_POLICIES: dict[str, PointerPolicy] = {
    # Page-anchored, edge-triggered
    "page": PointerPolicy(
        surface_relative=False,
        invert_y=False,
        idle_state=-1.0,
        press_state=1.0,
        release_state=0.0,
        leave_state=None,
        tracks_state=True,
    ),
    # Element-anchored, inverted y, tri-state
    "surface": PointerPolicy(
        surface_relative=True,
        invert_y=True,
        idle_state=-1.0,
        press_state=0.0,
        release_state=-1.0,
        leave_state=-1.0,
        tracks_state=True,
    ),
    # Position only
    "position": PointerPolicy(
        surface_relative=False,
        invert_y=False,
        idle_state=0.0,
        press_state=None,
        release_state=None,
        leave_state=None,
        tracks_state=False,
    ),
}

_LETTERS = {"a": "page", "b": "surface", "c": "position"}


class PointerVariant(str, Enum):
    """Pointer-encoding variant selected at configuration time."""

    PAGE = "page"
    SURFACE = "surface"
    POSITION = "position"

    @classmethod
    def parse(cls, name: "str | PointerVariant") -> "PointerVariant":
        """Resolve a variant from its value, member name or letter (A/B/C).

        Args:
            name: Variant identifier, case-insensitive

        Returns:
            Matching variant

        Raises:
            ValueError: If the name matches no variant
        """
        if isinstance(name, cls):
            return name

        key = str(name).strip().lower()
        key = _LETTERS.get(key, key)
        for member in cls:
            if key == member.value:
                return member

        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown pointer variant: {name!r} (expected one of {choices})")

    @property
    def policy(self) -> PointerPolicy:
        return _POLICIES[self.value]

    def __str__(self) -> str:
        return self.value
