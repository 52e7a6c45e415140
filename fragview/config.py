"""Harness configuration."""

from dataclasses import dataclass, field

from .context import GLConfig
from .pointer import PointerVariant


@dataclass
class HarnessConfig:
    """Settings for one preview run."""

    source: str
    variant: PointerVariant = PointerVariant.PAGE
    size: tuple[int, int] = (800, 600)
    title: str = "fragview"
    gl: GLConfig = field(default_factory=GLConfig)

    def __post_init__(self) -> None:
        """Normalize the variant and validate the initial window."""
        self.source = str(self.source)
        if not self.source:
            raise ValueError("Shader source location must not be empty")

        self.variant = PointerVariant.parse(self.variant)

        width, height = self.size
        if width <= 0 or height <= 0:
            raise ValueError(f"Window size must be positive, got {width}x{height}")
