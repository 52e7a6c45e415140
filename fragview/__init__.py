from fragview.clock import DeltaClock
from fragview.config import HarnessConfig
from fragview.context import GLConfig
from fragview.driver import DriverState, FrameDriver
from fragview.errors import (
    CompileOrLinkFailure,
    FragviewError,
    GLContextError,
    SourceUnavailable,
)
from fragview.harness import fetch_source, preview
from fragview.input import EventKind, InputAdapter, SurfaceBounds
from fragview.loader import load_shader_source
from fragview.pointer import MouseButton, PointerVariant
from fragview.uniforms import Pointer, Resolution, UniformState

__version__ = "0.1.0"


__all__ = [
    "CompileOrLinkFailure",
    "DeltaClock",
    "DriverState",
    "EventKind",
    "FragviewError",
    "FrameDriver",
    "GLConfig",
    "GLContextError",
    "HarnessConfig",
    "InputAdapter",
    "MouseButton",
    "Pointer",
    "PointerVariant",
    "Resolution",
    "SourceUnavailable",
    "SurfaceBounds",
    "UniformState",
    "fetch_source",
    "load_shader_source",
    "preview",
]
