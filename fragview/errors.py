"""Exceptions raised by the preview harness."""


class FragviewError(Exception):
    """Base class for all harness errors."""


class SourceUnavailable(FragviewError):
    """Shader source could not be retrieved from its location.

    Raised by the loader before any draw pipeline exists. Startup is aborted
    and the load is never retried.
    """

    def __init__(self, location: str, reason: str):
        super().__init__(f"Shader source unavailable at {location!r}: {reason}")
        self.location = location
        self.reason = reason


class CompileOrLinkFailure(FragviewError):
    """The GPU library rejected the shader program."""

    def __init__(self, log: str):
        super().__init__(f"Failed to compile or link shader program:\n{log}")
        self.log = log


class GLContextError(FragviewError):
    """OpenGL context or window error."""
