"""Command line interface for fragview.

This module provides a command-line interface for previewing fragment shaders
in a window and for checking that a shader compiles against the harness.
"""

import asyncio
import sys
from collections.abc import Callable
from typing import Any, TypeVar, cast

import typer
from loguru import logger

from fragview.config import HarnessConfig
from fragview.context import GLConfig, create_standalone_context
from fragview.errors import CompileOrLinkFailure, GLContextError, SourceUnavailable
from fragview.harness import preview
from fragview.loader import load_shader_source
from fragview.pointer import PointerVariant
from fragview.program import QuadProgram

# Define type variables for TypedCallable
F = TypeVar("F", bound=Callable[..., Any])

HARNESS_UNIFORMS = ("u_time", "u_resolution", "u_mouse")

FATAL_ERRORS = (SourceUnavailable, CompileOrLinkFailure, GLContextError)


# TypedCommand decorator helper
def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="fragview",
    help=(
        "Preview GLSL fragment shaders with live time, resolution and mouse "
        "uniforms. Commands: show, check."
    ),
    add_completion=False,
)


@app.callback()
def main(
    log_level: str = typer.Option(
        "INFO", "--log-level", "-l", help="Log level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    # No docstring: it would replace the app help text
    logger.remove()
    try:
        logger.add(sys.stderr, level=log_level.upper())
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


def _parse_variant(name: str) -> PointerVariant:
    try:
        return PointerVariant.parse(name)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--variant") from e


def _parse_gl_config(version: str, profile: str, vsync: bool = True) -> GLConfig:
    """Build a GL configuration from CLI strings.

    Args:
        version: OpenGL version as "major.minor"
        profile: OpenGL profile ("core" or "compatibility")
        vsync: Whether to sync buffer swaps to the display

    Returns:
        Validated GL configuration
    """
    try:
        major, minor = (int(part) for part in version.split("."))
    except ValueError as e:
        raise typer.BadParameter(
            f"Expected MAJOR.MINOR, got {version!r}", param_hint="--gl-version"
        ) from e

    try:
        return GLConfig(
            major_version=major, minor_version=minor, profile=profile, vsync=vsync
        )
    except GLContextError as e:
        raise typer.BadParameter(str(e)) from e


VARIANT_OPTION = typer.Option(
    "page",
    "--variant",
    "-v",
    help="Pointer encoding: page (A), surface (B) or position (C)",
)
GL_VERSION_OPTION = typer.Option("3.3", "--gl-version", help="OpenGL version")
PROFILE_OPTION = typer.Option(
    "core", "--profile", help="OpenGL profile (core, compatibility)"
)


@typed_command(app.command("show"))
def show_shader(
    source: str = typer.Argument(..., help="Fragment shader path or URL"),
    variant: str = VARIANT_OPTION,
    width: int = typer.Option(800, "--width", "-w", help="Window width"),
    height: int = typer.Option(600, "--height", "-h", help="Window height"),
    title: str = typer.Option("", "--title", help="Window title"),
    gl_version: str = GL_VERSION_OPTION,
    profile: str = PROFILE_OPTION,
    vsync: bool = typer.Option(True, "--vsync/--no-vsync", help="Sync to display"),
) -> None:
    """Display shader in an interactive window.

    The shader runs in realtime with u_time, u_resolution and u_mouse kept
    current. Close the window or press ESC to exit.

    Example: fragview show shaders/box.frag --variant surface
    """
    try:
        config = HarnessConfig(
            source=source,
            variant=_parse_variant(variant),
            size=(width, height),
            title=title or f"fragview - {source}",
            gl=_parse_gl_config(gl_version, profile, vsync),
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    try:
        preview(config)
    except FATAL_ERRORS as e:
        logger.error(str(e))
        raise typer.Exit(1) from e
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, stopping...")


@typed_command(app.command("check"))
def check_shader(
    source: str = typer.Argument(..., help="Fragment shader path or URL"),
    variant: str = VARIANT_OPTION,
    gl_version: str = GL_VERSION_OPTION,
    profile: str = PROFILE_OPTION,
) -> None:
    """Compile a shader offscreen and list its active uniforms.

    Example: fragview check shaders/box.frag
    """
    pointer_variant = _parse_variant(variant)
    gl_config = _parse_gl_config(gl_version, profile)

    try:
        text = asyncio.run(load_shader_source(source))
        with create_standalone_context(config=gl_config) as ctx:
            with QuadProgram(ctx, text, pointer_variant) as program:
                names = program.uniform_names
    except FATAL_ERRORS as e:
        logger.error(str(e))
        raise typer.Exit(1) from e

    for name in names:
        typer.echo(name)

    unknown = [name for name in names if name not in HARNESS_UNIFORMS]
    if unknown:
        logger.warning(f"Uniforms never supplied by the harness: {unknown}")
    logger.info(f"✓ {source} compiles")


if __name__ == "__main__":
    app()
