"""Preview harness: load the source, build the pipeline, run the loop.

Startup is strictly ordered. The shader source is awaited first; only once
it is available is a window opened and the program compiled. The uniform
state is created after the program, resized synchronously, and only then is
the frame driver started.
"""

import asyncio
from dataclasses import dataclass

import moderngl
from loguru import logger

from .config import HarnessConfig
from .context import WindowHandle, create_window_context
from .driver import FrameDriver
from .errors import SourceUnavailable
from .input import InputAdapter
from .loader import load_shader_source
from .program import QuadProgram
from .uniforms import UniformState
from .window import GlfwEventSource, GlfwScheduler


@dataclass
class Harness:
    """Everything one preview run owns."""

    uniforms: UniformState
    adapter: InputAdapter
    program: QuadProgram
    scheduler: GlfwScheduler
    driver: FrameDriver


def assemble(
    ctx: moderngl.Context,
    window: WindowHandle,
    source: str,
    config: HarnessConfig,
) -> Harness:
    """Build the draw pipeline and wire input for an open window.

    Args:
        ctx: ModernGL context of the window
        window: GLFW window
        source: Loaded fragment shader source
        config: Harness configuration

    Returns:
        Assembled harness, with the driver still idle
    """
    program = QuadProgram(ctx, source, config.variant)

    uniforms = UniformState.create(config.variant)
    adapter = InputAdapter(uniforms, config.variant)

    events = GlfwEventSource(window)
    events.subscribe(adapter.subscriptions())
    events.sync()

    scheduler = GlfwScheduler(window)
    driver = FrameDriver(uniforms, program.draw, scheduler)
    return Harness(
        uniforms=uniforms,
        adapter=adapter,
        program=program,
        scheduler=scheduler,
        driver=driver,
    )


async def fetch_source(config: HarnessConfig) -> str:
    """Await the shader source named by the configuration.

    Raises:
        SourceUnavailable: If the shader source cannot be retrieved
    """
    try:
        return await load_shader_source(config.source)
    except SourceUnavailable as e:
        logger.error(f"Could not load shader source: {e.reason}")
        raise


def run(config: HarnessConfig, source: str) -> None:
    """Open the window and run the frame loop until it closes.

    Raises:
        CompileOrLinkFailure: If the shader does not compile or link
        GLContextError: If no window or context can be created
    """
    with create_window_context(config.size, config.title, config.gl) as (ctx, window):
        harness = assemble(ctx, window, source, config)
        logger.info(
            f"Running {config.source} with '{config.variant.value}' pointer variant "
            "(press ESC to exit)"
        )
        with harness.program:
            harness.driver.start()
            harness.scheduler.run()


def preview(config: HarnessConfig) -> None:
    """Load the shader, then run the preview.

    Only the load runs on an event loop; the window loop runs after it
    has finished.
    """
    source = asyncio.run(fetch_source(config))
    run(config, source)
