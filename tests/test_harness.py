"""Tests for harness startup ordering and assembly."""

import asyncio
from contextlib import contextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from fragview.config import HarnessConfig
from fragview.driver import DriverState
from fragview.errors import CompileOrLinkFailure, SourceUnavailable
from fragview.harness import assemble, fetch_source, preview, run
from fragview.pointer import PointerVariant

SOURCE = "void main() { gl_FragColor = vec4(1.0); }"


@pytest.fixture
def config(tmp_path):
    return HarnessConfig(source=str(tmp_path / "shader.frag"), variant="surface")


@pytest.fixture
def window_mocks():
    """Patch GLFW queries used while assembling the harness."""
    with (
        patch("fragview.window.glfw") as mock_glfw,
        patch("fragview.window.get_framebuffer_size", return_value=(1600, 1200)),
        patch("fragview.window.get_window_size", return_value=(800, 600)),
    ):
        yield mock_glfw


class TestPreview:
    """Startup ordering of preview()."""

    def test_missing_source_aborts_startup(self, config):
        """Test nothing is constructed when the source cannot be loaded."""
        with (
            patch("fragview.harness.create_window_context") as mock_window,
            patch("fragview.harness.UniformState") as mock_state,
            patch("fragview.harness.FrameDriver") as mock_driver,
        ):
            with pytest.raises(SourceUnavailable):
                preview(config)

        mock_window.assert_not_called()
        mock_state.assert_not_called()
        mock_state.create.assert_not_called()
        mock_driver.assert_not_called()

    def test_load_completes_before_window(self, config):
        events = []

        async def fake_load(location):
            events.append(("load", location))
            return SOURCE

        @contextmanager
        def fake_window(size, title, gl):
            events.append(("window", size))
            yield MagicMock(name="ctx"), MagicMock(name="window")
            events.append(("closed", size))

        harness = MagicMock()
        harness.driver.start.side_effect = lambda: events.append(("start",))
        harness.scheduler.run.side_effect = lambda: events.append(("run",))

        with (
            patch("fragview.harness.load_shader_source", side_effect=fake_load),
            patch("fragview.harness.create_window_context", side_effect=fake_window),
            patch("fragview.harness.assemble", return_value=harness) as mock_assemble,
        ):
            preview(config)

        assert events == [
            ("load", config.source),
            ("window", (800, 600)),
            ("start",),
            ("run",),
            ("closed", (800, 600)),
        ]
        assert mock_assemble.call_args[0][2] == SOURCE
        harness.program.__exit__.assert_called_once()

    def test_frame_loop_runs_without_event_loop(self, config):
        """Test the blocking window loop does not hold an event loop."""
        loops = []

        def record_loop():
            try:
                loops.append(asyncio.get_running_loop())
            except RuntimeError:
                loops.append(None)

        harness = MagicMock()
        harness.scheduler.run.side_effect = record_loop

        with (
            patch("fragview.harness.load_shader_source", new_callable=AsyncMock) as mock_load,
            patch("fragview.harness.create_window_context") as mock_window,
            patch("fragview.harness.assemble", return_value=harness),
        ):
            mock_load.return_value = SOURCE
            mock_window.return_value.__enter__.return_value = (MagicMock(), MagicMock())
            preview(config)

        mock_load.assert_awaited_once_with(config.source)
        assert loops == [None]

    def test_program_released_when_loop_fails(self, config):
        harness = MagicMock()
        harness.scheduler.run.side_effect = RuntimeError("swap failed")

        with (
            patch("fragview.harness.create_window_context") as mock_window,
            patch("fragview.harness.assemble", return_value=harness),
        ):
            mock_window.return_value.__enter__.return_value = (MagicMock(), MagicMock())
            with pytest.raises(RuntimeError, match="swap failed"):
                run(config, SOURCE)

        harness.program.__exit__.assert_called_once()

    @pytest.mark.asyncio
    async def test_fetch_source_reraises(self, config):
        with pytest.raises(SourceUnavailable):
            await fetch_source(config)


class TestAssemble:
    """Pipeline assembly for an open window."""

    def test_resolution_known_before_start(self, config, window_mocks):
        with patch("fragview.harness.QuadProgram") as mock_program:
            harness = assemble(MagicMock(), MagicMock(), SOURCE, config)

        mock_program.assert_called_once()
        assert harness.uniforms.resolution == (1600.0, 1200.0)
        assert harness.uniforms.time == 0.0
        assert harness.uniforms.pointer.state == -1.0
        assert harness.adapter.variant is PointerVariant.SURFACE
        assert harness.driver.state is DriverState.IDLE
        assert harness.driver.uniforms is harness.uniforms
        assert harness.driver.submit == harness.program.draw

    def test_first_tick_draws_current_state(self, config, window_mocks):
        with patch("fragview.harness.QuadProgram"):
            harness = assemble(MagicMock(), MagicMock(), SOURCE, config)

        harness.driver.start()
        harness.adapter.resize(1024, 768)
        harness.scheduler._pending()

        harness.program.draw.assert_called_once_with(harness.uniforms)
        assert harness.uniforms.resolution == (1024.0, 768.0)
        assert harness.driver.frames == 1

    def test_compile_failure_builds_no_state(self, config, window_mocks):
        with (
            patch(
                "fragview.harness.QuadProgram",
                side_effect=CompileOrLinkFailure("error: syntax error"),
            ),
            patch("fragview.harness.UniformState") as mock_state,
        ):
            with pytest.raises(CompileOrLinkFailure):
                assemble(MagicMock(), MagicMock(), SOURCE, config)

        mock_state.create.assert_not_called()
