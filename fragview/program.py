"""Full-screen quad program: source preparation, compilation and drawing."""

import re

import moderngl
import numpy as np
from loguru import logger

from .errors import CompileOrLinkFailure
from .pointer import PointerVariant
from .uniforms import UniformState, UniformValue

# Prefix for sources written against WebGL 1 (no #version directive)
LEGACY_HEADER = "#version 330 core\nout vec4 fragColor;\n"

_VERSION_RE = re.compile(r"^[ \t]*#[ \t]*version[ \t]+(\d+)([ \t]+\w+)?", re.MULTILINE)

_LEGACY_REWRITES = [
    (re.compile(r"\bgl_FragColor\b"), "fragColor"),
    (re.compile(r"\bgl_FragData\s*\[\s*0\s*\]"), "fragColor"),
    (re.compile(r"\b(?:texture2D|textureCube)Lod(?:EXT)?\b"), "textureLod"),
    (re.compile(r"\b(?:texture2D|textureCube)\b"), "texture"),
    (re.compile(r"^([ \t]*)varying\b", re.MULTILINE), r"\1in"),
]

# Quad vertices for fullscreen rendering (triangle strip)
QUAD_VERTICES = np.array(
    [
        # x,    y
        -1.0,
        -1.0,  # Bottom left
        1.0,
        -1.0,  # Bottom right
        -1.0,
        1.0,  # Top left
        1.0,
        1.0,  # Top right
    ],
    dtype="f4",
)


def prepare_fragment_source(source: str) -> str:
    """Make fragment source compilable by a desktop OpenGL context.

    Sources carrying a ``#version`` directive are returned untouched. Sources
    without one are treated as WebGL 1 fragment shaders: a 3.30 core header
    is prepended and the legacy built-ins are renamed: ``gl_FragColor`` and
    ``gl_FragData[0]`` become the declared output, ``texture2D`` and
    ``textureCube`` (and their ``Lod`` forms) become ``texture`` and
    ``textureLod``, and ``varying`` declarations become inputs. Other
    ``gl_FragData`` indices are not rewritten and fail to compile.

    Args:
        source: Fragment shader text as loaded

    Returns:
        Fragment shader text to compile
    """
    if _VERSION_RE.search(source):
        return source

    for pattern, replacement in _LEGACY_REWRITES:
        source = pattern.sub(replacement, source)
    return LEGACY_HEADER + source


def vertex_source_for(fragment_source: str) -> str:
    """Build a pass-through vertex shader matching the fragment's version."""
    match = _VERSION_RE.search(fragment_source)
    if match is None:
        version, suffix = 330, " core"
    else:
        version, suffix = int(match.group(1)), match.group(2) or ""

    qualifier = "attribute" if version < 130 else "in"
    return (
        f"#version {version}{suffix}\n"
        f"{qualifier} vec2 in_position;\n"
        "void main() {\n"
        "    gl_Position = vec4(in_position, 0.0, 1.0);\n"
        "}\n"
    )


class QuadProgram:
    """Compiled fragment shader bound to a full-screen quad."""

    def __init__(
        self,
        ctx: moderngl.Context,
        fragment_source: str,
        variant: PointerVariant,
    ):
        """Initialize program.

        Args:
            ctx: ModernGL context
            fragment_source: Fragment shader source as loaded
            variant: Pointer variant, decides the shape of ``u_mouse``

        Raises:
            CompileOrLinkFailure: If the GPU library rejects the shader
        """
        self.ctx = ctx
        self.variant = variant

        fragment_shader = prepare_fragment_source(fragment_source)
        self.program = self._create_program(fragment_shader)
        self.quad_buffer = ctx.buffer(QUAD_VERTICES.tobytes())
        self.vao = ctx.vertex_array(
            self.program, [(self.quad_buffer, "2f", "in_position")]
        )
        self._check_mouse_dimension()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()

    def _create_program(self, fragment_shader: str) -> moderngl.Program:
        """Compile and link the vertex/fragment pair."""
        try:
            program = self.ctx.program(
                vertex_shader=vertex_source_for(fragment_shader),
                fragment_shader=fragment_shader,
            )
        except moderngl.Error as e:
            logger.error("Shader compilation error")
            logger.error(str(e))
            raise CompileOrLinkFailure(str(e)) from e

        logger.info("Shader program compiled successfully")
        logger.info(f"Available uniforms: {self.active_uniforms(program)}")
        return program

    @staticmethod
    def active_uniforms(program: moderngl.Program) -> list[str]:
        return [
            name
            for name in program
            if isinstance(program[name], moderngl.Uniform)
        ]

    @property
    def uniform_names(self) -> list[str]:
        return self.active_uniforms(self.program)

    def _check_mouse_dimension(self) -> None:
        uniform = self.program.get("u_mouse", None)
        if not isinstance(uniform, moderngl.Uniform):
            return
        expected = self.variant.policy.mouse_components
        if uniform.dimension != expected:
            logger.warning(
                f"u_mouse declared with {uniform.dimension} components, "
                f"variant '{self.variant.value}' supplies {expected}"
            )

    def set_uniform(self, name: str, value: UniformValue) -> None:
        """Write a uniform if the program declares it."""
        uniform = self.program.get(name, None)
        if not isinstance(uniform, moderngl.Uniform):
            # Not declared, or optimized out by the driver
            return

        if isinstance(value, tuple):
            # Fit to the declared size: truncate or zero-pad
            dimension = uniform.dimension
            padded = tuple(float(v) for v in value) + (0.0,) * dimension
            uniform.value = padded[0] if dimension == 1 else padded[:dimension]
        else:
            uniform.value = float(value)

    def draw(self, uniforms: UniformState) -> None:
        """Submit one full-screen draw with the current uniforms."""
        values = uniforms.as_uniforms(self.variant)
        width, height = values["u_resolution"]
        self.ctx.viewport = (0, 0, int(width), int(height))
        self.ctx.clear(0.0, 0.0, 0.0, 1.0)

        for name, value in values.items():
            self.set_uniform(name, value)

        self.vao.render(moderngl.TRIANGLE_STRIP)

    def release(self) -> None:
        """Release GL objects."""
        self.vao.release()
        self.quad_buffer.release()
        self.program.release()
