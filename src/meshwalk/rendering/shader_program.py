"""The unlit textured GLSL program: build it once, then feed its uniforms."""

import logging
from pathlib import Path

import numpy as np
from OpenGL.GL import (
    GL_COMPILE_STATUS,
    GL_FRAGMENT_SHADER,
    GL_LINK_STATUS,
    GL_VERTEX_SHADER,
    glAttachShader,
    glBindAttribLocation,
    glCompileShader,
    glCreateProgram,
    glCreateShader,
    glDeleteProgram,
    glDeleteShader,
    glGetProgramInfoLog,
    glGetProgramiv,
    glGetShaderInfoLog,
    glGetShaderiv,
    glGetUniformLocation,
    glLinkProgram,
    glShaderSource,
    glUniform1i,
    glUniformMatrix4fv,
    glUseProgram,
)

logger = logging.getLogger(__name__)

_SHADER_DIR = Path(__file__).parent / "shaders"
VERTEX_FILE = "textured.vert"
FRAGMENT_FILE = "textured.frag"

# Vertex attribute slots shared with GLMesh
ATTRIB_POSITION = 0
ATTRIB_COORD = 1
_ATTRIBUTES = (("position", ATTRIB_POSITION), ("coord", ATTRIB_COORD))

UNIFORM_MODEL = "uModel"
UNIFORM_VIEW = "uView"
UNIFORM_PROJECTION = "uProjection"
UNIFORM_TEXTURE = "uTexture"
UNIFORMS = (UNIFORM_MODEL, UNIFORM_VIEW, UNIFORM_PROJECTION, UNIFORM_TEXTURE)


def load_shader_source(filename: str) -> str:
    return (_SHADER_DIR / filename).read_text(encoding="utf-8")


def _info_text(info) -> str:
    if isinstance(info, bytes):
        return info.decode("utf-8", errors="replace")
    return str(info)


def _compile_stage(stage: int, source: str) -> int:
    """Compile one shader stage; raise ``RuntimeError`` with the driver log."""
    shader = glCreateShader(stage)
    glShaderSource(shader, source)
    glCompileShader(shader)
    if glGetShaderiv(shader, GL_COMPILE_STATUS) != 1:
        info = _info_text(glGetShaderInfoLog(shader))
        glDeleteShader(shader)
        kind = "vertex" if stage == GL_VERTEX_SHADER else "fragment"
        raise RuntimeError(f"{kind} shader compile error:\n{info}")
    return shader


class ShaderProgram:
    """The textured program drawn by :class:`GLRenderer`.

    Attribute slots are bound before linking and the four uniform
    locations are looked up once, right after a successful link.  A
    uniform the driver optimised out keeps location -1 and its setter
    does nothing.
    """

    def __init__(self, vertex_source: str, fragment_source: str) -> None:
        self._sources = (vertex_source, fragment_source)
        self._program: int = 0
        self._locations: dict[str, int] = {}

    @classmethod
    def textured(cls) -> "ShaderProgram":
        """Load the bundled ``textured.vert`` / ``textured.frag`` pair."""
        return cls(load_shader_source(VERTEX_FILE), load_shader_source(FRAGMENT_FILE))

    def compile(self) -> None:
        """Compile, bind attribute slots, link and resolve uniforms.

        Raises ``RuntimeError`` on compile or link failure.
        """
        vert = _compile_stage(GL_VERTEX_SHADER, self._sources[0])
        try:
            frag = _compile_stage(GL_FRAGMENT_SHADER, self._sources[1])
        except RuntimeError:
            glDeleteShader(vert)
            raise

        program = glCreateProgram()
        glAttachShader(program, vert)
        glAttachShader(program, frag)
        for name, slot in _ATTRIBUTES:
            glBindAttribLocation(program, slot, name)
        glLinkProgram(program)
        glDeleteShader(vert)
        glDeleteShader(frag)

        if glGetProgramiv(program, GL_LINK_STATUS) != 1:
            info = _info_text(glGetProgramInfoLog(program))
            glDeleteProgram(program)
            raise RuntimeError(f"Shader program link error:\n{info}")

        self._program = program
        self._locations = {name: glGetUniformLocation(program, name) for name in UNIFORMS}
        missing = [name for name, loc in self._locations.items() if loc < 0]
        if missing:
            logger.debug("Uniforms optimised out: %s", ", ".join(missing))
        logger.debug("Shader program %d linked.", program)

    def use(self) -> None:
        glUseProgram(self._program)

    def set_matrices(self, model: np.ndarray, view: np.ndarray, projection: np.ndarray) -> None:
        """Upload the three transforms of one draw."""
        self._set_mat4(UNIFORM_MODEL, model)
        self._set_mat4(UNIFORM_VIEW, view)
        self._set_mat4(UNIFORM_PROJECTION, projection)

    def set_texture_unit(self, unit: int) -> None:
        loc = self._locations.get(UNIFORM_TEXTURE, -1)
        if loc >= 0:
            glUniform1i(loc, int(unit))

    def destroy(self) -> None:
        if self._program:
            glDeleteProgram(self._program)
            self._program = 0
        self._locations = {}

    def _set_mat4(self, name: str, matrix: np.ndarray) -> None:
        loc = self._locations.get(name, -1)
        if loc < 0:
            return
        # Row-major numpy -> column-major GL, uploaded with transpose=False
        glUniformMatrix4fv(loc, 1, False, np.ascontiguousarray(matrix.T, dtype=np.float32))
