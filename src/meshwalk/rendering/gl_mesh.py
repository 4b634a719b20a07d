"""VAO / VBO management for uploading and drawing a triangle Mesh.

Uses OpenGL 3.3 core profile. Each GLMesh owns one VAO with a single
interleaved VBO:
  - position (vec3, location 0)
  - coord    (vec3, location 1)
"""

import ctypes
import logging

import numpy as np
from OpenGL.GL import (
    GL_ARRAY_BUFFER,
    GL_FALSE,
    GL_FLOAT,
    GL_STATIC_DRAW,
    GL_TRIANGLES,
    glBindBuffer,
    glBindVertexArray,
    glBufferData,
    glDeleteBuffers,
    glDeleteVertexArrays,
    glDrawArrays,
    glEnableVertexAttribArray,
    glGenBuffers,
    glGenVertexArrays,
    glVertexAttribPointer,
)

from meshwalk.core.mesh import VERTEX_STRIDE, Mesh
from meshwalk.rendering.shader_program import ATTRIB_COORD, ATTRIB_POSITION

logger = logging.getLogger(__name__)

_FLOAT_SIZE = 4


class GLMesh:
    """GPU-side representation of a :class:`Mesh`.

    Meshes never change after loading, so :meth:`upload` is called once
    and :meth:`draw` each frame.
    """

    def __init__(self, mesh: Mesh) -> None:
        self._mesh = mesh
        self._vao: int = 0
        self._vbo: int = 0
        self._vertex_count: int = mesh.vertex_count
        self._uploaded: bool = False

    def upload(self) -> None:
        """Create the VAO and VBO and upload the interleaved vertex data."""
        if self._uploaded:
            self.destroy()

        data = np.ascontiguousarray(self._mesh.vertex_array(), dtype=np.float32)
        stride = VERTEX_STRIDE * _FLOAT_SIZE

        self._vao = glGenVertexArrays(1)
        self._vbo = glGenBuffers(1)

        glBindVertexArray(self._vao)
        glBindBuffer(GL_ARRAY_BUFFER, self._vbo)
        if data.size:
            glBufferData(GL_ARRAY_BUFFER, data.nbytes, data, GL_STATIC_DRAW)

        glVertexAttribPointer(ATTRIB_POSITION, 3, GL_FLOAT, GL_FALSE, stride, None)
        glEnableVertexAttribArray(ATTRIB_POSITION)
        glVertexAttribPointer(
            ATTRIB_COORD, 3, GL_FLOAT, GL_FALSE, stride, ctypes.c_void_p(3 * _FLOAT_SIZE),
        )
        glEnableVertexAttribArray(ATTRIB_COORD)

        glBindVertexArray(0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

        self._uploaded = True
        logger.debug("GLMesh uploaded: %d verts", self._vertex_count)

    def draw(self) -> None:
        """Bind the VAO and draw the triangles.

        The caller binds the shader, texture and uniforms first.
        """
        if not self._uploaded or self._vertex_count == 0:
            return
        glBindVertexArray(self._vao)
        glDrawArrays(GL_TRIANGLES, 0, self._vertex_count)
        glBindVertexArray(0)

    def destroy(self) -> None:
        """Delete all owned GL resources."""
        if self._vbo:
            glDeleteBuffers(1, [self._vbo])
            self._vbo = 0
        if self._vao:
            glDeleteVertexArrays(1, [self._vao])
            self._vao = 0
        self._uploaded = False
