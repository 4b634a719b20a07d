"""Main OpenGL renderer -- draws the frame's render requests.

Uses OpenGL 3.3 core profile with a single textured, unlit shader.
"""

import logging
from typing import Callable, Optional, Sequence

from OpenGL.GL import (
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_LESS,
    glClear,
    glClearColor,
    glDepthFunc,
    glEnable,
    glViewport,
)

from meshwalk.coordination.scene_composer import RenderRequest
from meshwalk.core.mesh import Mesh
from meshwalk.core.texture import TextureImage
from meshwalk.rendering.gl_mesh import GLMesh
from meshwalk.rendering.gl_texture import GLTexture
from meshwalk.rendering.shader_program import ShaderProgram

logger = logging.getLogger(__name__)


class _Resident:
    """The GPU copy of one source object, paired with that object.

    Holding *source* keeps it alive, so identity checks against it are
    never fooled by a recycled ``id()``.
    """

    def __init__(self, source, make_gl: Callable) -> None:
        self.source = source
        self.gl = make_gl(source)
        self.gl.upload()

    def holds(self, source) -> bool:
        return self.source is source

    def destroy(self) -> None:
        self.gl.destroy()


class GLRenderer:
    """Uploads meshes and textures on demand and draws render requests.

    Only the most recently drawn mesh and texture stay on the GPU; a
    newly loaded one replaces the previous upload.

    Usage
    -----
    1. Call :meth:`init_gl` once after a valid GL context is current.
    2. Call :meth:`resize` whenever the viewport changes.
    3. Call :meth:`render` each frame.
    4. Call :meth:`destroy` on shutdown.
    """

    # Background colour (dark blue-grey)
    CLEAR_COLOR = (0.12, 0.12, 0.15, 1.0)

    def __init__(self) -> None:
        self._shader: Optional[ShaderProgram] = None
        self._mesh: Optional[_Resident] = None
        self._texture: Optional[_Resident] = None
        self._initialised: bool = False
        self._width: int = 1
        self._height: int = 1
        self._frame_count: int = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init_gl(self) -> None:
        """Set up GL state and compile the shader program.

        Must be called with a current OpenGL context.
        """
        glClearColor(*self.CLEAR_COLOR)
        glEnable(GL_DEPTH_TEST)
        glDepthFunc(GL_LESS)

        self._shader = ShaderProgram.textured()
        self._shader.compile()
        self._initialised = True
        logger.info("GLRenderer initialised.")

    def resize(self, width: int, height: int) -> None:
        self._width = max(width, 1)
        self._height = max(height, 1)

    def destroy(self) -> None:
        """Free all GL resources."""
        if self._mesh is not None:
            self._mesh.destroy()
            self._mesh = None
        if self._texture is not None:
            self._texture.destroy()
            self._texture = None
        if self._shader is not None:
            self._shader.destroy()
            self._shader = None

        self._initialised = False
        logger.info("GLRenderer destroyed.")

    # ------------------------------------------------------------------
    # Frame rendering
    # ------------------------------------------------------------------

    def render(self, requests: Sequence[RenderRequest]) -> None:
        """Render one frame: clear, then draw each request in order."""
        if not self._initialised:
            return

        glViewport(0, 0, self._width, self._height)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        self._frame_count += 1
        if self._frame_count <= 3 or self._frame_count % 600 == 0:
            logger.debug(
                "Frame %d: %d requests, viewport %dx%d",
                self._frame_count, len(requests), self._width, self._height,
            )

        for request in requests:
            self._draw_request(request)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ensure_gl_mesh(self, mesh: Mesh) -> GLMesh:
        if self._mesh is None or not self._mesh.holds(mesh):
            if self._mesh is not None:
                self._mesh.destroy()
            self._mesh = _Resident(mesh, GLMesh)
        return self._mesh.gl

    def _ensure_gl_texture(self, texture: TextureImage) -> GLTexture:
        if self._texture is None or not self._texture.holds(texture):
            if self._texture is not None:
                self._texture.destroy()
            self._texture = _Resident(texture, GLTexture)
        return self._texture.gl

    def _draw_request(self, request: RenderRequest) -> None:
        gl_mesh = self._ensure_gl_mesh(request.mesh)
        gl_texture = self._ensure_gl_texture(request.texture)

        shader = self._shader
        shader.use()
        shader.set_matrices(request.model, request.camera, request.projection)
        gl_texture.bind(0)
        shader.set_texture_unit(0)

        gl_mesh.draw()
