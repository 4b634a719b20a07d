"""2D texture upload for decoded TextureImage pixels."""

import logging

import numpy as np
from OpenGL.GL import (
    GL_CLAMP_TO_EDGE,
    GL_LINEAR,
    GL_LINEAR_MIPMAP_LINEAR,
    GL_RGBA,
    GL_RGBA8,
    GL_TEXTURE0,
    GL_TEXTURE_2D,
    GL_TEXTURE_MAG_FILTER,
    GL_TEXTURE_MIN_FILTER,
    GL_TEXTURE_WRAP_S,
    GL_TEXTURE_WRAP_T,
    GL_UNPACK_ALIGNMENT,
    GL_UNSIGNED_BYTE,
    glActiveTexture,
    glBindTexture,
    glDeleteTextures,
    glGenerateMipmap,
    glGenTextures,
    glPixelStorei,
    glTexImage2D,
    glTexParameteri,
)

from meshwalk.core.texture import TextureImage

logger = logging.getLogger(__name__)


class GLTexture:
    """GPU-side copy of a :class:`TextureImage`."""

    def __init__(self, image: TextureImage) -> None:
        self._image = image
        self._tex: int = 0

    def upload(self) -> None:
        """Create the GL texture, upload the pixels and build mipmaps."""
        if self._tex:
            self.destroy()

        pixels = np.ascontiguousarray(self._image.pixels, dtype=np.uint8)
        self._tex = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, self._tex)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR_MIPMAP_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_CLAMP_TO_EDGE)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_CLAMP_TO_EDGE)
        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glTexImage2D(
            GL_TEXTURE_2D, 0, GL_RGBA8,
            self._image.width, self._image.height, 0,
            GL_RGBA, GL_UNSIGNED_BYTE, pixels,
        )
        glGenerateMipmap(GL_TEXTURE_2D)
        glBindTexture(GL_TEXTURE_2D, 0)
        logger.debug(
            "GLTexture %d uploaded: %dx%d from %s",
            self._tex, self._image.width, self._image.height, self._image.source,
        )

    def bind(self, unit: int = 0) -> None:
        glActiveTexture(GL_TEXTURE0 + unit)
        glBindTexture(GL_TEXTURE_2D, self._tex)

    def destroy(self) -> None:
        if self._tex:
            glDeleteTextures([self._tex])
            self._tex = 0
