"""Rendering subsystem -- OpenGL 3.3 core profile with PySide6 integration."""

from meshwalk.rendering.gl_mesh import GLMesh
from meshwalk.rendering.gl_texture import GLTexture
from meshwalk.rendering.gl_widget import GLViewport
from meshwalk.rendering.renderer import GLRenderer
from meshwalk.rendering.shader_program import ShaderProgram

__all__ = [
    "GLMesh",
    "GLRenderer",
    "GLTexture",
    "GLViewport",
    "ShaderProgram",
]
