"""Tests for the renderer's upload bookkeeping (no GL context needed)."""

import numpy as np
import pytest

pytest.importorskip("OpenGL.GL")
pytest.importorskip("PySide6.QtOpenGLWidgets")

from meshwalk.core.mesh import Mesh, Triangle, Vertex
from meshwalk.core.texture import TextureImage
from meshwalk.rendering import renderer as renderer_mod
from meshwalk.rendering.renderer import GLRenderer


class FakeUpload:
    """Stands in for GLMesh / GLTexture and logs its lifecycle."""

    log = []

    def __init__(self, source):
        self.source = source
        self.destroyed = False

    def upload(self):
        FakeUpload.log.append(("upload", self.source))

    def destroy(self):
        self.destroyed = True
        FakeUpload.log.append(("destroy", self.source))


@pytest.fixture
def renderer(monkeypatch):
    FakeUpload.log = []
    monkeypatch.setattr(renderer_mod, "GLMesh", FakeUpload)
    monkeypatch.setattr(renderer_mod, "GLTexture", FakeUpload)
    return GLRenderer()


def _mesh(x: float = 0.0) -> Mesh:
    v = Vertex((x, 0.0, 0.0), (0.0, 0.0, 0.0))
    return Mesh((Triangle(v, v, v),))


def _texture() -> TextureImage:
    return TextureImage(pixels=np.zeros((1, 1, 4), dtype=np.uint8))


def test_mesh_uploaded_once(renderer):
    mesh = _mesh()
    first = renderer._ensure_gl_mesh(mesh)
    second = renderer._ensure_gl_mesh(mesh)
    assert first is second
    assert FakeUpload.log == [("upload", mesh)]


def test_new_mesh_replaces_previous(renderer):
    old, new = _mesh(1.0), _mesh(2.0)
    old_gl = renderer._ensure_gl_mesh(old)
    new_gl = renderer._ensure_gl_mesh(new)
    assert old_gl.destroyed
    assert not new_gl.destroyed
    assert new_gl.source is new


def test_equal_but_distinct_mesh_is_reuploaded(renderer):
    a, b = _mesh(), _mesh()
    assert a == b
    gl_a = renderer._ensure_gl_mesh(a)
    gl_b = renderer._ensure_gl_mesh(b)
    assert gl_a is not gl_b
    assert gl_b.source is b


def test_upload_keeps_source_alive(renderer):
    gl = renderer._ensure_gl_mesh(_mesh(3.0))
    # Nothing else references the mesh; the resident copy must
    assert renderer._mesh.source is gl.source
    assert renderer._mesh.holds(gl.source)


def test_texture_cache(renderer):
    tex = _texture()
    assert renderer._ensure_gl_texture(tex) is renderer._ensure_gl_texture(tex)
    other = _texture()
    renderer._ensure_gl_texture(other)
    assert FakeUpload.log == [("upload", tex), ("destroy", tex), ("upload", other)]


def test_destroy_releases_uploads(renderer):
    mesh, tex = _mesh(), _texture()
    gl_mesh = renderer._ensure_gl_mesh(mesh)
    gl_tex = renderer._ensure_gl_texture(tex)
    renderer.destroy()
    assert gl_mesh.destroyed and gl_tex.destroyed
    assert renderer._mesh is None
    assert renderer._texture is None


def test_render_before_init_draws_nothing(renderer):
    renderer.render([object()])
    assert FakeUpload.log == []


def test_gl_mesh_draws_only_while_uploaded(monkeypatch):
    from meshwalk.rendering import gl_mesh as gl_mesh_mod

    draws = []
    monkeypatch.setattr(gl_mesh_mod, "glBindVertexArray", lambda vao: None)
    monkeypatch.setattr(gl_mesh_mod, "glDrawArrays", lambda mode, first, count: draws.append(count))
    gl = gl_mesh_mod.GLMesh(_mesh())
    gl.draw()
    assert draws == []

    # Pretend upload() ran, then tear down without a context
    gl._uploaded = True
    gl.draw()
    assert draws == [3]
    gl.destroy()
    gl.draw()
    assert draws == [3]
