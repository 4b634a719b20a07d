"""Tests for mesh data structures and texture images."""

import numpy as np
import pytest

from meshwalk.core.mesh import (
    DEGENERATE_TRIANGLE, EMPTY_MESH, VERTEX_STRIDE, Mesh, Triangle, Vertex,
)
from meshwalk.core.texture import TextureImage


def _tri(offset: float) -> Triangle:
    return Triangle(
        Vertex((offset, 0.0, 0.0), (0.0, 0.0, 0.0)),
        Vertex((offset + 1.0, 0.0, 0.0), (1.0, 0.0, 0.0)),
        Vertex((offset, 1.0, 0.0), (0.0, 1.0, 0.0)),
    )


def test_empty_mesh():
    assert len(EMPTY_MESH) == 0
    assert EMPTY_MESH.vertex_count == 0
    assert EMPTY_MESH.vertex_array().shape == (0, VERTEX_STRIDE)


def test_counts():
    mesh = Mesh((_tri(0.0), _tri(2.0)))
    assert mesh.triangle_count == 2
    assert mesh.vertex_count == 6
    assert list(mesh) == [_tri(0.0), _tri(2.0)]


def test_vertex_array_layout():
    arr = Mesh((_tri(0.0), _tri(2.0))).vertex_array()
    assert arr.dtype == np.float32
    assert arr.shape == (6, 6)
    np.testing.assert_array_equal(arr[1], [1, 0, 0, 1, 0, 0])
    np.testing.assert_array_equal(arr[3], [2, 0, 0, 0, 0, 0])


def test_degenerate_triangle_at_origin():
    for v in DEGENERATE_TRIANGLE.vertices:
        assert v.position == (0.0, 0.0, 0.0)
        assert v.coord == (0.0, 0.0, 0.0)


def test_mesh_is_immutable():
    mesh = Mesh((_tri(0.0),))
    with pytest.raises(AttributeError):
        mesh.triangles = ()


def test_texture_image_size():
    tex = TextureImage(pixels=np.zeros((4, 8, 4), dtype=np.uint8))
    assert tex.width == 8
    assert tex.height == 4


def test_texture_image_rejects_non_rgba():
    with pytest.raises(ValueError):
        TextureImage(pixels=np.zeros((4, 4, 3), dtype=np.uint8))
