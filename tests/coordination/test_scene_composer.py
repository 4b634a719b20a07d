"""Tests for turning application state into render requests."""

import numpy as np

from meshwalk.coordination.scene_composer import (
    camera_matrix, compose, look_direction, projection_matrix,
)
from meshwalk.core.mesh import EMPTY_MESH
from meshwalk.core.movement import Pose
from meshwalk.core.state import AppState
from meshwalk.core.texture import TextureImage


def _apply(m, p):
    return (m @ np.append(np.asarray(p, dtype=np.float64), 1.0))[:3]


def _texture() -> TextureImage:
    return TextureImage(pixels=np.zeros((1, 1, 4), dtype=np.uint8))


def test_nothing_drawn_without_texture():
    assert compose(AppState()) == []


def test_one_request_with_texture():
    tex = _texture()
    requests = compose(AppState(texture=tex))
    assert len(requests) == 1
    req = requests[0]
    assert req.texture is tex
    assert req.mesh is EMPTY_MESH
    np.testing.assert_array_equal(req.model, np.eye(4))
    np.testing.assert_array_almost_equal(req.projection, projection_matrix())


def test_camera_places_eye_at_origin():
    pose = Pose(position=(1.0, 0.5, 2.0), head_tilt=20.0)
    req = compose(AppState(texture=_texture(), pose=pose))[0]
    np.testing.assert_array_almost_equal(
        _apply(req.camera, np.array(pose.position)), [0, 0, 0],
    )


def test_look_direction_level():
    np.testing.assert_array_almost_equal(look_direction(Pose()), [0, 0, -1])


def test_positive_tilt_looks_up():
    d = look_direction(Pose(head_tilt=45.0))
    assert d[1] > 0
    np.testing.assert_array_almost_equal(d, [0, np.sqrt(0.5), -np.sqrt(0.5)])


def test_negative_tilt_looks_down():
    assert look_direction(Pose(head_tilt=-30.0))[1] < 0


def test_camera_looks_along_facing():
    pose = Pose(position=(0.0, 0.5, 0.0), facing=(1.0, 0.0, 0.0))
    view = camera_matrix(pose)
    ahead = _apply(view, np.array([3.0, 0.5, 0.0]))
    np.testing.assert_array_almost_equal(ahead, [0, 0, -3])
