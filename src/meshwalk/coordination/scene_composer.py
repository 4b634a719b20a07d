"""Turns the application state into render requests for the GL sink."""

from dataclasses import dataclass

import numpy as np

from meshwalk.constants import (
    CAMERA_ASPECT,
    CAMERA_FAR,
    CAMERA_FOV,
    CAMERA_NEAR,
    WORLD_UP,
)
from meshwalk.core.math_utils import (
    Mat4,
    Vec3,
    deg_to_rad,
    mat4_identity,
    mat4_look_at,
    mat4_perspective,
    mat4_rotation,
    transform_direction,
)
from meshwalk.core.mesh import Mesh
from meshwalk.core.movement import Pose
from meshwalk.core.state import AppState
from meshwalk.core.texture import TextureImage


@dataclass(frozen=True, eq=False)
class RenderRequest:
    """One draw: geometry, its texture and the three transform matrices."""
    mesh: Mesh
    texture: TextureImage
    camera: Mat4
    projection: Mat4
    model: Mat4


def look_direction(pose: Pose) -> Vec3:
    """Facing tilted by the head angle about the horizontal side axis."""
    facing = pose.facing_vec
    side = np.cross(facing, np.array(WORLD_UP))
    if np.linalg.norm(side) < 1e-10:
        return facing
    rotation = mat4_rotation(deg_to_rad(pose.head_tilt), side)
    return transform_direction(rotation, facing)


def camera_matrix(pose: Pose) -> Mat4:
    """View matrix looking from the pose position along the tilted facing."""
    eye = pose.position_vec
    return mat4_look_at(eye, eye + look_direction(pose), np.array(WORLD_UP))


def projection_matrix() -> Mat4:
    return mat4_perspective(deg_to_rad(CAMERA_FOV), CAMERA_ASPECT, CAMERA_NEAR, CAMERA_FAR)


def compose(state: AppState) -> list[RenderRequest]:
    """Build this frame's render requests.

    Nothing is drawn until a texture has loaded.
    """
    if state.texture is None:
        return []
    return [
        RenderRequest(
            mesh=state.mesh,
            texture=state.texture,
            camera=camera_matrix(state.pose),
            projection=projection_matrix(),
            model=mat4_identity(),
        )
    ]
