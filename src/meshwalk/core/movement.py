"""First-person movement: head tilt, turning, walk-cycle phase and position.

All functions are pure.  ``dt`` is the frame time in milliseconds.
"""

import math
from dataclasses import dataclass

import numpy as np

from meshwalk.constants import (
    BOB_AMPLITUDE,
    DEFAULT_START_FACING,
    DEFAULT_START_POSITION,
    EYE_HEIGHT,
    GAIT_DIVISOR,
    MOVE_DIVISOR,
    TILT_DIVISOR,
    TILT_MAX,
    TILT_MIN,
    TURN_DIVISOR,
    WORLD_UP,
)
from meshwalk.core.input_state import InputState
from meshwalk.core.math_utils import Vec3, cap_angle, mat4_rotation, transform_direction

Point3 = tuple[float, float, float]


@dataclass(frozen=True)
class Pose:
    """Camera pose.

    facing is kept horizontal but is never renormalised.
    head_tilt is in degrees, within [TILT_MIN, TILT_MAX].
    """
    position: Point3 = DEFAULT_START_POSITION
    facing: Point3 = DEFAULT_START_FACING
    head_tilt: float = 0.0
    gait_phase: float = 0.0

    @property
    def position_vec(self) -> Vec3:
        return np.array(self.position, dtype=np.float64)

    @property
    def facing_vec(self) -> Vec3:
        return np.array(self.facing, dtype=np.float64)


# (a, s, w, d) combinations that leave the walk cycle paused
_GAIT_HOLD = frozenset({
    (False, False, False, False),
    (True, True, True, True),
    (True, True, False, False),
    (False, False, True, True),
})


def _axis(positive: bool, negative: bool) -> int:
    """+1 / -1 when exactly one side is held, else 0."""
    if positive and not negative:
        return 1
    if negative and not positive:
        return -1
    return 0


def _as_tuple(v) -> Point3:
    return (float(v[0]), float(v[1]), float(v[2]))


def rotate_x(dt: float, keys: InputState, head_tilt: float) -> float:
    """Tilt the head up (up key) or down (down key), capped at +/-89 degrees."""
    direction = _axis(keys.up, keys.down)
    return cap_angle(TILT_MAX, TILT_MIN, head_tilt, direction * dt / TILT_DIVISOR)


def rotate_y(dt: float, keys: InputState, facing: Point3) -> Point3:
    """Turn left (left key) or right (right key) about the world up axis."""
    direction = _axis(keys.left, keys.right)
    if direction == 0:
        return facing
    rotation = mat4_rotation(direction * dt / TURN_DIVISOR, np.array(WORLD_UP))
    return _as_tuple(transform_direction(rotation, np.array(facing, dtype=np.float64)))


def update_jogging_phase(dt: float, keys: InputState, gait_phase: float) -> float:
    """Advance the walk cycle unless the walk keys are released or cancel out."""
    if (keys.a, keys.s, keys.w, keys.d) in _GAIT_HOLD:
        return gait_phase
    return gait_phase + dt / GAIT_DIVISOR


def move(step: float, keys: InputState, position: Point3, facing: Point3, gait_phase: float) -> Point3:
    """Walk along *facing* (w/s) and strafe across it (a/d).

    The height is reset every call to the walk-cycle bob for *gait_phase*.
    """
    forward = _axis(keys.w, keys.s) * step
    strafe = _axis(keys.d, keys.a) * step
    facing_v = np.array(facing, dtype=np.float64)
    side = np.cross(facing_v, np.array(WORLD_UP))
    x, _, z = np.array(position, dtype=np.float64) + strafe * side + forward * facing_v
    return (float(x), EYE_HEIGHT + BOB_AMPLITUDE * math.sin(gait_phase), float(z))


def tick(dt: float, keys: InputState, pose: Pose) -> Pose:
    """Advance *pose* by one frame of *dt* milliseconds.

    Tilt, facing and gait phase are all derived from the incoming pose;
    the step uses the incoming facing and the updated gait phase.
    """
    gait_phase = update_jogging_phase(dt, keys, pose.gait_phase)
    return Pose(
        position=move(dt / MOVE_DIVISOR, keys, pose.position, pose.facing, gait_phase),
        facing=rotate_y(dt, keys, pose.facing),
        head_tilt=rotate_x(dt, keys, pose.head_tilt),
        gait_phase=gait_phase,
    )
