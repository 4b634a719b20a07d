"""NumPy-backed math utilities: Vec3 and Mat4 operations.

Vectors are plain numpy arrays.  Matrices are 4x4 numpy arrays stored
row-major; :class:`ShaderProgram` transposes them on upload.
"""

import numpy as np
from numpy.typing import NDArray

# Type aliases
Vec3 = NDArray[np.float64]
Mat4 = NDArray[np.float64]


def mat4_identity() -> Mat4:
    return np.eye(4, dtype=np.float64)


def mat4_rotation(angle_rad: float, axis: Vec3) -> Mat4:
    """Rotation about an arbitrary axis (Rodrigues form)."""
    x, y, z = normalize(np.asarray(axis, dtype=np.float64))
    c, s = np.cos(angle_rad), np.sin(angle_rad)
    t = 1.0 - c
    m = np.eye(4, dtype=np.float64)
    m[0, 0] = t * x * x + c
    m[0, 1] = t * x * y - s * z
    m[0, 2] = t * x * z + s * y
    m[1, 0] = t * x * y + s * z
    m[1, 1] = t * y * y + c
    m[1, 2] = t * y * z - s * x
    m[2, 0] = t * x * z - s * y
    m[2, 1] = t * y * z + s * x
    m[2, 2] = t * z * z + c
    return m


def mat4_perspective(fov_rad: float, aspect: float, near: float, far: float) -> Mat4:
    """Create perspective projection matrix."""
    f = 1.0 / np.tan(fov_rad / 2.0)
    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = (2 * far * near) / (near - far)
    m[3, 2] = -1.0
    return m


def mat4_look_at(eye: Vec3, target: Vec3, up: Vec3) -> Mat4:
    """Create view matrix (camera look-at)."""
    f = normalize(target - eye)
    s = normalize(np.cross(f, up))
    # Forward parallel to up: fall back to an alternative up vector.
    if np.linalg.norm(s) < 1e-6:
        alt_up = np.array([0.0, 0.0, -1.0]) if abs(f[1]) > 0.9 else np.array([0.0, 1.0, 0.0])
        s = normalize(np.cross(f, alt_up))
    u = np.cross(s, f)
    m = np.eye(4, dtype=np.float64)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye)
    m[1, 3] = -np.dot(u, eye)
    m[2, 3] = np.dot(f, eye)
    return m


def transform_direction(m: Mat4, d: Vec3) -> Vec3:
    """Transform a direction by a 4x4 matrix (ignores translation)."""
    return m[:3, :3] @ d


# Vector operations

def normalize(v: Vec3) -> Vec3:
    n = np.linalg.norm(v)
    if n < 1e-10:
        return np.zeros_like(v)
    return v / n


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def cap_angle(high: float, low: float, current: float, delta: float) -> float:
    """Advance an angle by *delta*, pinning it at whichever bound it reaches.

    A value sitting on a bound stays there while *delta* keeps pushing
    outward; any motion toward the interior is applied in full.
    """
    if current >= high and delta > 0:
        return high
    if current <= low and delta < 0:
        return low
    return clamp(current + delta, low, high)


def deg_to_rad(degrees: float) -> float:
    return degrees * np.pi / 180.0
