"""Shared constants and paths for MeshWalk."""

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
ASSETS_DIR = PROJECT_ROOT / "assets"
CONFIG_DIR = ASSETS_DIR / "config"
MESH_DIR = ASSETS_DIR / "meshes"
TEXTURE_DIR = ASSETS_DIR / "textures"

DEFAULT_MESH_PATH = MESH_DIR / "world.txt"
DEFAULT_TEXTURE_PATH = TEXTURE_DIR / "crate.ppm"

# Key codes delivered with key events (browser-style codes)
KEY_LEFT = 37
KEY_UP = 38
KEY_RIGHT = 39
KEY_DOWN = 40
KEY_A = 65
KEY_D = 68
KEY_S = 83
KEY_W = 87

# Movement tuning (dt is in milliseconds)
TILT_DIVISOR = 10.0      # degrees of head tilt per ms
TURN_DIVISOR = 1000.0    # radians of facing rotation per ms
GAIT_DIVISOR = 100.0     # gait phase per ms
MOVE_DIVISOR = 500.0     # world units walked per ms

# Head tilt limits (degrees)
TILT_MAX = 89.0
TILT_MIN = -89.0

# Walk-cycle height: EYE_HEIGHT + BOB_AMPLITUDE * sin(gait phase)
EYE_HEIGHT = 0.5
BOB_AMPLITUDE = 0.05

# World axes
WORLD_UP = (0.0, 1.0, 0.0)

# Start pose
DEFAULT_START_POSITION = (0.0, 0.5, 5.0)
DEFAULT_START_FACING = (0.0, 0.0, -1.0)

# Fixed perspective projection
CAMERA_FOV = 45.0  # degrees
CAMERA_ASPECT = 1.0
CAMERA_NEAR = 0.01
CAMERA_FAR = 100.0

# Frame timing
FRAME_INTERVAL_MS = 16  # ~60 fps
MAX_DELTA_MS = 100.0    # Clamp dt to avoid large jumps

# Window defaults
DEFAULT_WINDOW_WIDTH = 600
DEFAULT_WINDOW_HEIGHT = 600
