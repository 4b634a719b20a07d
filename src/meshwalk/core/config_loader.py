"""JSON config file loading utilities."""

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from meshwalk.constants import (
    DEFAULT_MESH_PATH,
    DEFAULT_START_FACING,
    DEFAULT_START_POSITION,
    DEFAULT_TEXTURE_PATH,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """Startup settings; every field may be overridden from JSON."""
    mesh_path: Path = DEFAULT_MESH_PATH
    texture_path: Path = DEFAULT_TEXTURE_PATH
    start_position: tuple[float, float, float] = DEFAULT_START_POSITION
    start_facing: tuple[float, float, float] = DEFAULT_START_FACING
    window_width: int = DEFAULT_WINDOW_WIDTH
    window_height: int = DEFAULT_WINDOW_HEIGHT
    log_level: str = "INFO"

    def with_overrides(self, **overrides: Any) -> "AppConfig":
        """Return a copy with the non-None *overrides* applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **_coerce(values))


def load_json(path: Path) -> Any:
    """Load and return parsed JSON from a file."""
    with open(path) as f:
        return json.load(f)


def load_app_config(path: Optional[Path] = None) -> AppConfig:
    """Load an :class:`AppConfig`, starting from defaults.

    Relative asset paths in the file are resolved against the file's
    directory.  Unknown keys are ignored with a warning.
    """
    if path is None:
        return AppConfig()

    path = Path(path)
    raw = load_json(path)
    if not isinstance(raw, dict):
        raise ValueError(f"Config {path} must contain a JSON object")

    known = {f.name for f in fields(AppConfig)}
    values = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Ignoring unknown config key '%s' in %s", key, path)
            continue
        values[key] = value

    for key in ("mesh_path", "texture_path"):
        if key in values:
            p = Path(values[key])
            values[key] = p if p.is_absolute() else path.parent / p

    return AppConfig().with_overrides(**values)


def _coerce(values: dict[str, Any]) -> dict[str, Any]:
    """Normalise JSON-friendly values to the AppConfig field types."""
    out = dict(values)
    for key in ("mesh_path", "texture_path"):
        if key in out:
            out[key] = Path(out[key])
    for key in ("start_position", "start_facing"):
        if key in out:
            x, y, z = out[key]
            out[key] = (float(x), float(y), float(z))
    for key in ("window_width", "window_height"):
        if key in out:
            out[key] = int(out[key])
    if "log_level" in out:
        out["log_level"] = str(out["log_level"]).upper()
    return out
