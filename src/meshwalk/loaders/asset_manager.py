"""Fire-and-forget asset requests that report back as dispatcher events."""

import logging
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QTimer

from meshwalk.constants import DEFAULT_MESH_PATH, DEFAULT_TEXTURE_PATH
from meshwalk.core.events import EventType
from meshwalk.core.mesh import Mesh
from meshwalk.core.state import Dispatcher
from meshwalk.core.texture import TextureImage
from meshwalk.loaders.mesh_text_parser import load_mesh_file
from meshwalk.loaders.texture_loader import load_texture_image

logger = logging.getLogger(__name__)

ASSET_MESH = "mesh"
ASSET_TEXTURE = "texture"


def qt_schedule(callback: Callable[[], None]) -> None:
    """Run *callback* from the Qt event loop once control returns to it."""
    QTimer.singleShot(0, callback)


class AssetManager:
    """Issues the startup asset requests.

    Each request runs once, on the event loop, and posts exactly one
    completion event to the dispatcher: ``MESH_LOADED`` /
    ``TEXTURE_LOADED`` on success or ``ASSET_FAILED`` on error.
    Nothing is retried or cancelled.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        mesh_path: Optional[Path] = None,
        texture_path: Optional[Path] = None,
        schedule: Callable[[Callable[[], None]], None] = qt_schedule,
        mesh_loader: Callable[[Path], Mesh] = load_mesh_file,
        texture_loader: Callable[[Path], TextureImage] = load_texture_image,
    ):
        self.dispatcher = dispatcher
        self.mesh_path = Path(mesh_path or DEFAULT_MESH_PATH)
        self.texture_path = Path(texture_path or DEFAULT_TEXTURE_PATH)
        self._schedule = schedule
        self._mesh_loader = mesh_loader
        self._texture_loader = texture_loader

    def request_all(self) -> None:
        """Issue the mesh and texture requests."""
        self.request_mesh()
        self.request_texture()

    def request_mesh(self) -> None:
        self._schedule(self._fetch_mesh)

    def request_texture(self) -> None:
        self._schedule(self._fetch_texture)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _fetch_mesh(self) -> None:
        try:
            mesh = self._mesh_loader(self.mesh_path)
        except (OSError, ValueError) as e:
            self._fail(ASSET_MESH, self.mesh_path, e)
            return
        logger.info("Loaded mesh %s: %d triangles", self.mesh_path, mesh.triangle_count)
        self.dispatcher.post(EventType.MESH_LOADED, mesh=mesh)

    def _fetch_texture(self) -> None:
        try:
            texture = self._texture_loader(self.texture_path)
        except (OSError, ValueError) as e:
            self._fail(ASSET_TEXTURE, self.texture_path, e)
            return
        logger.info(
            "Loaded texture %s: %dx%d", self.texture_path, texture.width, texture.height,
        )
        self.dispatcher.post(EventType.TEXTURE_LOADED, texture=texture)

    def _fail(self, asset: str, path: Path, error: Exception) -> None:
        logger.warning("Failed to load %s from %s: %s", asset, path, error)
        self.dispatcher.post(EventType.ASSET_FAILED, asset=asset, error=error)
