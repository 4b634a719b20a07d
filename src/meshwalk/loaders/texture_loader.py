"""Image file -> TextureImage, decoded with QImage."""

from pathlib import Path

import numpy as np
from PySide6.QtGui import QImage

from meshwalk.core.texture import TextureImage


def image_to_rgba(image: QImage) -> np.ndarray:
    """Copy a QImage into an (h, w, 4) uint8 RGBA array (top row first)."""
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    w, h = rgba.width(), rgba.height()
    stride = rgba.bytesPerLine()
    buf = np.frombuffer(rgba.constBits(), dtype=np.uint8, count=stride * h)
    # Rows may be padded past w * 4 bytes
    return buf.reshape(h, stride)[:, : w * 4].reshape(h, w, 4).copy()


def load_texture_image(path) -> TextureImage:
    """Decode an image file into a :class:`TextureImage`.

    Rows are flipped so that texture coordinate v=0 is the bottom of
    the image, matching GL's texture origin.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If Qt cannot decode the file.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Texture not found: {path}")

    image = QImage(str(path))
    if image.isNull():
        raise ValueError(f"Unsupported or corrupt image: {path}")

    pixels = np.ascontiguousarray(image_to_rgba(image)[::-1])
    return TextureImage(pixels=pixels, source=str(path))
