"""Decoded texture image (no GL dependencies)."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, eq=False)
class TextureImage:
    """RGBA pixels ready for upload, rows ordered bottom-to-top for GL.

    pixels: (height, width, 4) uint8 array
    source: where the image was read from, for logging only
    """
    pixels: NDArray[np.uint8]
    source: str = ""

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Expected (h, w, 4) RGBA pixels, got shape {self.pixels.shape}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])
