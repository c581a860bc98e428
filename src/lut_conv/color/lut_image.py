from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import numpy as np

from .errors import InvalidImageDimensionsError, SizeMismatchError
from .grid import LutGrid


logger = logging.getLogger(__name__)

# Square image edge -> cube edge, as used by common grading tools.
IMAGE_SIZE_PRESETS: dict[int, int] = {64: 16, 512: 64}


@dataclass(frozen=True)
class LutImageInfo:
    image_width: int
    image_height: int
    width: int
    height: int
    depth: int

    @property
    def tiles_per_row(self) -> int:
        return self.image_width // self.width

    @property
    def lut_shape(self) -> tuple[int, int, int]:
        return (self.width, self.height, self.depth)

    def validate(self) -> None:
        values = (self.image_width, self.image_height, self.width, self.height, self.depth)
        if any(int(v) != v or v < 1 for v in values):
            raise InvalidImageDimensionsError(f"image and LUT sizes must be positive integers: {self}")
        if self.image_width % self.width != 0 or self.image_height % self.height != 0:
            raise InvalidImageDimensionsError(
                f"invalid image size {self.image_width}x{self.image_height} "
                f"for {self.width}x{self.height} tiles"
            )
        rows_needed = -(-self.depth // self.tiles_per_row)
        if rows_needed * self.height > self.image_height:
            raise InvalidImageDimensionsError(
                f"{self.depth} tiles of {self.width}x{self.height} do not fit "
                f"in a {self.image_width}x{self.image_height} image"
            )

    def tile_origin(self, z: int) -> tuple[int, int]:
        tpr = self.tiles_per_row
        return (z % tpr) * self.width, (z // tpr) * self.height


def info_for_image(image_width: int, image_height: int) -> LutImageInfo:
    """Infer the LUT size of a preset square LUT image."""
    if image_width != image_height or image_width not in IMAGE_SIZE_PRESETS:
        presets = ", ".join(f"{k}x{k}" for k in sorted(IMAGE_SIZE_PRESETS))
        raise InvalidImageDimensionsError(
            f"cannot determine LUT size for a {image_width}x{image_height} image "
            f"(supported: {presets}); pass the LUT size explicitly"
        )
    n = IMAGE_SIZE_PRESETS[image_width]
    return LutImageInfo(image_width, image_height, n, n, n)


def info_for_grid(grid: LutGrid) -> LutImageInfo:
    """Infer the preset image size for a cubic grid."""
    for edge, n in IMAGE_SIZE_PRESETS.items():
        if grid.shape == (n, n, n):
            return LutImageInfo(edge, edge, n, n, n)
    presets = ", ".join(f"{n}x{n}x{n}" for n in sorted(IMAGE_SIZE_PRESETS.values()))
    raise InvalidImageDimensionsError(
        f"no preset image size for a {grid.width}x{grid.height}x{grid.depth} LUT "
        f"(supported: {presets}); pass the image size explicitly"
    )


def _as_pixel_array(pixels: Any, info: LutImageInfo) -> np.ndarray:
    arr = np.asarray(pixels, dtype=np.uint8)
    if arr.ndim == 1:
        if arr.size != info.image_width * info.image_height * 4:
            raise SizeMismatchError(
                f"expected {info.image_width * info.image_height * 4} RGBA bytes, got {arr.size}"
            )
        return arr.reshape((info.image_height, info.image_width, 4))
    if arr.ndim != 3 or arr.shape[:2] != (info.image_height, info.image_width) or arr.shape[2] not in (3, 4):
        raise SizeMismatchError(
            f"expected {info.image_height}x{info.image_width}x4 pixels, got {arr.shape}"
        )
    return arr


def decode_lut_image(pixels: Any, info: LutImageInfo) -> LutGrid:
    """Unpack a tiled LUT image (RGBA8) into a grid; alpha is ignored."""
    info.validate()
    img = _as_pixel_array(pixels, info)

    grid = LutGrid(info.width, info.height, info.depth)
    cells = grid.cells
    for z in range(info.depth):
        px, py = info.tile_origin(z)
        tile = img[py:py + info.height, px:px + info.width, :3]
        cells[z] = tile.astype(np.float32) / 255.0

    logger.debug("decoded %r from %dx%d image", grid, info.image_width, info.image_height)
    return grid


def encode_lut_image(grid: LutGrid, info: LutImageInfo) -> np.ndarray:
    """Pack ``grid`` into an ``(image_height, image_width, 4)`` uint8 RGBA buffer.

    Pixels outside every tile are left transparent black.
    """
    info.validate()
    if grid.shape != info.lut_shape:
        raise SizeMismatchError(
            f"invalid LUT size: grid is {grid.width}x{grid.height}x{grid.depth}, "
            f"image expects {info.width}x{info.height}x{info.depth}"
        )

    img = np.zeros((info.image_height, info.image_width, 4), dtype=np.uint8)
    quantized = np.clip(np.floor(grid.cells.astype(np.float64) * 255.0 + 0.5), 0, 255).astype(np.uint8)
    for z in range(info.depth):
        px, py = info.tile_origin(z)
        img[py:py + info.height, px:px + info.width, :3] = quantized[z]
        img[py:py + info.height, px:px + info.width, 3] = 255

    logger.debug("encoded %r into %dx%d image", grid, info.image_width, info.image_height)
    return img
