from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from lut_conv.color import LutImageInfo, decode_lut_image, info_for_image

from .base import LoadError, MissingDependencyError
from .types import LoadedLut


logger = logging.getLogger(__name__)


try:
    from PIL import Image  # type: ignore
except Exception:  # pragma: no cover - dependency is optional
    Image = None


class ImageReader:
    """Reads tiled LUT images through Pillow."""

    def __init__(self) -> None:
        if Image is None:
            raise MissingDependencyError("Pillow is required for LUT images: pip install Pillow")

    def read(self, path: Path, lut_size: tuple[int, int, int] | None = None) -> LoadedLut:
        try:
            with Image.open(path) as im:
                rgba = np.asarray(im.convert("RGBA"), dtype=np.uint8)
        except OSError as exc:
            raise LoadError(f"unable to read LUT image {path}: {exc}") from exc

        image_height, image_width = rgba.shape[:2]
        if lut_size is None:
            info = info_for_image(image_width, image_height)
        else:
            width, height, depth = lut_size
            info = LutImageInfo(image_width, image_height, int(width), int(height), int(depth))

        grid = decode_lut_image(rgba, info)
        logger.info(
            "loaded LUT image %s image=%dx%d size=%dx%dx%d",
            path,
            image_width,
            image_height,
            grid.width,
            grid.height,
            grid.depth,
        )
        return LoadedLut(grid=grid, source_path=path, kind="image", image_info=info)
