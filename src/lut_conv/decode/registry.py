from __future__ import annotations

from pathlib import Path

from .base import UnsupportedFormatError
from .cube_reader import CubeReader
from .image_reader import ImageReader
from .types import LoadedLut

CUBE_EXTENSIONS = frozenset({".cube"})
IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp"})


def kind_for_path(path: Path) -> str:
    ext = path.suffix.lower()
    if ext in CUBE_EXTENSIONS:
        return "cube"
    if ext in IMAGE_EXTENSIONS:
        return "image"
    raise UnsupportedFormatError(f"unsupported extension {ext or '<none>'} for {path}")


class ReaderRegistry:
    def __init__(self) -> None:
        self._cube_reader = CubeReader()
        self._image_reader: ImageReader | None = None

    def read(self, path: Path, lut_size: tuple[int, int, int] | None = None) -> LoadedLut:
        kind = kind_for_path(path)
        if kind == "cube":
            return self._cube_reader.read(path, lut_size=lut_size)
        if self._image_reader is None:
            self._image_reader = ImageReader()
        return self._image_reader.read(path, lut_size=lut_size)
