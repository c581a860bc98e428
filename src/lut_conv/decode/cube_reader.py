from __future__ import annotations

import logging
from pathlib import Path

from lut_conv.color import parse_cube

from .base import LoadError
from .types import LoadedLut


logger = logging.getLogger(__name__)


class CubeReader:
    """Reads ``.cube`` text files."""

    def read(self, path: Path, lut_size: tuple[int, int, int] | None = None) -> LoadedLut:
        # The cube header carries its own size; lut_size only applies to images.
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise LoadError(f"unable to read cube file {path}: {exc}") from exc

        grid = parse_cube(text)
        logger.info("loaded cube %s size=%dx%dx%d", path, grid.width, grid.height, grid.depth)
        return LoadedLut(grid=grid, source_path=path, kind="cube")
