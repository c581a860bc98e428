from __future__ import annotations

from pathlib import Path

from lut_conv.color import DEFAULT_CUBE_HEADER, LutGrid, serialize_cube


def write_cube(path: Path, grid: LutGrid, header: str = DEFAULT_CUBE_HEADER) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_cube(grid, header), encoding="utf-8")
    return path
