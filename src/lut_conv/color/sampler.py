from __future__ import annotations

import enum
import logging
from typing import Any

import numpy as np

from .errors import InvalidFilterModeError
from .grid import LutGrid


logger = logging.getLogger(__name__)


class FilterMode(enum.Enum):
    NEAREST = "nearest"
    LINEAR = "linear"

    @classmethod
    def parse(cls, value: "FilterMode | str") -> "FilterMode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidFilterModeError(f"invalid filter mode: {value!r} (expected 'nearest' or 'linear')")


def _fractional_coords(grid: LutGrid, r: Any, g: Any, b: Any) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    # -0.5 puts each sample on its cell centre.
    fx = np.asarray(r, dtype=np.float64) * grid.width - 0.5
    fy = np.asarray(g, dtype=np.float64) * grid.height - 0.5
    fz = np.asarray(b, dtype=np.float64) * grid.depth - 0.5
    return fx, fy, fz


def _clamp_index(value: np.ndarray, size: int) -> np.ndarray:
    return np.clip(value, 0, size - 1).astype(np.intp)


def lookup_nearest(grid: LutGrid, r: Any, g: Any, b: Any) -> np.ndarray:
    """Nearest-cell lookup for normalized ``(r, g, b)``.

    Every axis is clamped to its own size. Scalar input returns a view into
    ``grid.data``; array input returns a new ``(..., 3)`` array.
    """
    fx, fy, fz = _fractional_coords(grid, r, g, b)
    # floor(f + 0.5) rounds halves up, unlike np.round.
    x = _clamp_index(np.floor(fx + 0.5), grid.width)
    y = _clamp_index(np.floor(fy + 0.5), grid.height)
    z = _clamp_index(np.floor(fz + 0.5), grid.depth)

    if x.ndim == 0 and y.ndim == 0 and z.ndim == 0:
        return grid.get(int(x), int(y), int(z))
    return grid.cells[z, y, x]


def lookup_linear(grid: LutGrid, r: Any, g: Any, b: Any) -> np.ndarray:
    """Trilinear lookup for normalized ``(r, g, b)``.

    Low and high corners are clamped per axis, the blend weights are not,
    so coordinates past the outermost cell centres extrapolate slightly.
    """
    fx, fy, fz = _fractional_coords(grid, r, g, b)

    x0 = _clamp_index(np.floor(fx), grid.width)
    y0 = _clamp_index(np.floor(fy), grid.height)
    z0 = _clamp_index(np.floor(fz), grid.depth)
    x1 = _clamp_index(x0 + 1, grid.width)
    y1 = _clamp_index(y0 + 1, grid.height)
    z1 = _clamp_index(z0 + 1, grid.depth)

    cells = grid.cells
    v000 = cells[z0, y0, x0].astype(np.float64)
    v001 = cells[z1, y0, x0].astype(np.float64)
    v010 = cells[z0, y1, x0].astype(np.float64)
    v011 = cells[z1, y1, x0].astype(np.float64)
    v100 = cells[z0, y0, x1].astype(np.float64)
    v101 = cells[z1, y0, x1].astype(np.float64)
    v110 = cells[z0, y1, x1].astype(np.float64)
    v111 = cells[z1, y1, x1].astype(np.float64)

    dx = (fx - x0)[..., None]
    dy = (fy - y0)[..., None]
    dz = (fz - z0)[..., None]

    c00 = _lerp(v000, v100, dx)
    c10 = _lerp(v010, v110, dx)
    c01 = _lerp(v001, v101, dx)
    c11 = _lerp(v011, v111, dx)

    c0 = _lerp(c00, c10, dy)
    c1 = _lerp(c01, c11, dy)

    return _lerp(c0, c1, dz).astype(np.float32)


def _lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def lookup(grid: LutGrid, r: Any, g: Any, b: Any, mode: FilterMode | str) -> np.ndarray:
    mode = FilterMode.parse(mode)
    if mode is FilterMode.NEAREST:
        return lookup_nearest(grid, r, g, b)
    if mode is FilterMode.LINEAR:
        return lookup_linear(grid, r, g, b)
    raise InvalidFilterModeError(f"invalid filter mode: {mode!r}")


def resize(grid: LutGrid, width: int, height: int, depth: int, mode: FilterMode | str) -> LutGrid:
    """Resample ``grid`` into a new, independent grid of the given size."""
    mode = FilterMode.parse(mode)
    out = LutGrid(width, height, depth)

    # Cell centres, indexed (z, y, x) to match the storage order.
    r = (np.arange(out.width, dtype=np.float64) + 0.5) / out.width
    g = (np.arange(out.height, dtype=np.float64) + 0.5) / out.height
    b = (np.arange(out.depth, dtype=np.float64) + 0.5) / out.depth
    bb, gg, rr = np.meshgrid(b, g, r, indexing="ij")

    out.cells[...] = lookup(grid, rr, gg, bb, mode)
    logger.debug("resized %r -> %r mode=%s", grid, out, mode.value)
    return out


def apply_lut(grid: LutGrid, image: Any, mode: FilterMode | str = FilterMode.LINEAR) -> np.ndarray:
    """Map an ``(..., 3)`` RGB image with values in [0, 1] through ``grid``."""
    x = np.asarray(image, dtype=np.float32)
    if x.ndim == 0 or x.shape[-1] != 3:
        raise ValueError(f"expected (..., 3) RGB image, got {x.shape}")
    return np.asarray(lookup(grid, x[..., 0], x[..., 1], x[..., 2], mode), dtype=np.float32)
