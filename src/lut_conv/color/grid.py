from __future__ import annotations

from typing import Any

import numpy as np

from .errors import SizeMismatchError


def _positive_dim(name: str, value: Any) -> int:
    if isinstance(value, bool) or int(value) != value or int(value) < 1:
        raise SizeMismatchError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


class LutGrid:
    """Dense 3-D LUT stored as a flat float32 buffer of RGB triples.

    Cell ``(x, y, z)`` lives at ``data[((z * height + y) * width + x) * 3]``:
    x varies fastest, then y, then z. The cube text row order and the image
    tile order both follow this layout.
    """

    def __init__(self, width: int, height: int, depth: int, data: Any = None) -> None:
        self.width = _positive_dim("width", width)
        self.height = _positive_dim("height", height)
        self.depth = _positive_dim("depth", depth)

        expected = self.width * self.height * self.depth * 3
        if data is None:
            self.data = np.zeros(expected, dtype=np.float32)
            return

        arr = np.asarray(data, dtype=np.float32)
        if not arr.flags.writeable:
            arr = arr.copy()
        if arr.ndim != 1 or arr.shape[0] != expected:
            raise SizeMismatchError(
                f"invalid data length for {self.width}x{self.height}x{self.depth} LUT: "
                f"expected {expected} values, got {arr.size}"
            )
        self.data = arr

    @classmethod
    def identity(cls, width: int, height: int, depth: int) -> "LutGrid":
        grid = cls(width, height, depth)
        axes = [
            np.linspace(0.0, 1.0, n, dtype=np.float32) if n > 1 else np.zeros(1, dtype=np.float32)
            for n in (grid.width, grid.height, grid.depth)
        ]
        cells = grid.cells
        cells[..., 0] = axes[0][None, None, :]
        cells[..., 1] = axes[1][None, :, None]
        cells[..., 2] = axes[2][:, None, None]
        return grid

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.width, self.height, self.depth)

    @property
    def cells(self) -> np.ndarray:
        """``(depth, height, width, 3)`` view sharing memory with ``data``."""
        return self.data.reshape((self.depth, self.height, self.width, 3))

    def _offset(self, x: int, y: int, z: int) -> int:
        return ((z * self.height + y) * self.width + x) * 3

    def get(self, x: int, y: int, z: int) -> np.ndarray:
        # Returns a view; callers clamp indices and must not keep it around.
        i = self._offset(x, y, z)
        return self.data[i:i + 3]

    def set(self, x: int, y: int, z: int, value: Any) -> None:
        i = self._offset(x, y, z)
        self.data[i:i + 3] = np.asarray(value, dtype=np.float32)[:3]

    def copy(self) -> "LutGrid":
        return LutGrid(self.width, self.height, self.depth, self.data.copy())

    def __repr__(self) -> str:
        return f"LutGrid(width={self.width}, height={self.height}, depth={self.depth})"
