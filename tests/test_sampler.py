from __future__ import annotations

import numpy as np
import pytest

from lut_conv.color import (
    FilterMode,
    InvalidFilterModeError,
    LutGrid,
    apply_lut,
    lookup,
    lookup_linear,
    lookup_nearest,
    resize,
)


def _random_grid(width: int, height: int, depth: int, seed: int = 7) -> LutGrid:
    rng = np.random.default_rng(seed)
    return LutGrid(width, height, depth, rng.random(width * height * depth * 3, dtype=np.float32))


@pytest.mark.parametrize("shape", [(1, 1, 1), (2, 2, 2), (5, 3, 7), (16, 16, 16)])
def test_uniform_grid_linear_lookup_is_exact(shape: tuple[int, int, int]) -> None:
    grid = LutGrid(*shape)
    grid.cells[...] = (0.3, 0.6, 0.9)
    out = lookup(grid, 0.5, 0.5, 0.5, "linear")
    assert out.dtype == np.float32
    assert out.tolist() == np.array([0.3, 0.6, 0.9], dtype=np.float32).tolist()


@pytest.mark.parametrize("mode", [FilterMode.NEAREST, FilterMode.LINEAR])
def test_resize_to_same_size_reproduces_grid(mode: FilterMode) -> None:
    grid = _random_grid(5, 4, 3)
    out = resize(grid, 5, 4, 3, mode)
    assert out is not grid
    assert np.array_equal(out.data, grid.data)


def test_resize_does_not_touch_source() -> None:
    grid = _random_grid(4, 4, 4)
    before = grid.data.copy()
    out = resize(grid, 9, 2, 5, "linear")
    assert out.shape == (9, 2, 5)
    assert np.array_equal(grid.data, before)
    assert not np.shares_memory(out.data, grid.data)


def test_resize_nearest_downsample_picks_rounded_cells() -> None:
    grid = LutGrid.identity(4, 4, 4)
    out = resize(grid, 2, 2, 2, FilterMode.NEAREST)
    # Target centres land on 0.5 and 2.5, which round up to cells 1 and 3.
    assert np.array_equal(out.get(0, 0, 0), grid.get(1, 1, 1))
    assert np.array_equal(out.get(1, 1, 1), grid.get(3, 3, 3))


def test_resize_linear_upsample_midpoint() -> None:
    grid = LutGrid.identity(2, 2, 2)
    out = resize(grid, 3, 3, 3, "linear")
    assert np.allclose(out.get(1, 1, 1), [0.5, 0.5, 0.5])


def test_nearest_clamps_each_axis_to_its_own_size() -> None:
    grid = _random_grid(2, 4, 3)
    out = lookup_nearest(grid, 1.0, 1.0, 1.0)
    assert np.array_equal(out, grid.get(1, 3, 2))
    out = lookup_nearest(grid, -1.0, -1.0, -1.0)
    assert np.array_equal(out, grid.get(0, 0, 0))


def test_nearest_rounds_half_up() -> None:
    grid = _random_grid(2, 2, 2)
    # r=0.5 on width 2 lands exactly between cells 0 and 1.
    assert np.array_equal(lookup_nearest(grid, 0.5, 0.0, 0.0), grid.get(1, 0, 0))


def test_nearest_scalar_lookup_is_a_view() -> None:
    grid = _random_grid(3, 3, 3)
    out = lookup_nearest(grid, 0.5, 0.5, 0.5)
    assert np.shares_memory(out, grid.data)


def test_linear_lookup_at_cell_centre_hits_node() -> None:
    grid = _random_grid(4, 5, 6)
    x, y, z = 2, 3, 1
    out = lookup_linear(grid, (x + 0.5) / 4, (y + 0.5) / 5, (z + 0.5) / 6)
    assert np.allclose(out, grid.get(x, y, z), atol=1e-7)


@pytest.mark.parametrize("value", [-0.5, 0.0, 1.0, 1.5])
def test_linear_lookup_out_of_range_stays_in_bounds(value: float) -> None:
    grid = _random_grid(2, 3, 4)
    out = lookup_linear(grid, value, value, value)
    assert out.shape == (3,)
    assert np.all(np.isfinite(out))


def test_linear_lookup_extrapolates_below_first_centre() -> None:
    grid = LutGrid.identity(4, 4, 4)
    out = lookup_linear(grid, 0.0, 0.0, 0.0)
    # fx = -0.5 against nodes 0 and 1/3.
    assert out[0] == pytest.approx(-1 / 6, abs=1e-6)
    top = lookup_linear(grid, 1.0, 1.0, 1.0)
    assert np.allclose(top, [1.0, 1.0, 1.0])


def test_linear_lookup_is_monotonic_along_increasing_axis() -> None:
    grid = LutGrid.identity(5, 3, 3)
    r = np.linspace(0.0, 1.0, 201)
    out = lookup_linear(grid, r, np.full_like(r, 0.5), np.full_like(r, 0.5))
    assert out.shape == (201, 3)
    assert np.all(np.diff(out[:, 0]) >= 0.0)


def test_array_lookup_matches_scalar_lookup() -> None:
    grid = _random_grid(3, 4, 5)
    rng = np.random.default_rng(1)
    pts = rng.random((10, 3))
    for mode in ("nearest", "linear"):
        batch = lookup(grid, pts[:, 0], pts[:, 1], pts[:, 2], mode)
        for i, (r, g, b) in enumerate(pts):
            assert np.allclose(batch[i], lookup(grid, r, g, b, mode))


def test_invalid_filter_mode() -> None:
    grid = LutGrid(2, 2, 2)
    with pytest.raises(InvalidFilterModeError):
        lookup(grid, 0.5, 0.5, 0.5, "cubic")
    with pytest.raises(InvalidFilterModeError):
        resize(grid, 3, 3, 3, "bicubic")
    with pytest.raises(InvalidFilterModeError):
        FilterMode.parse(1)  # type: ignore[arg-type]
    assert FilterMode.parse(" Linear ") is FilterMode.LINEAR


def test_apply_lut_maps_each_pixel() -> None:
    grid = _random_grid(4, 4, 4)
    img = np.array([[[0.1, 0.2, 0.3], [0.9, 0.5, 0.0]]], dtype=np.float32)
    out = apply_lut(grid, img)
    assert out.shape == img.shape
    assert out.dtype == np.float32
    assert np.allclose(out[0, 1], lookup_linear(grid, 0.9, 0.5, 0.0))

    with pytest.raises(ValueError):
        apply_lut(grid, np.zeros((2, 2, 4), dtype=np.float32))
