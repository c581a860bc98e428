from __future__ import annotations

from pathlib import Path

from lut_conv.color import LutGrid, LutImageInfo, encode_lut_image, info_for_grid
from lut_conv.decode.base import MissingDependencyError


def write_lut_image(path: Path, grid: LutGrid, image_size: tuple[int, int] | None = None) -> Path:
    try:
        from PIL import Image
    except Exception as exc:  # pragma: no cover - optional dependency
        raise MissingDependencyError("Pillow is required for LUT images: pip install Pillow") from exc

    if image_size is None:
        info = info_for_grid(grid)
    else:
        info = LutImageInfo(int(image_size[0]), int(image_size[1]), grid.width, grid.height, grid.depth)

    rgba = encode_lut_image(grid, info)
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.fromarray(rgba)
    if path.suffix.lower() in {".jpg", ".jpeg"}:
        # JPEG has no alpha channel.
        image = image.convert("RGB")
    image.save(path)
    return path
