from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from lut_conv.color import LutGrid, LutImageInfo


@dataclass
class LoadedLut:
    grid: LutGrid
    source_path: Path
    kind: str
    image_info: LutImageInfo | None = None

    def describe(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "source": str(self.source_path),
            "kind": self.kind,
            "width": self.grid.width,
            "height": self.grid.height,
            "depth": self.grid.depth,
        }
        if self.image_info is not None:
            payload["image_width"] = self.image_info.image_width
            payload["image_height"] = self.image_info.image_height
        return payload
