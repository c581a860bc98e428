from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from lut_conv.color import FilterMode, LutGrid, resize
from lut_conv.config import OUTPUT_TYPES, ConvertConfig
from lut_conv.decode import LoadedLut, ReaderRegistry, kind_for_path
from lut_conv.write import write_cube, write_lut_image


logger = logging.getLogger(__name__)

OUTPUT_SUFFIXES = {"cube": ".cube", "image": ".png"}


@dataclass
class ConversionSession:
    """State for converting one input LUT.

    Load an input, generate an output grid (resizing when the requested size
    differs from the input), then save it as cube text or a LUT image.
    """

    config: ConvertConfig = field(default_factory=ConvertConfig)
    registry: ReaderRegistry = field(default_factory=ReaderRegistry)
    source: LoadedLut | None = None
    output: LutGrid | None = None
    output_type: str | None = None

    def load_input(self, path: Path, lut_size: tuple[int, int, int] | None = None) -> LoadedLut:
        self.clear_output()
        self.source = None
        self.source = self.registry.read(path, lut_size=lut_size or self.config.lut_size)
        return self.source

    def clear_output(self) -> None:
        self.output = None
        self.output_type = None

    def generate(
        self,
        output_type: str | None = None,
        size: tuple[int, int, int] | None = None,
        mode: FilterMode | str | None = None,
    ) -> LutGrid:
        if self.source is None:
            raise RuntimeError("no input LUT loaded")
        self.clear_output()

        out_type = (output_type or self.config.output_type).lower()
        if out_type not in OUTPUT_TYPES:
            raise ValueError(f"output type must be one of {', '.join(OUTPUT_TYPES)}, got {output_type!r}")
        resize_mode = FilterMode.parse(mode if mode is not None else self.config.filter_mode)
        target = tuple(int(v) for v in (size or self.config.output_size or self.source.grid.shape))

        grid = self.source.grid
        if target != grid.shape:
            logger.info("resizing %r to %dx%dx%d mode=%s", grid, *target, resize_mode.value)
            grid = resize(grid, target[0], target[1], target[2], resize_mode)

        self.output = grid
        self.output_type = out_type
        return grid

    def output_path(self, out_dir: Path | None = None) -> Path:
        if self.source is None or self.output_type is None:
            raise RuntimeError("no output generated")
        src = self.source.source_path
        directory = out_dir or self.config.output_dir or src.parent
        suffix = OUTPUT_SUFFIXES[self.output_type]
        path = directory / f"{src.stem}{suffix}"
        if path.resolve() == src.resolve() and self.output is not None:
            w, h, d = self.output.shape
            path = directory / f"{src.stem}_{w}x{h}x{d}{suffix}"
        return path

    def save(self, path: Path | None = None) -> Path:
        if self.output is None or self.output_type is None:
            raise RuntimeError("no output generated")
        out_path = path or self.output_path()
        if self.source is not None and out_path.resolve() == self.source.source_path.resolve():
            raise RuntimeError(f"refusing to overwrite input file {out_path}")

        if self.output_type == "cube":
            write_cube(out_path, self.output, self.config.header)
        else:
            write_lut_image(out_path, self.output, image_size=self.config.image_size)
        logger.info("wrote %s %r to %s", self.output_type, self.output, out_path)
        return out_path


def convert_file(
    config: ConvertConfig,
    input_path: Path,
    output_path: Path | None = None,
    output_type: str | None = None,
    size: tuple[int, int, int] | None = None,
    mode: FilterMode | str | None = None,
) -> Path:
    session = ConversionSession(config=config)
    session.load_input(input_path)
    if output_type is None and output_path is not None and output_path.suffix:
        output_type = kind_for_path(output_path)
    session.generate(output_type=output_type, size=size, mode=mode)
    return session.save(output_path)
