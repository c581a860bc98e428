from .errors import (
    InsufficientDataError,
    InvalidFilterModeError,
    InvalidImageDimensionsError,
    LutError,
    MalformedHeaderError,
    SizeMismatchError,
)
from .grid import LutGrid
from .lut_cube import DEFAULT_CUBE_HEADER, parse_cube, serialize_cube
from .lut_image import IMAGE_SIZE_PRESETS, LutImageInfo, decode_lut_image, encode_lut_image, info_for_grid, info_for_image
from .sampler import FilterMode, apply_lut, lookup, lookup_linear, lookup_nearest, resize

__all__ = [
    "LutError",
    "SizeMismatchError",
    "MalformedHeaderError",
    "InsufficientDataError",
    "InvalidImageDimensionsError",
    "InvalidFilterModeError",
    "LutGrid",
    "FilterMode",
    "lookup",
    "lookup_nearest",
    "lookup_linear",
    "resize",
    "apply_lut",
    "DEFAULT_CUBE_HEADER",
    "parse_cube",
    "serialize_cube",
    "IMAGE_SIZE_PRESETS",
    "LutImageInfo",
    "decode_lut_image",
    "encode_lut_image",
    "info_for_grid",
    "info_for_image",
]
