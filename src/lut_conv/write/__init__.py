from .cube_writer import write_cube
from .image_writer import write_lut_image

__all__ = ["write_cube", "write_lut_image"]
