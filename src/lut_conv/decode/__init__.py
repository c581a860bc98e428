from .base import LoadError, MissingDependencyError, UnsupportedFormatError
from .registry import ReaderRegistry, kind_for_path
from .types import LoadedLut

__all__ = [
    "LoadError",
    "MissingDependencyError",
    "UnsupportedFormatError",
    "ReaderRegistry",
    "kind_for_path",
    "LoadedLut",
]
