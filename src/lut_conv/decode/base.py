from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .types import LoadedLut


class LoadError(RuntimeError):
    pass


class UnsupportedFormatError(LoadError):
    pass


class MissingDependencyError(LoadError):
    pass


class LutReader(Protocol):
    def read(self, path: Path, lut_size: tuple[int, int, int] | None = None) -> LoadedLut:
        ...
