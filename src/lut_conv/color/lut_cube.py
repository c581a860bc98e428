from __future__ import annotations

import logging
import re

import numpy as np

from .errors import InsufficientDataError, MalformedHeaderError
from .grid import LutGrid


logger = logging.getLogger(__name__)

DEFAULT_CUBE_HEADER = 'TITLE "Created by lut-conv"'

_FLOAT = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_SIZE_RE = re.compile(r"^LUT_3D_SIZE[ \t]+(\S+)[ \t\r]*$", re.MULTILINE)
_ROW_RE = re.compile(rf"^\s*({_FLOAT})\s+({_FLOAT})\s+({_FLOAT})\s*$")


def parse_cube(text: str) -> LutGrid:
    """Parse ``.cube`` text into a cubic grid.

    Everything before the first numeric row is treated as header. The next
    ``N**3`` lines are the table in x-fastest order; anything after is ignored.
    """
    match = _SIZE_RE.search(text)
    if match is None:
        raise MalformedHeaderError("missing LUT_3D_SIZE in cube text")
    raw_size = match.group(1)
    if not (raw_size.isascii() and raw_size.isdigit()) or int(raw_size) < 1:
        raise MalformedHeaderError(f"invalid LUT_3D_SIZE value: {raw_size!r}")
    size = int(raw_size)

    lines = text.replace("\r", "").split("\n")
    start = next((i for i, line in enumerate(lines) if _ROW_RE.match(line)), None)
    if start is None:
        raise InsufficientDataError("cube text contains no data rows")

    expected = size * size * size
    rows = lines[start:start + expected]
    if len(rows) < expected:
        raise InsufficientDataError(f"invalid LUT size: expected {expected} rows, got {len(rows)}")

    data = np.empty(expected * 3, dtype=np.float32)
    for i, line in enumerate(rows):
        row = _ROW_RE.match(line)
        if row is None:
            raise InsufficientDataError(
                f"invalid data row {i + 1} of {expected} (line {start + i + 1}): {line.strip()!r}"
            )
        data[i * 3:i * 3 + 3] = [float(v) for v in row.groups()]

    logger.debug("parsed cube size=%d header_lines=%d", size, start)
    return LutGrid(size, size, size, data)


def serialize_cube(grid: LutGrid, header: str = "") -> str:
    # Only the width is written; the format assumes a cubic grid.
    out = [f"{header.strip()}\nLUT_3D_SIZE {grid.width}\n\n"]
    for r, g, b in grid.data.reshape(-1, 3):
        out.append(f"{r:.6f} {g:.6f} {b:.6f}\n")
    return "".join(out)
