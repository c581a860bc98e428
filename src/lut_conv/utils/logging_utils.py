from __future__ import annotations

import logging
from pathlib import Path
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int, log_file: Path | None = None) -> None:
    resolved_level = resolve_level(level)
    # stderr keeps stdout free for --json output.
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=resolved_level, format=LOG_FORMAT, handlers=handlers, force=True)
    # Pillow's plugin loader is chatty at DEBUG.
    logging.getLogger("PIL").setLevel(max(resolved_level, logging.INFO))
