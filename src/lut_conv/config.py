from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lut_conv.color import DEFAULT_CUBE_HEADER, FilterMode

OUTPUT_TYPES = ("cube", "image")


@dataclass
class ConvertConfig:
    output_type: str = "cube"
    filter_mode: FilterMode = FilterMode.LINEAR
    output_size: tuple[int, int, int] | None = None
    image_size: tuple[int, int] | None = None
    lut_size: tuple[int, int, int] | None = None
    header: str = DEFAULT_CUBE_HEADER
    output_dir: Path | None = None


@dataclass
class AppConfig:
    convert: ConvertConfig = field(default_factory=ConvertConfig)
    log_level: str = "INFO"
    log_file: Path | None = None


def default_config() -> AppConfig:
    return AppConfig()


def _expand_path(value: str | None, base: Path) -> Path | None:
    if value in (None, ""):
        return None
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _as_int_tuple(raw: Any, key: str, length: int) -> tuple[int, ...] | None:
    if raw is None:
        return None
    if isinstance(raw, int) and not isinstance(raw, bool):
        raw = [raw] * length
    if not isinstance(raw, (list, tuple)) or len(raw) != length:
        raise ValueError(f"{key} must be a list of {length} integers")
    values = []
    for v in raw:
        if isinstance(v, bool) or not isinstance(v, int) or v < 1:
            raise ValueError(f"{key} must contain positive integers, got {v!r}")
        values.append(v)
    return tuple(values)


def _output_type(raw: Any) -> str:
    value = str(raw).strip().lower()
    if value not in OUTPUT_TYPES:
        raise ValueError(f"convert.output_type must be one of {', '.join(OUTPUT_TYPES)}, got {raw!r}")
    return value


def load_config(path: str | Path) -> AppConfig:
    try:
        import yaml  # type: ignore
    except Exception as exc:
        raise RuntimeError("PyYAML is required for config loading. Install with: pip install PyYAML") from exc

    cfg_path = Path(path).expanduser().resolve()
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"config root must be a mapping: {cfg_path}")

    base = cfg_path.parent
    convert_raw = raw.get("convert") or {}
    if not isinstance(convert_raw, dict):
        raise ValueError("convert must be a mapping")

    convert = ConvertConfig(
        output_type=_output_type(convert_raw.get("output_type", "cube")),
        filter_mode=FilterMode.parse(convert_raw.get("filter_mode", "linear")),
        output_size=_as_int_tuple(convert_raw.get("output_size"), "convert.output_size", 3),
        image_size=_as_int_tuple(convert_raw.get("image_size"), "convert.image_size", 2),
        lut_size=_as_int_tuple(convert_raw.get("lut_size"), "convert.lut_size", 3),
        header=str(convert_raw.get("header", DEFAULT_CUBE_HEADER)),
        output_dir=_expand_path(convert_raw.get("output_dir"), base),
    )

    app = AppConfig(
        convert=convert,
        log_level=str(raw.get("log_level", "INFO")),
        log_file=_expand_path(raw.get("log_file"), base),
    )

    ensure_dirs(app)
    return app


def ensure_dirs(config: AppConfig) -> None:
    if config.convert.output_dir is not None:
        config.convert.output_dir.mkdir(parents=True, exist_ok=True)
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
