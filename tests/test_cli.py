from __future__ import annotations

import json
from pathlib import Path

from PIL import Image

from lut_conv.cli import main
from lut_conv.color import LutGrid, parse_cube
from lut_conv.write import write_cube


def test_identity_then_convert_cube_to_image(tmp_path: Path) -> None:
    cube = tmp_path / "id.cube"
    assert main(["identity", str(cube), "--size", "17"]) == 0
    assert parse_cube(cube.read_text(encoding="utf-8")).shape == (17, 17, 17)

    out = tmp_path / "id.png"
    rc = main(["convert", str(cube), "--to", "image", "--size", "64", "64", "64", "--mode", "linear"])
    assert rc == 0
    with Image.open(out) as im:
        assert im.size == (512, 512)


def test_convert_image_to_cube_with_title(tmp_path: Path) -> None:
    png = tmp_path / "strip.png"
    assert main(["identity", str(png), "--size", "16"]) == 0

    out = tmp_path / "strip_out.cube"
    rc = main(["convert", str(png), "--out", str(out), "--title", 'TITLE "from png"'])
    assert rc == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith('TITLE "from png"\nLUT_3D_SIZE 16\n\n')


def test_convert_with_config_file(tmp_path: Path) -> None:
    write_cube(tmp_path / "look.cube", LutGrid.identity(4, 4, 4))
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        """
convert:
  output_type: image
  output_size: 16
  output_dir: ./exports
log_level: WARNING
""",
        encoding="utf-8",
    )
    assert main(["convert", str(tmp_path / "look.cube"), "--config", str(cfg)]) == 0
    assert (tmp_path / "exports" / "look.png").exists()


def test_info_json(tmp_path: Path, capsys) -> None:
    cube = write_cube(tmp_path / "look.cube", LutGrid(5, 5, 5))
    assert main(["info", str(cube), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["kind"] == "cube"
    assert (payload["width"], payload["height"], payload["depth"]) == (5, 5, 5)


def test_errors_return_nonzero(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.cube"
    bad.write_text("LUT_3D_SIZE 2\n0 0 0\n", encoding="utf-8")
    assert main(["convert", str(bad)]) == 1
    assert "error:" in capsys.readouterr().err

    cube = write_cube(tmp_path / "odd.cube", LutGrid(5, 5, 5))
    assert main(["convert", str(cube), "--to", "image"]) == 1


def test_convert_out_without_suffix_uses_configured_type(tmp_path: Path) -> None:
    cube = write_cube(tmp_path / "look.cube", LutGrid.identity(3, 3, 3))
    out = tmp_path / "exported"
    assert main(["convert", str(cube), "--out", str(out)]) == 0
    assert parse_cube(out.read_text(encoding="utf-8")).shape == (3, 3, 3)
