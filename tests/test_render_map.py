from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "render_map.py"


def _load_cli():
    spec = importlib.util.spec_from_file_location("render_map", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_render_map_writes_outputs(tmp_path: Path) -> None:
    cli = _load_cli()
    out = tmp_path / "out"
    code = cli.main(
        [
            "--size", "16",
            "--octaves", "2",
            "--basis", "perlin",
            "--ocean-level", "64",
            "--view", "water",
            "--out", str(out),
        ]
    )
    assert code == 0
    assert (out / "water.png").exists()
    with Image.open(out / "heightmap.png") as img:
        assert img.mode == "L"
        assert img.size == (16, 16)
    depth = np.load(out / "depth.npy")
    elevation = np.load(out / "elevation.npy")
    assert depth.shape == elevation.shape == (16, 16)
    assert float(np.min(depth)) >= 0.0


def test_render_map_settings_file_and_overrides(tmp_path: Path) -> None:
    cli = _load_cli()
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"size": 16, "octaves": 1, "basis": "value"}), encoding="utf-8")

    args = cli.build_parser().parse_args(["--settings", str(settings), "--seed", "9"])
    config = cli.resolve_config(args)
    assert config.size == 16
    assert config.seed == 9
    assert config.basis == "value"


def test_render_map_rejects_bad_size(tmp_path: Path) -> None:
    cli = _load_cli()
    with pytest.raises(SystemExit):
        cli.main(["--size", "0", "--out", str(tmp_path)])


def test_render_map_rejects_unknown_log_level(tmp_path: Path, capsys) -> None:
    cli = _load_cli()
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--log-level", "LOUD", "--size", "16", "--out", str(tmp_path)])
    assert excinfo.value.code == 2
    assert "--log-level" in capsys.readouterr().err
    assert not any(tmp_path.iterdir())


def test_render_map_log_level_is_case_insensitive() -> None:
    cli = _load_cli()
    args = cli.build_parser().parse_args(["--log-level", "debug"])
    assert args.log_level == "DEBUG"
