"""Command-line renderer: generate one terrain and write its fields to disk."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from basins.config import SettingsError, TerrainConfig, load_settings, save_settings  # noqa: E402
from basins.fill import FILL_METHODS  # noqa: E402
from basins.log import configure_logging  # noqa: E402
from basins.pipeline import generate  # noqa: E402
from noisefield.fractal import BASES  # noqa: E402
from viz.export import array_to_npy_bytes, heightmap_png_bytes, rgb_to_png_bytes, write_bytes  # noqa: E402
from viz.views import VIEWS, render_view  # noqa: E402

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a heightmap and its standing water")
    parser.add_argument("--settings", type=Path, help="JSON settings file to start from")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--size", type=int, help="Grid side length in cells")
    parser.add_argument("--frequency", type=float)
    parser.add_argument("--amplitude", type=float)
    parser.add_argument("--octaves", type=int)
    parser.add_argument("--persistence", type=float)
    parser.add_argument("--ocean-level", dest="ocean_level", type=float)
    parser.add_argument("--basis", choices=sorted(BASES))
    parser.add_argument("--method", choices=sorted(FILL_METHODS))
    parser.add_argument("--view", choices=list(VIEWS), default="composite")
    parser.add_argument("--out", type=Path, default=Path("out"), help="Output directory")
    parser.add_argument("--save-settings", action="store_true", help="Write the effective settings to --settings")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> TerrainConfig:
    config = load_settings(args.settings) if args.settings else TerrainConfig()
    overrides = {
        name: getattr(args, name)
        for name in TerrainConfig().to_dict()
        if getattr(args, name, None) is not None
    }
    return config.replace(**overrides).validate()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = resolve_config(args)
    except (SettingsError, ValueError) as exc:
        parser.error(str(exc))

    if args.save_settings:
        if args.settings is None:
            parser.error("--save-settings needs --settings")
        save_settings(config, args.settings)

    result = generate(config)

    out_dir = Path(args.out)
    png = write_bytes(out_dir / f"{args.view}.png", rgb_to_png_bytes(render_view(result, args.view)))
    write_bytes(
        out_dir / "heightmap.png",
        heightmap_png_bytes(result.elevation.as_array(), lo=0.0, hi=config.amplitude),
    )
    write_bytes(out_dir / "elevation.npy", array_to_npy_bytes(result.elevation.as_array()))
    write_bytes(out_dir / "depth.npy", array_to_npy_bytes(result.depth.as_array()))

    logger.info("Outputs written", out=str(out_dir), preview=str(png))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
