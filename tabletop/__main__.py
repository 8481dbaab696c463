"""Command-line entry point for the tabletop."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from .app import TabletopApp
from .config import AssetConfig, DisplayConfig, GameConfig, TableConfig


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the pygame card tabletop.")
    parser.add_argument(
        "--width",
        type=int,
        help="Override the display width.",
    )
    parser.add_argument(
        "--height",
        type=int,
        help="Override the display height.",
    )
    parser.add_argument(
        "--fps",
        type=int,
        help="Override the target frame rate.",
    )
    parser.add_argument(
        "--fullscreen",
        dest="fullscreen",
        action="store_true",
        help="Start in full-screen mode.",
    )
    parser.add_argument(
        "--windowed",
        dest="fullscreen",
        action="store_false",
        help="Force windowed mode.",
    )
    parser.add_argument(
        "--jokers",
        action="store_true",
        help="Deal a 54 card deck including two jokers.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the shuffle and die rolls for a reproducible table.",
    )
    parser.add_argument(
        "--assets",
        type=Path,
        help="Directory holding cards/<name>.png images.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    parser.set_defaults(fullscreen=None)
    return parser


def parse_config(namespace: argparse.Namespace) -> GameConfig:
    config = GameConfig()
    display = config.display
    width = namespace.width or display.width
    height = namespace.height or display.height
    fps = namespace.fps or display.frame_rate
    fullscreen = (
        display.fullscreen
        if namespace.fullscreen is None
        else namespace.fullscreen
    )
    assets = AssetConfig(root=namespace.assets) if namespace.assets else config.assets

    return GameConfig(
        display=DisplayConfig(
            width=width,
            height=height,
            caption=display.caption,
            frame_rate=fps,
            fullscreen=fullscreen,
            background=display.background,
        ),
        assets=assets,
        table=dataclasses.replace(
            TableConfig(),
            width=width,
            height=height,
            jokers=namespace.jokers,
        ),
        seed=namespace.seed,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)
    config = parse_config(args)

    app = TabletopApp(config)
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - module use only
    raise SystemExit(main())
