"""Command line front-end for sprite generation.

Usage:
    python -m spaceship_sprites.cli single  [--dim 7x9] [--edges] [-o ship.svg|ship.png]
    python -m spaceship_sprites.cli fleet   -o <dir> [--png] [--seed 42]

Subcommands:
  single   Build one sprite and print its SVG (or write it to -o)
  fleet    Build one sprite per ship class, padded to a shared square canvas
"""

import argparse
import json
import logging
import random
import re
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .builder import SpriteBuilder
from .color import Color
from .config import SHIP_CLASSES, SpriteBuilderConfig, default_pallet
from .errors import SpriteError
from .sprite import Sprite
from .utils import TRANSFORMS

logger = logging.getLogger("spaceship_sprites")

RASTER_EXTENSIONS = {".png", ".bmp", ".gif", ".webp", ".tif", ".tiff"}


def _setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _dim(text: str) -> Tuple[int, int]:
    """Parse ``'7x9'`` (or a single ``'7'`` for a square)."""
    match = re.fullmatch(r"\s*(\d+)\s*(?:[xX]\s*(\d+))?\s*", text)
    if not match:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got {text!r}")
    width = int(match.group(1))
    height = int(match.group(2)) if match.group(2) else width
    return width, height


def _border(text: str):
    parts = [p for p in text.split(",") if p.strip()]
    try:
        values = [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected N or UP,RIGHT,DOWN,LEFT, got {text!r}") from None
    if len(values) == 1:
        return values[0]
    if len(values) != 4:
        raise argparse.ArgumentTypeError(f"Expected 1 or 4 border values, got {len(values)}")
    return values


def _color(text: str) -> Color:
    colors = _colors(text)
    if len(colors) != 1:
        raise argparse.ArgumentTypeError(f"Expected one colour, got {text!r}")
    return colors[0]


def _colors(text: str) -> List[Color]:
    """Comma separated ``AARRGGBB`` or ``RRGGBB`` hex colours."""
    colors = []
    for part in text.split(","):
        part = part.strip().lstrip("#")
        if not part:
            continue
        if len(part) == 6:
            part = "ff" + part
        try:
            colors.append(Color.from_hexa(part))
        except SpriteError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None
    return colors


def _load_config(args) -> SpriteBuilderConfig:
    """Merge an optional JSON config file with explicit CLI flags."""
    base = {}
    if args.config:
        base = json.loads(Path(args.config).read_text())

    config = SpriteBuilderConfig.from_dict(base)
    if "color_pallet" not in base:
        config.color_pallet = default_pallet()

    overrides = {
        "sprite_dimensions": getattr(args, "dim", None),
        "blank_percentage": args.blank,
        "border": args.border,
        "color_pallet": args.colors,
        "random_color_count": args.random_count,
        "blank_color": args.blank_color,
    }
    if args.random_pallet:
        overrides["use_random_pallet"] = True
    if args.random_alpha:
        overrides["random_alpha"] = True
    if args.horizontal_symmetry:
        overrides["horizontal_symmetry"] = True

    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)
    config.validate()
    return config


def _compose(builder: SpriteBuilder, args) -> SpriteBuilder:
    """Apply the compositing flags shared by all subcommands."""
    builder.single().with_border()
    if args.edges:
        builder.with_edges(edge_weight=args.edge_weight)
    if args.transform != "none":
        builder.transform(TRANSFORMS[args.transform])
    return builder


def _write(sprite: Sprite, path: Path, pixel_size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in RASTER_EXTENSIONS:
        sprite.to_image(scale=pixel_size).save(path)
    else:
        path.write_text(sprite.svg_scale(pixel_size))
    return path


# ---- Subcommand: single ----

def cmd_single(args):
    config = _load_config(args)
    builder = SpriteBuilder(config, rng=random.Random(args.seed))
    _compose(builder, args)
    if args.padding:
        builder.with_padding(args.padding)
    sprite = builder.build()

    if args.output:
        path = _write(sprite, Path(args.output), args.pixel_size)
        logger.info("Wrote %dx%d sprite → %s", sprite.dim[0], sprite.dim[1], path)
    else:
        sys.stdout.write(sprite.svg_scale(args.pixel_size) + "\n")
    return 0


# ---- Subcommand: fleet ----

def cmd_fleet(args):
    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    config = _load_config(args)
    builder = SpriteBuilder(config, rng=random.Random(args.seed))

    up, right, down, left = config.border
    outline = 2 if args.edges else 0
    side = max(
        max(w + left + right, h + up + down) + outline
        for w, h in SHIP_CLASSES.values()
    )

    manifest = []
    for name, dim in SHIP_CLASSES.items():
        builder.with_dim(dim)
        padded = _compose(builder, args).with_padding((side, side)).build()

        slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")
        svg_path = _write(padded, output_dir / f"{slug}.svg", args.pixel_size)
        record = {
            "name": name,
            "dim": list(SHIP_CLASSES[name]),
            "canvas": [side, side],
            "svg": svg_path.name,
            "pallet": [color.to_hexa() for color in padded.pallet],
        }
        if args.png:
            record["png"] = _write(padded, output_dir / f"{slug}.png", args.pixel_size).name
        manifest.append(record)
        logger.debug("Built %s (%dx%d)", name, *SHIP_CLASSES[name])

    manifest_path = output_dir / "fleet.json"
    manifest_path.write_text(json.dumps(manifest, indent=2))
    logger.info("Generated %d sprites → %s", len(manifest), output_dir)
    return 0


# ---- Argument parser ----

def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="Builder config JSON file")
    p.add_argument("--blank", type=float, default=None,
                   help="Share of blank pixels, 0..1 (default: 0.5)")
    p.add_argument("--border", type=_border, default=None,
                   help="Border width N or UP,RIGHT,DOWN,LEFT (default: 1)")
    p.add_argument("--colors", type=_colors, default=None,
                   help="Comma-separated pallet, RRGGBB or AARRGGBB")
    p.add_argument("--blank-color", type=_color, default=None,
                   help="Background colour, RRGGBB or AARRGGBB")
    p.add_argument("--random-pallet", action="store_true",
                   help="Sample a new pallet for every sprite")
    p.add_argument("--random-count", type=int, default=None,
                   help="Colours per random pallet (default: 3)")
    p.add_argument("--random-alpha", action="store_true",
                   help="Random pallet colours get a random alpha too")
    p.add_argument("--horizontal-symmetry", action="store_true")
    p.add_argument("--edges", action="store_true", help="Outline the silhouette")
    p.add_argument("--edge-weight", type=float, default=0.7,
                   help="Weight of the outline colour (default: 0.7)")
    p.add_argument("--transform", default="none", choices=["none", *TRANSFORMS],
                   help="Per-pixel effect applied after compositing")
    p.add_argument("--pixel-size", type=int, default=10,
                   help="Output units per sprite pixel (default: 10)")
    p.add_argument("--seed", type=int, default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spaceship-sprites",
        description="Generate symmetric pixel-art spaceship sprites.",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    # -- single --
    p_single = sub.add_parser("single", help="Build one sprite")
    p_single.add_argument("--dim", type=_dim, default=None,
                          help="Sprite size WIDTHxHEIGHT (default: 7x7)")
    p_single.add_argument("--padding", type=_dim, default=None,
                          help="Centre the sprite on a WIDTHxHEIGHT canvas")
    p_single.add_argument("-o", "--output", default=None,
                          help="Output .svg or raster image (default: SVG to stdout)")
    _add_common(p_single)
    p_single.set_defaults(func=cmd_single)

    # -- fleet --
    p_fleet = sub.add_parser("fleet", help="Build one sprite per ship class")
    p_fleet.add_argument("-o", "--output", required=True, help="Output directory")
    p_fleet.add_argument("--png", action="store_true", help="Also write PNG files")
    _add_common(p_fleet)
    p_fleet.set_defaults(func=cmd_fleet)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.debug)
    try:
        return args.func(args)
    except SpriteError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
