"""Procedural, symmetric pixel-art spaceship sprites."""

from __future__ import annotations

from .builder import BuilderState, SpriteBuilder
from .color import Color
from .config import SHIP_CLASSES, Border, Dimension, SpriteBuilderConfig, default_pallet
from .errors import (
    BuilderStateError,
    MirrorFillError,
    PixelIndexError,
    SpriteError,
    ValidationError,
)
from .sprite import Sprite
from .utils import clamp, transform_fade, transform_vignette

__all__ = [
    "Border",
    "BuilderState",
    "BuilderStateError",
    "Color",
    "Dimension",
    "MirrorFillError",
    "PixelIndexError",
    "SHIP_CLASSES",
    "Sprite",
    "SpriteBuilder",
    "SpriteBuilderConfig",
    "SpriteError",
    "ValidationError",
    "clamp",
    "default_pallet",
    "transform_fade",
    "transform_vignette",
]
