"""Ready-made per-pixel transforms for ``SpriteBuilder.transform``."""

import math
from typing import Tuple

from .color import Color


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to ``[low, high]``."""
    return min(max(value, low), high)


def transform_fade(dim: Tuple[int, int], x: int, y: int, pixel: Color) -> Color:
    """Darken rows linearly from top (untouched) toward the bottom."""
    return pixel.mix_weighed(Color(0, 0, 0), y / dim[1])


def transform_vignette(dim: Tuple[int, int], x: int, y: int, pixel: Color) -> Color:
    """Darken pixels by their distance from the sprite centre."""
    cx = dim[0] / 2
    cy = dim[1] / 2

    # measured from the pixel centre, not its origin
    dist = math.sqrt((cx - (x + 0.5)) ** 2 + (cy - (y + 0.5)) ** 2)
    weight = clamp((dist / max(dim[0], dim[1])) * 2, 0, 1)

    return pixel.mix_weighed(Color(0, 0, 0), weight)


TRANSFORMS = {
    "fade": transform_fade,
    "vignette": transform_vignette,
}
