"""Builder configuration: defaults, indexing enums, ship class presets."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple, Union

from . import validator
from .color import Color


class Dimension(IntEnum):
    WIDTH = 0
    HEIGHT = 1


class Border(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


# ---------------------------------------------------------------------------
# Ship classes, smallest to largest (width x height in pixels)
# ---------------------------------------------------------------------------
SHIP_CLASSES: Dict[str, Tuple[int, int]] = {
    "Fighter": (5, 5),
    "Heavy Fighter": (5, 7),
    "Corvette": (5, 9),
    "Frigate": (5, 9),
    "Destroyer": (5, 9),
    "Cruiser": (5, 13),
    "Interceptor": (5, 13),
    "Battlecruiser": (7, 17),
    "Battleship": (7, 17),
    "Carrier": (9, 21),
    "Starship": (9, 21),
    "Station": (11, 25),
}

DEFAULT_PALLET_BYTES = [
    (50, 10, 100),
    (190, 60, 50),
    (80, 70, 140),
]


def default_pallet() -> List[Color]:
    return [Color.from_bytes(*rgb) for rgb in DEFAULT_PALLET_BYTES]


@dataclass
class SpriteBuilderConfig:
    """Everything a SpriteBuilder needs to know before generating.

    ``color_pallet=None`` means three random colours, sampled by the builder
    from its own random source.
    """
    sprite_dimensions: Tuple[int, int] = (7, 7)           # width, height
    blank_percentage: float = 0.5                         # share of blank pixels
    color_pallet: Optional[List[Color]] = None
    use_random_pallet: bool = False                       # resample every sprite
    random_color_count: int = 3
    random_alpha: bool = False                            # random pallet alpha
    border: Union[int, List[int]] = 1                     # [up, right, down, left]
    horizontal_symmetry: bool = False
    blank_color: Color = field(default_factory=lambda: Color.WHITE.copy())

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        validator.dimensions(self.sprite_dimensions, "sprite_dimensions")
        self.sprite_dimensions = (int(self.sprite_dimensions[0]), int(self.sprite_dimensions[1]))
        validator.percentage(self.blank_percentage, "blank_percentage")
        validator.positive_integer(self.random_color_count, "random_color_count")
        self.border = validator.border(self.border)

    def to_dict(self) -> dict:
        return {
            "sprite_dimensions": list(self.sprite_dimensions),
            "blank_percentage": float(self.blank_percentage),
            "color_pallet": (
                None if self.color_pallet is None
                else [color.to_hexa() for color in self.color_pallet]
            ),
            "use_random_pallet": bool(self.use_random_pallet),
            "random_color_count": int(self.random_color_count),
            "random_alpha": bool(self.random_alpha),
            "border": list(self.border),
            "horizontal_symmetry": bool(self.horizontal_symmetry),
            "blank_color": self.blank_color.to_hexa(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "SpriteBuilderConfig":
        kwargs = {}
        if "sprite_dimensions" in d:
            kwargs["sprite_dimensions"] = tuple(d["sprite_dimensions"])
        if d.get("color_pallet") is not None:
            kwargs["color_pallet"] = [Color.from_hexa(c) for c in d["color_pallet"]]
        if "blank_color" in d:
            kwargs["blank_color"] = Color.from_hexa(d["blank_color"])
        for key in ("blank_percentage", "use_random_pallet", "random_color_count",
                    "random_alpha", "border", "horizontal_symmetry"):
            if key in d:
                kwargs[key] = d[key]
        return cls(**kwargs)
