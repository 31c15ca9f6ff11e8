"""RGBA colour value with channels normalised to ``[0.0, 1.0]``.

Channels may be given either as fractions or as byte magnitudes; anything in
``[0, 1]`` is taken as a fraction, anything else in ``[0, 255]`` is divided by
255. Values outside both ranges are rejected.
"""

import random as _random
from numbers import Real
from typing import List, Optional, Tuple

from . import validator
from .errors import ValidationError

CHANNEL_NAMES = ("Red", "Green", "Blue", "Alpha")
ALPHA_DECIMALS = 4


def _within_pct(n) -> bool:
    return 0.0 <= n <= 1.0


def _within_byte(n) -> bool:
    return 0.0 <= n <= 255.0


def to_pct(n, value_name: str = "value") -> float:
    """Normalise one channel value to a fraction."""
    if isinstance(n, bool) or not isinstance(n, Real):
        raise ValidationError(f"Invalid {value_name}: {n!r} when converting color. Expected a number.")
    if _within_pct(n):
        return float(n)
    if _within_byte(n):
        return n / 255
    raise ValidationError(
        f"Invalid {value_name}: {n} when converting color. "
        "Value N must be either 0 <= N <= 1.0 or 0 <= N <= 255."
    )


def _byte(channel: float) -> int:
    return int(round(channel * 255))


def _unit(n: float) -> float:
    # float drift in blends can land just outside [0, 1]
    return min(max(n, 0.0), 1.0)


class Color:
    """A single RGBA colour."""

    BLACK: "Color"
    WHITE: "Color"
    TRANSPARENT: "Color"

    def __init__(self, r: float, g: float, b: float, a: float = 1.0):
        self._color = [
            to_pct(r, "Red"),
            to_pct(g, "Green"),
            to_pct(b, "Blue"),
            to_pct(a, "Alpha"),
        ]

    def copy(self) -> "Color":
        return Color(*self._color)

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self._color == other._color

    __hash__ = None  # mutable through the channel setters

    def __repr__(self) -> str:
        return "Color(r={:.4f}, g={:.4f}, b={:.4f}, a={:.4f})".format(*self._color)

    def equals(self, other: "Color") -> bool:
        return self == other

    # -- channels ---------------------------------------------------------

    @property
    def red(self) -> float:
        return self._color[0]

    @red.setter
    def red(self, value: float) -> None:
        self._color[0] = to_pct(value, "Red")

    @property
    def green(self) -> float:
        return self._color[1]

    @green.setter
    def green(self, value: float) -> None:
        self._color[1] = to_pct(value, "Green")

    @property
    def blue(self) -> float:
        return self._color[2]

    @blue.setter
    def blue(self, value: float) -> None:
        self._color[2] = to_pct(value, "Blue")

    @property
    def alpha(self) -> float:
        return self._color[3]

    @alpha.setter
    def alpha(self, value: float) -> None:
        self._color[3] = to_pct(value, "Alpha")

    @property
    def red_byte(self) -> float:
        return self._color[0] * 255

    @property
    def green_byte(self) -> float:
        return self._color[1] * 255

    @property
    def blue_byte(self) -> float:
        return self._color[2] * 255

    @property
    def alpha_byte(self) -> float:
        return self._color[3] * 255

    # -- blending ---------------------------------------------------------

    def mix(self, other: "Color") -> "Color":
        """Average each channel with ``other``."""
        return Color(*[_unit((mine + theirs) / 2) for mine, theirs in zip(self._color, other._color)])

    def mix_weighed(self, other: "Color", weight: float) -> "Color":
        """Blend toward ``other``; ``weight`` 0 keeps self, 1 yields other."""
        validator.percentage(weight, "weight")
        return Color(
            *[_unit(mine * (1 - weight) + theirs * weight) for mine, theirs in zip(self._color, other._color)]
        )

    # -- conversions ------------------------------------------------------

    def to_array(self) -> List[float]:
        return list(self._color)

    def to_byte_array(self) -> Tuple[int, int, int, int]:
        """Rounded ``(r, g, b, a)`` bytes."""
        return tuple(_byte(channel) for channel in self._color)

    def to_int(self) -> int:
        """Pack into ``0xAARRGGBB``."""
        r, g, b, a = self.to_byte_array()
        return (a << 24) | (r << 16) | (g << 8) | b

    def to_hexa(self) -> str:
        r, g, b, a = self.to_byte_array()
        return f"{a:02x}{r:02x}{g:02x}{b:02x}"

    def to_rgb(self) -> str:
        r, g, b, _ = self.to_byte_array()
        return f"rgb({r}, {g}, {b})"

    def to_rgba(self) -> str:
        """CSS ``rgba()`` string; alpha is rounded to 4 decimal places."""
        r, g, b, _ = self.to_byte_array()
        alpha = f"{self.alpha:.{ALPHA_DECIMALS}f}".rstrip("0").rstrip(".")
        return f"rgba({r}, {g}, {b}, {alpha})"

    @classmethod
    def from_bytes(cls, r: int, g: int, b: int, a: int = 255) -> "Color":
        """Build from byte channels without the fraction/byte ambiguity."""
        for value, name in zip((r, g, b, a), CHANNEL_NAMES):
            validator.positive_integer(value, name)
            if value > 255:
                raise ValidationError(f"Invalid {name}: {value} when converting color. Expected a byte.")
        return cls(r / 255, g / 255, b / 255, a / 255)

    @classmethod
    def from_int(cls, color_value: int) -> "Color":
        """Decode ``0xAARRGGBB``."""
        validator.positive_integer(color_value, "color_value")
        color_value = int(color_value)
        if color_value > 0xFFFFFFFF:
            raise ValidationError(f"[Validator] Expected 32-bit value for color_value but found {color_value}")

        a = (color_value >> 24) & 0xFF
        r = (color_value >> 16) & 0xFF
        g = (color_value >> 8) & 0xFF
        b = color_value & 0xFF
        return cls.from_bytes(r, g, b, a)

    @classmethod
    def from_hexa(cls, color_string: str) -> "Color":
        """Decode ``AARRGGBB`` with an optional ``#`` or ``0x`` prefix."""
        text = color_string.strip()
        if text.startswith("#"):
            text = text[1:]
        if text[:2].lower() == "0x":
            text = text[2:]
        try:
            value = int(text, 16)
        except ValueError:
            raise ValidationError(f"Invalid hex color: {color_string!r}") from None
        return cls.from_int(value)

    @classmethod
    def random(cls, random_alpha: bool = True, rng: Optional[_random.Random] = None) -> "Color":
        """Sample each channel uniformly; alpha is opaque unless ``random_alpha``."""
        rng = rng or _random
        return cls(
            rng.random(),
            rng.random(),
            rng.random(),
            rng.random() if random_alpha else 1.0,
        )


Color.BLACK = Color(0, 0, 0, 1)
Color.WHITE = Color(1, 1, 1, 1)
Color.TRANSPARENT = Color(0, 0, 0, 0)
