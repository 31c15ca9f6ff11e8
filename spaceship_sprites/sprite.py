"""Fixed-size raster of colours with SVG and buffer exports."""

from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np
from PIL import Image

from . import validator
from .color import Color
from .errors import ValidationError, PixelIndexError

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def _fmt(n) -> str:
    """Render a size without a trailing ``.0`` for whole numbers."""
    if float(n).is_integer():
        return str(int(n))
    return repr(float(n))


class Sprite:
    """A ``width x height`` raster stored row-major.

    Pixel ``(x, y)`` lives at index ``y * width + x``. Colours are copied on
    the way in and on the way out, so callers never alias the raster.
    """

    def __init__(
        self,
        dim: Sequence[int],
        array: Optional[Sequence[Color]] = None,
        pallet: Optional[Sequence[Color]] = None,
        horizontal_symmetry: bool = False,
        color_fill: Optional[Color] = None,
    ):
        validator.dimensions(dim, "dim")
        width, height = int(dim[0]), int(dim[1])

        fill = color_fill if color_fill is not None else Color(0, 0, 0, 1)
        if array is None:
            pixels = [fill.copy() for _ in range(width * height)]
        else:
            pixels = [color.copy() for color in array]

        if width * height != len(pixels):
            raise ValidationError(
                f"Invalid array dimensions [{width}, {height}] for array of length {len(pixels)}"
            )

        self._dim: Tuple[int, int] = (width, height)
        self._array: List[Color] = pixels
        self._pallet: List[Color] = self._trim_pallet(pallet or [])
        self._horizontal_symmetry = bool(horizontal_symmetry)

    @property
    def dim(self) -> Tuple[int, int]:
        return self._dim

    @property
    def width(self) -> int:
        return self._dim[0]

    @property
    def height(self) -> int:
        return self._dim[1]

    @property
    def array(self) -> List[Color]:
        return [color.copy() for color in self._array]

    @property
    def pallet(self) -> List[Color]:
        return [color.copy() for color in self._pallet]

    @property
    def horizontal_symmetry(self) -> bool:
        return self._horizontal_symmetry

    def clone(self) -> "Sprite":
        return Sprite(
            dim=self._dim,
            array=self._array,
            pallet=self._pallet,
            horizontal_symmetry=self._horizontal_symmetry,
        )

    def __repr__(self) -> str:
        return f"Sprite(dim={self._dim}, pallet={len(self._pallet)} colors)"

    # -- pixel access -----------------------------------------------------

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_index(x, y)
        return self._array[y * self._dim[0] + x].copy()

    def set_pixel_at(self, x: int, y: int, color: Color) -> None:
        self._check_index(x, y)
        self._array[y * self._dim[0] + x] = color.copy()

    def set_pixel_at_checked(self, x: int, y: int, color: Color) -> bool:
        """Write only when ``(x, y)`` is inside the raster.

        Returns whether the pixel was written.
        """
        if not self._in_bounds(x, y):
            return False
        self._array[y * self._dim[0] + x] = color.copy()
        return True

    def array_values(self) -> List[List[float]]:
        return [color.to_array() for color in self._array]

    def matrix(self) -> List[List[List[float]]]:
        """Channel values indexed as ``matrix()[x][y]``."""
        return [
            [self.pixel_at(x, y).to_array() for y in range(self._dim[1])]
            for x in range(self._dim[0])
        ]

    # -- svg ----------------------------------------------------------------

    def svg_width(self, width: float, unit: str = "px") -> str:
        """SVG at the next whole multiple of the raster width; height follows."""
        w = width + self._dim[0] - (width % self._dim[0])
        h = self._dim[1] * w / self._dim[0]
        return self.svg_exact(w, h, unit)

    def svg_height(self, height: float, unit: str = "px") -> str:
        """SVG at the next whole multiple of the raster height; width follows."""
        h = height + self._dim[1] - (height % self._dim[1])
        w = self._dim[0] * h / self._dim[1]
        return self.svg_exact(w, h, unit)

    def svg(self, width: float, height: float, unit: str = "px") -> str:
        w = width + self._dim[0] - (width % self._dim[0])
        h = height + self._dim[1] - (height % self._dim[1])
        return self.svg_exact(w, h, unit)

    def svg_exact(self, width: float, height: float, unit: str = "px", parameters: str = "") -> str:
        """Render one ``1x1`` rect per pixel inside a native-size viewBox.

        Args:
            width: Output width, in ``unit``.
            height: Output height, in ``unit``.
            unit: CSS unit suffix for the width and height attributes.
            parameters: Extra attribute text placed on the root element.
        """
        extra = f" {parameters.strip()}" if parameters.strip() else ""
        parts = [
            f'<svg xmlns="{SVG_NAMESPACE}"{extra} width="{_fmt(width)}{unit}" '
            f'height="{_fmt(height)}{unit}" viewBox="0 0 {self._dim[0]} {self._dim[1]}">'
        ]

        for x in range(self._dim[0]):
            for y in range(self._dim[1]):
                rgba = self._array[y * self._dim[0] + x].to_rgba()
                parts.append(f'<rect width="1" height="1" x="{x}" y="{y}" style="fill:{rgba};" />')

        parts.append("</svg>")
        return "".join(parts)

    def svg_scale(self, pixel_size: float, unit: str = "px") -> str:
        """SVG where every pixel is a ``pixel_size`` square."""
        validator.positive_non_zero(pixel_size, "pixel_size")
        return self.svg_exact(self._dim[0] * pixel_size, self._dim[1] * pixel_size, unit)

    # -- buffers --------------------------------------------------------------

    def data(self) -> np.ndarray:
        """One packed ``0xAARRGGBB`` value per pixel."""
        return np.array([color.to_int() for color in self._array], dtype=np.uint32)

    def bytes(self) -> np.ndarray:
        """Three bytes per pixel: red, green, blue."""
        result = np.zeros(len(self._array) * 3, dtype=np.uint8)
        for index, color in enumerate(self._array):
            r, g, b, _ = color.to_byte_array()
            result[index * 3:index * 3 + 3] = (r, g, b)
        return result

    def to_array(self) -> np.ndarray:
        """RGBA raster as an ``(H, W, 4)`` uint8 array."""
        flat = np.array([color.to_byte_array() for color in self._array], dtype=np.uint8)
        return flat.reshape(self._dim[1], self._dim[0], 4)

    def to_image(self, scale: int = 1) -> Image.Image:
        """RGBA Pillow image, nearest-neighbour upscaled by ``scale``."""
        validator.positive_integer(scale, "scale")
        validator.positive_non_zero(scale, "scale")
        scale = int(scale)
        pixels = self.to_array()
        if scale > 1:
            pixels = cv2.resize(
                pixels,
                (self._dim[0] * scale, self._dim[1] * scale),
                interpolation=cv2.INTER_NEAREST,
            )
        return Image.fromarray(pixels)

    @staticmethod
    def builder(**options) -> "SpriteBuilder":  # noqa: F821
        from .builder import SpriteBuilder

        return SpriteBuilder(**options)

    @staticmethod
    def _trim_pallet(pallet: Sequence[Color]) -> List[Color]:
        return [color.copy() for color in pallet if color != Color.BLACK]

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._dim[0] and 0 <= y < self._dim[1]

    def _check_index(self, x: int, y: int) -> None:
        if not self._in_bounds(x, y):
            raise PixelIndexError(
                f"Index out of bounds [{x}, {y}] when actual dimension is [{self._dim[0]}, {self._dim[1]}]"
            )
