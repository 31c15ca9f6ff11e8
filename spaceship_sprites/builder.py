"""Stateful sprite generation pipeline.

A SpriteBuilder is configured once, then driven through

    single() -> [with_border | with_edges | with_padding | transform]* -> build()

``single`` creates the base sprite, each compositing step replaces the
current sprite with a new one, and ``build`` hands the result over and
empties the builder again.
"""

import dataclasses
import logging
import math
import random
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, Union

from . import validator
from .color import Color
from .config import Border, Dimension, SpriteBuilderConfig
from .errors import BuilderStateError, MirrorFillError, ValidationError
from .sprite import Sprite

logger = logging.getLogger(__name__)

PixelTransform = Callable[[Tuple[int, int], int, int, Color], Color]

DEFAULT_COLOR_COUNT = 3


class BuilderState(str, Enum):
    EMPTY = "empty"
    HAS_RESULT = "has_result"


class SpriteBuilder:
    """Builds symmetric sprites from a colour pallet.

    Args:
        config: Base configuration. A default one is created when omitted.
        rng: Random source for pallet sampling and colour selection. Pass a
            seeded ``random.Random`` for reproducible sprites.
        **options: Overrides for individual ``SpriteBuilderConfig`` fields.
    """

    def __init__(
        self,
        config: Optional[SpriteBuilderConfig] = None,
        rng: Optional[random.Random] = None,
        **options,
    ):
        if config is None:
            config = SpriteBuilderConfig(**options)
        else:
            config = dataclasses.replace(config, **options)
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        if config.color_pallet is None:
            config.color_pallet = self.random_pallet(DEFAULT_COLOR_COUNT, False, self.rng)
        self._result: Optional[Sprite] = None

    @property
    def state(self) -> BuilderState:
        return BuilderState.EMPTY if self._result is None else BuilderState.HAS_RESULT

    @property
    def blank_color(self) -> Color:
        return self.config.blank_color.copy()

    def _require_result(self) -> Sprite:
        if self._result is None:
            raise BuilderStateError("No sprite is set on builder.")
        return self._result

    def _canvas(self, dim: Sequence[int], fill: Color) -> Sprite:
        """Blank sprite carrying the current sprite's metadata."""
        current = self._require_result()
        return Sprite(
            dim=dim,
            pallet=current.pallet,
            horizontal_symmetry=current.horizontal_symmetry,
            color_fill=fill,
        )

    # ---------------------------------------------------------------------
    # Generation
    # ---------------------------------------------------------------------

    def single(self) -> "SpriteBuilder":
        """Generate one sprite whose rows mirror around the centre column."""
        width, height = self.config.sprite_dimensions
        pallet = self.get_pallet()
        pool = self.add_blanks(pallet)

        result = Sprite(
            dim=(width, height),
            pallet=pallet,
            horizontal_symmetry=self.config.horizontal_symmetry,
            color_fill=self.config.blank_color,
        )

        rows = height
        if self.config.horizontal_symmetry:
            # TODO: mirror the generated rows into the lower half; they stay blank for now.
            rows = math.ceil(height / 2)

        for y in range(rows):
            self._fill_row(result, y, pool)

        logger.debug("Generated %dx%d sprite (%d rows, pool of %d)", width, height, rows, len(pool))
        self._result = result
        return self

    def _fill_row(self, sprite: Sprite, y: int, pool: Sequence[Color]) -> None:
        """Fill row ``y`` in one left-to-right pass.

        ``element`` zig-zags 0 -> center -> 0. On the way out every colour is
        pushed onto a stack, on the way back the stack is popped, so columns
        at equal distance from the centre receive the same colour.
        """
        center = sprite.width // 2
        direction = -1
        element = 0
        stack: List[Color] = []

        for x in range(sprite.width):
            selected = self.select_color(pool)

            if element == center:
                sprite.set_pixel_at(x, y, selected)
            elif len(stack) == element + 1:
                sprite.set_pixel_at(x, y, stack.pop())
            else:
                stack.append(selected)
                sprite.set_pixel_at(x, y, selected)

            if element == center or element == 0:
                direction *= -1
            element += direction

        # even widths leave column 0 unmatched, odd widths leave nothing
        unmatched = 1 - sprite.width % 2
        if len(stack) != unmatched:
            raise MirrorFillError(
                f"Algorithm error. Row {y} ended with {len(stack)} unmatched colors, expected {unmatched}."
            )

    def with_dim(self, dim: Sequence[int]) -> "SpriteBuilder":
        """Change the sprite dimension. Only legal while the builder is empty."""
        if self._result is not None:
            raise BuilderStateError("Can't change the dimension after having a sprite already built.")

        validator.dimensions(dim, "sprite_dimensions")
        self.config.sprite_dimensions = (int(dim[0]), int(dim[1]))
        return self

    # ---------------------------------------------------------------------
    # Compositing
    # ---------------------------------------------------------------------

    def with_border(
        self,
        borders: Optional[Union[int, Sequence[int]]] = None,
        border_color: Optional[Color] = None,
    ) -> "SpriteBuilder":
        """Surround the sprite with a border.

        Args:
            borders: Pixels per side ``[up, right, down, left]`` or one value
                for all sides. Defaults to the configured border.
            border_color: Defaults to the blank colour.
        """
        current = self._require_result()
        sides = self.config.border if borders is None else validator.border(borders, "borders")
        color = self.config.blank_color if border_color is None else border_color

        self._result = self._bordered(current, sides, color)
        logger.debug("Added border %s -> %dx%d", sides, *self._result.dim)
        return self

    def _bordered(self, current: Sprite, sides: Sequence[int], color: Color) -> Sprite:
        result = self._canvas(
            (
                current.dim[Dimension.WIDTH] + sides[Border.LEFT] + sides[Border.RIGHT],
                current.dim[Dimension.HEIGHT] + sides[Border.UP] + sides[Border.DOWN],
            ),
            color,
        )
        for i in range(current.dim[Dimension.WIDTH]):
            for j in range(current.dim[Dimension.HEIGHT]):
                result.set_pixel_at(sides[Border.LEFT] + i, sides[Border.UP] + j, current.pixel_at(i, j))
        return result

    def with_edges(
        self,
        edge_color: Optional[Color] = None,
        edge_weight: float = 0.7,
        add_extra_border: bool = True,
    ) -> "SpriteBuilder":
        """Outline the silhouette with a soft edge.

        Scans top-down per column, left-to-right per row and bottom-up per
        column for the first pixel that differs from the blank colour, and
        paints the pixel just outside it with that pixel blended toward
        ``edge_color``. The left-to-right hit is mirrored onto the right side.
        A scan stops without painting if it meets ``edge_color`` first.

        Args:
            edge_color: Outline colour, black by default.
            edge_weight: Weight of ``edge_color`` in the blend.
            add_extra_border: Add a 1 pixel blank border first so the outline
                has room.
        """
        current = self._require_result()
        edge = Color.BLACK.copy() if edge_color is None else edge_color
        validator.percentage(edge_weight, "edge_weight")
        blank = self.config.blank_color

        if add_extra_border:
            sprite = self._bordered(current, [1, 1, 1, 1], blank)
        else:
            sprite = current.clone()

        width, height = sprite.dim

        # top to bottom
        for x in range(width):
            for y in range(height):
                pixel = sprite.pixel_at(x, y)
                if pixel == edge:
                    break
                if pixel != blank:
                    sprite.set_pixel_at_checked(x, y - 1, pixel.mix_weighed(edge, edge_weight))
                    break

        # left to right, mirrored onto the right side
        for y in range(height):
            for x in range(width):
                pixel = sprite.pixel_at(x, y)
                if pixel == edge:
                    break
                if pixel != blank:
                    outline = pixel.mix_weighed(edge, edge_weight)
                    sprite.set_pixel_at_checked(x - 1, y, outline)
                    sprite.set_pixel_at_checked(width - x, y, outline)
                    break

        # bottom to top
        for x in range(width):
            for y in range(height - 1, 0, -1):
                pixel = sprite.pixel_at(x, y)
                if pixel == edge:
                    break
                if pixel != blank:
                    sprite.set_pixel_at_checked(x, y + 1, pixel.mix_weighed(edge, edge_weight))
                    break

        self._result = sprite
        logger.debug("Added edges (weight=%.2f) -> %dx%d", edge_weight, width, height)
        return self

    def transform(self, func: PixelTransform) -> "SpriteBuilder":
        """Replace every pixel with ``func(dim, x, y, pixel)``.

        Example, darkening toward the bottom::

            def fade(dim, x, y, pixel):
                return pixel.mix_weighed(Color(0, 0, 0), y / dim[1])

            builder.single().transform(fade).build()

        See ``spaceship_sprites.utils`` for ready-made transforms.
        """
        current = self._require_result()
        result = current.clone()

        for x in range(current.dim[0]):
            for y in range(current.dim[1]):
                result.set_pixel_at(x, y, func(current.dim, x, y, current.pixel_at(x, y)))

        self._result = result
        return self

    def with_padding(self, dim: Sequence[int], padding_color: Optional[Color] = None) -> "SpriteBuilder":
        """Grow the canvas to ``dim`` and centre the sprite in it.

        Fails if the sprite is not built yet or if ``dim`` is smaller than
        the sprite in either direction.
        """
        current = self._require_result()
        validator.dimensions(dim, "dim")
        width, height = int(dim[0]), int(dim[1])

        if width < current.dim[0]:
            raise ValidationError(
                f"Cannot set padding because {width} is less than the existing width of {current.dim[0]}"
            )
        if height < current.dim[1]:
            raise ValidationError(
                f"Cannot set padding because {height} is less than the existing height of {current.dim[1]}"
            )

        color = self.config.blank_color if padding_color is None else padding_color
        result = self._canvas((width, height), color)

        left_offset = (width - current.dim[0]) // 2
        top_offset = (height - current.dim[1]) // 2

        for i in range(current.dim[0]):
            for j in range(current.dim[1]):
                result.set_pixel_at(left_offset + i, top_offset + j, current.pixel_at(i, j))

        self._result = result
        logger.debug("Padded to %dx%d (offset %d, %d)", width, height, left_offset, top_offset)
        return self

    def build(self) -> Sprite:
        """Return the sprite and empty the builder."""
        if self._result is None:
            raise BuilderStateError("Resulting sprite is not valid: no sprite has been generated.")

        result = self._result
        self._result = None
        return result

    # ---------------------------------------------------------------------
    # Pallet helpers
    # ---------------------------------------------------------------------

    def get_pallet(self) -> List[Color]:
        """The configured pallet, or a freshly sampled one."""
        if self.config.use_random_pallet:
            return self.random_pallet(self.config.random_color_count, self.config.random_alpha, self.rng)
        return [color.copy() for color in self.config.color_pallet]

    def select_color(self, pallet: Sequence[Color]) -> Color:
        """Pick a pool entry uniformly; blanks are expected to be in the pool already."""
        if not pallet:
            raise ValidationError("Cannot select a color from an empty pallet.")
        return pallet[self.rand_int(0, len(pallet) - 1, self.rng)]

    def add_blanks(self, pallet: Sequence[Color]) -> List[Color]:
        """Pad the pallet with blank colours so they make up ``blank_percentage`` of it."""
        blank_percentage = self.config.blank_percentage
        if blank_percentage >= 1.0:
            return [self.config.blank_color.copy()]

        blanks_to_insert = math.floor(len(pallet) * blank_percentage / (1 - blank_percentage) + 0.5)
        return list(pallet) + [self.config.blank_color.copy() for _ in range(blanks_to_insert)]

    @staticmethod
    def rand_int(low: int, high: int, rng: Optional[random.Random] = None) -> int:
        """Uniform integer in ``[low, high]``."""
        return (rng or random).randint(low, high)

    @staticmethod
    def random_pallet(
        color_count: int,
        random_alpha: bool,
        rng: Optional[random.Random] = None,
    ) -> List[Color]:
        validator.positive_integer(color_count, "color_count")
        validator.positive_non_zero(color_count, "color_count")
        return [Color.random(random_alpha, rng) for _ in range(int(color_count))]
