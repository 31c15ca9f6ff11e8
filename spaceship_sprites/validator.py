"""Precondition checks shared by colours, sprites and the builder."""

from numbers import Integral, Real
from typing import List, Sequence, Union

from .errors import ValidationError


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def integer(value, name: str) -> None:
    if isinstance(value, Integral) and not isinstance(value, bool):
        return
    if _is_number(value) and float(value).is_integer():
        return
    raise ValidationError(f"[Validator] Expected integer for {name} but found {value!r}")


def positive(value, name: str) -> None:
    if not _is_number(value) or value < 0.0:
        raise ValidationError(f"[Validator] Expected positive value for {name} but found {value!r}")


def percentage(value, name: str) -> None:
    if not _is_number(value) or value < 0.0 or value > 1.0:
        raise ValidationError(f"[Validator] Expected percentage value for {name} but found {value!r}")


def positive_non_zero(value, name: str) -> None:
    if not _is_number(value) or value <= 0.0:
        raise ValidationError(
            f"[Validator] Expected positive non-zero value for {name} but found {value!r}"
        )


def positive_integer(value, name: str) -> None:
    integer(value, name)
    positive(value, name)


def dimensions(dim: Sequence, name: str = "dim") -> None:
    """Check a ``(width, height)`` pair of positive non-zero integers."""
    if len(dim) != 2:
        raise ValidationError(f"[Validator] Expected [width, height] for {name} but found {dim!r}")
    positive_integer(dim[0], f"{name}[0]")
    positive_non_zero(dim[0], f"{name}[0]")
    positive_integer(dim[1], f"{name}[1]")
    positive_non_zero(dim[1], f"{name}[1]")


def border(value: Union[int, Sequence[int]], name: str = "border") -> List[int]:
    """Normalise a border spec to ``[up, right, down, left]`` and check it.

    A scalar expands to four equal sides.
    """
    if _is_number(value) or isinstance(value, bool):
        sides = [value] * 4
    else:
        sides = list(value)
    if len(sides) != 4:
        raise ValidationError(
            f"[Validator] Expected [up, right, down, left] for {name} but found {value!r}"
        )
    for i, side in enumerate(sides):
        positive_integer(side, f"{name}[{i}]")
    return [int(side) for side in sides]
