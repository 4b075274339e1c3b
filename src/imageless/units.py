"""Pixel and percentage units used to describe image geometry."""

from dataclasses import dataclass
from typing import Union

import numpy as np

from .errors import PercentageOutOfRangeError, PixelUnderflowError


@dataclass(frozen=True, order=True)
class PixelUnit:
    """An exact, non-negative pixel count."""

    pixels: int

    def __post_init__(self):
        if self.pixels < 0:
            raise ValueError(f"Pixel count cannot be negative: {self.pixels}")

    def __add__(self, other: "PixelUnit") -> "PixelUnit":
        return PixelUnit(self.pixels + other.pixels)

    def __sub__(self, other: "PixelUnit") -> "PixelUnit":
        if other.pixels > self.pixels:
            raise PixelUnderflowError(self.pixels, other.pixels)
        return PixelUnit(self.pixels - other.pixels)

    def __int__(self) -> int:
        return self.pixels

    def as_pixel(self, dimension: "PixelUnit") -> "PixelUnit":
        return self


@dataclass(frozen=True)
class PercentageUnit:
    """
    A fraction of a reference dimension.

    The value is checked once, here; every PercentageUnit that exists
    holds a value in [0.0, 1.0].
    """

    percentage: float

    def __post_init__(self):
        # NaN fails both comparisons, so it is rejected too
        if not (0.0 <= self.percentage <= 1.0):
            raise PercentageOutOfRangeError(self.percentage)

    def __float__(self) -> float:
        return self.percentage

    def as_pixel(self, dimension: PixelUnit) -> PixelUnit:
        """
        Resolve against a dimension.

        The product is taken in single precision and truncated toward
        zero, never rounded: 3px at 0.99 is 2px, 100px at 0.29 is 29px.
        """
        product = np.float32(dimension.pixels) * np.float32(self.percentage)
        return PixelUnit(int(product))


# A position or size, either absolute or relative to the image
Unit = Union[PixelUnit, PercentageUnit]


def resolve(unit: Unit, dimension: PixelUnit) -> PixelUnit:
    """Resolve any unit to pixels against the given axis length."""
    return unit.as_pixel(dimension)


@dataclass(frozen=True)
class Coordinate:
    """
    An unresolved 2D point.

    ``x`` always resolves against the image width and ``y`` against the
    image height.
    """

    x: Unit
    y: Unit

    def resolve(self, width: PixelUnit, height: PixelUnit) -> tuple[PixelUnit, PixelUnit]:
        return self.x.as_pixel(width), self.y.as_pixel(height)
