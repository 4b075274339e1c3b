"""Crop region resolution and the crop operation."""

from dataclasses import dataclass
from typing import NamedTuple, Union
import logging

from PIL import Image

from ..errors import OperationError, PixelUnderflowError
from ..units import Coordinate, PixelUnit

logger = logging.getLogger(__name__)

# Resolved (x, y) corner in pixels
Corner = tuple[PixelUnit, PixelUnit]


class Rectangle(NamedTuple):
    """A resolved crop rectangle in pixels."""

    left: int
    top: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) as Pillow expects it."""
        return (self.left, self.top, self.left + self.width, self.top + self.height)

    def clamp(self, image_width: int, image_height: int) -> "Rectangle":
        """Intersect with the image so the crop never reads outside it."""
        left = min(self.left, image_width)
        top = min(self.top, image_height)
        return Rectangle(
            left=left,
            top=top,
            width=min(self.width, image_width - left),
            height=min(self.height, image_height - top),
        )


@dataclass(frozen=True)
class Minimum:
    """The coordinate is the far corner itself."""

    coordinate: Coordinate

    def far_corner(self, near: Corner, width: PixelUnit, height: PixelUnit) -> Corner:
        return self.coordinate.resolve(width, height)


@dataclass(frozen=True)
class Maximum:
    """The coordinate is an inset measured from the right and bottom edges."""

    coordinate: Coordinate

    def far_corner(self, near: Corner, width: PixelUnit, height: PixelUnit) -> Corner:
        inset_x, inset_y = self.coordinate.resolve(width, height)
        return width - inset_x, height - inset_y


@dataclass(frozen=True)
class CropStart:
    """The coordinate is a width/height delta from the near corner."""

    coordinate: Coordinate

    def far_corner(self, near: Corner, width: PixelUnit, height: PixelUnit) -> Corner:
        delta_x, delta_y = self.coordinate.resolve(width, height)
        return near[0] + delta_x, near[1] + delta_y


CropOrigin = Union[Minimum, Maximum, CropStart]


def resolve_crop(
    from_: Coordinate,
    to: CropOrigin,
    width: PixelUnit,
    height: PixelUnit,
    describe: object = None,
) -> Rectangle:
    """
    Turn a near corner and a crop origin policy into a pixel rectangle.

    Args:
        from_: Near (top-left) corner
        to: Policy for deriving the far (bottom-right) corner
        width: Current image width
        height: Current image height
        describe: Object used in error messages, defaults to the arguments

    Returns:
        Rectangle of (left, top, width, height)

    Raises:
        OperationError: If the far corner lies above or left of the near
            corner, or the region is empty
    """
    if describe is None:
        describe = f"from={from_!r} to={to!r}"

    near = from_.resolve(width, height)
    try:
        right, bottom = to.far_corner(near, width, height)
    except PixelUnderflowError as e:
        raise OperationError(f"Crop inset exceeds the image size for crop operation {describe}") from e

    left, top = near

    if bottom < top:
        raise OperationError(f"Bottom cannot be less than top for crop operation {describe}")

    if right < left:
        raise OperationError(f"Right cannot be less than left for crop operation {describe}")

    if bottom == top or right == left:
        raise OperationError(f"Crop region is empty for crop operation {describe}")

    return Rectangle(
        left=int(left),
        top=int(top),
        width=int(right - left),
        height=int(bottom - top),
    )


@dataclass(frozen=True)
class Crop:
    """Crop to the region between ``from_`` and the corner derived from ``to``."""

    from_: Coordinate
    to: CropOrigin

    name = "crop"

    def apply(self, image: Image.Image) -> Image.Image:
        width, height = image.size
        rect = resolve_crop(self.from_, self.to, PixelUnit(width), PixelUnit(height), describe=self)
        rect = rect.clamp(width, height)
        if rect.width == 0 or rect.height == 0:
            raise OperationError(f"Crop region lies outside the {width}x{height} image for crop operation {self!r}")
        logger.debug("Cropping %dx%d image to %s", width, height, rect)
        # Image.crop returns a new image and leaves the source untouched
        return image.crop(rect.box)
