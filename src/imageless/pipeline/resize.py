"""Resize resolution and the resize operation."""

from dataclasses import dataclass
from enum import Enum
import logging

from PIL import Image

from ..errors import ImageError
from ..units import PixelUnit, Unit

logger = logging.getLogger(__name__)


class FilterType(str, Enum):
    """Resampling kernel passed through to Pillow."""

    NEAREST = "nearest"
    TRIANGLE = "triangle"
    CATMULL_ROM = "catmull-rom"
    GAUSSIAN = "gaussian"
    LANCZOS3 = "lanczos3"

    @property
    def resampling(self) -> Image.Resampling:
        return _RESAMPLING[self]


# Pillow has no Gaussian resampling kernel; Hamming is its closest smooth window
_RESAMPLING = {
    FilterType.NEAREST: Image.Resampling.NEAREST,
    FilterType.TRIANGLE: Image.Resampling.BILINEAR,
    FilterType.CATMULL_ROM: Image.Resampling.BICUBIC,
    FilterType.GAUSSIAN: Image.Resampling.HAMMING,
    FilterType.LANCZOS3: Image.Resampling.LANCZOS,
}


class CropMode(str, Enum):
    """How the target box relates to the image's aspect ratio."""

    PRESERVE = "preserve"  # fit inside, keep aspect ratio
    FILL = "fill"          # cover, keep aspect ratio, crop overflow
    EXACT = "exact"        # stretch to the box


def resize_dimensions(
    width: int, height: int, target_width: int, target_height: int, fill: bool
) -> tuple[int, int]:
    """
    Scale (width, height) by a single ratio so it fits in, or covers, the target.

    Each resulting side is rounded half up and never smaller than 1.

    Raises:
        ValueError: If the source has no pixels to scale
    """
    if width == 0 or height == 0:
        raise ValueError(f"cannot scale an empty {width}x{height} image")

    width_ratio = target_width / width
    height_ratio = target_height / height
    ratio = max(width_ratio, height_ratio) if fill else min(width_ratio, height_ratio)

    new_width = max(int(width * ratio + 0.5), 1)
    new_height = max(int(height * ratio + 0.5), 1)
    return new_width, new_height


def _resize_to_fill(
    image: Image.Image, width: int, height: int, resample: Image.Resampling
) -> Image.Image:
    if width == 0 or height == 0:
        # Nothing to cover; let Pillow judge the target as it does for exact
        return image.resize((width, height), resample)

    cover = resize_dimensions(image.width, image.height, width, height, fill=True)
    scaled = image.resize(cover, resample)

    scaled_width, scaled_height = scaled.size
    # Crop whichever axis overflows, keeping the center
    if width * scaled_height > scaled_width * height:
        top = (scaled_height - height) // 2
        box = (0, top, width, top + height)
    else:
        left = (scaled_width - width) // 2
        box = (left, 0, left + width, height)
    return scaled.crop(box)


def resolve_resize(
    width: Unit,
    height: Unit,
    filter: FilterType,
    crop_mode: CropMode,
    image: Image.Image,
) -> Image.Image:
    """
    Resize an image to a box given in units of its own dimensions.

    ``width`` resolves against the image width and ``height`` against the
    image height. Zero-sized targets are handed to Pillow unchanged.

    Raises:
        ImageError: If Pillow rejects the target size, or the image is empty
    """
    image_width, image_height = image.size
    target_width = width.as_pixel(PixelUnit(image_width)).pixels
    target_height = height.as_pixel(PixelUnit(image_height)).pixels
    resample = filter.resampling

    logger.debug(
        "Resizing %dx%d to %dx%d (%s, %s)",
        image_width, image_height, target_width, target_height,
        crop_mode.value, filter.value,
    )

    try:
        if crop_mode is CropMode.PRESERVE:
            size = resize_dimensions(image_width, image_height, target_width, target_height, fill=False)
            return image.resize(size, resample)
        if crop_mode is CropMode.EXACT:
            return image.resize((target_width, target_height), resample)
        return _resize_to_fill(image, target_width, target_height, resample)
    except ValueError as e:
        raise ImageError(
            f"Could not resize {image_width}x{image_height} image to {target_width}x{target_height}: {e}"
        ) from e


@dataclass(frozen=True)
class Resize:
    """Resize to ``width`` × ``height`` using ``crop_mode`` and ``filter``."""

    width: Unit
    height: Unit
    filter: FilterType
    crop_mode: CropMode

    name = "resize"

    def apply(self, image: Image.Image) -> Image.Image:
        return resolve_resize(self.width, self.height, self.filter, self.crop_mode, image)
