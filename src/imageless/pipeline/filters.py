"""Pixel operations that never fail on their own."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol
import logging

import cv2
import numpy as np
from PIL import Image, ImageFilter

logger = logging.getLogger(__name__)

# Modes the operations work in directly; anything else is converted first
WORKING_MODES = ("L", "LA", "RGB", "RGBA")

MAX_BRIGHTNESS = 65535


class Operation(Protocol):
    """Protocol for a single pipeline step."""

    name: str

    def apply(self, image: Image.Image) -> Image.Image:
        """Apply the operation and return a new image."""
        ...


def working_copy(image: Image.Image) -> Image.Image:
    """
    Return the image in one of WORKING_MODES.

    Palette, bilevel and wide-integer images are converted to RGB, or RGBA
    when they carry transparency.
    """
    if image.mode in WORKING_MODES:
        return image
    has_alpha = "A" in image.getbands() or "transparency" in image.info
    return image.convert("RGBA" if has_alpha else "RGB")


def pixel_array(image: Image.Image) -> np.ndarray:
    """Pixels as an (H, W) or (H, W, C) uint8 array in a working mode."""
    return np.asarray(working_copy(image))


def split_alpha(arr: np.ndarray) -> tuple[np.ndarray, np.ndarray | None]:
    """Split an (H, W, C) array into color channels and an optional alpha plane."""
    if arr.ndim == 2:
        return arr, None
    if arr.shape[2] in (2, 4):
        return np.ascontiguousarray(arr[:, :, :-1]), arr[:, :, -1]
    return arr, None


def merge_alpha(color: np.ndarray, alpha: np.ndarray | None) -> np.ndarray:
    if alpha is None:
        return color
    if color.ndim == 2:
        color = color[:, :, np.newaxis]
    return np.dstack([color, alpha])


class Grayscale:
    """Convert image to grayscale, keeping any alpha channel."""

    name = "grayscale"

    def apply(self, image: Image.Image) -> Image.Image:
        image = working_copy(image)
        if image.mode in ("L", "LA"):
            # Already grayscale
            return image.copy()

        arr = pixel_array(image)
        color, alpha = split_alpha(arr)
        gray = cv2.cvtColor(color, cv2.COLOR_RGB2GRAY)
        return Image.fromarray(merge_alpha(gray, alpha))

    def __eq__(self, other):
        return isinstance(other, Grayscale)

    def __repr__(self):
        return "Grayscale()"


@dataclass(frozen=True)
class Blur:
    """Gaussian blur with the given standard deviation."""

    sigma: float

    name = "blur"

    def apply(self, image: Image.Image) -> Image.Image:
        sigma = self.sigma if self.sigma > 0 else 1.0
        return working_copy(image).filter(ImageFilter.GaussianBlur(radius=sigma))


class BrightnessDirection(str, Enum):
    DARKEN = "darken"
    BRIGHTEN = "brighten"


@dataclass(frozen=True)
class AdjustBrightness:
    """
    Add or subtract a constant from every color channel.

    Results are clamped to [0, 255]; the alpha channel is left as is.
    """

    direction: BrightnessDirection
    amount: int

    name = "adjust_brightness"

    def __post_init__(self):
        if not 0 <= self.amount <= MAX_BRIGHTNESS:
            raise ValueError(f"Brightness amount must be in 0..{MAX_BRIGHTNESS}, got {self.amount}")

    @classmethod
    def darken(cls, amount: int) -> "AdjustBrightness":
        return cls(BrightnessDirection.DARKEN, amount)

    @classmethod
    def brighten(cls, amount: int) -> "AdjustBrightness":
        return cls(BrightnessDirection.BRIGHTEN, amount)

    @property
    def offset(self) -> int:
        """Signed change applied to each channel."""
        if self.direction is BrightnessDirection.DARKEN:
            return -self.amount
        return self.amount

    def apply(self, image: Image.Image) -> Image.Image:
        arr = pixel_array(image)
        color, alpha = split_alpha(arr)
        shifted = np.clip(color.astype(np.int32) + self.offset, 0, 255).astype(np.uint8)
        return Image.fromarray(merge_alpha(shifted, alpha))


class Invert:
    """Invert color channels, keeping alpha."""

    name = "invert"

    def apply(self, image: Image.Image) -> Image.Image:
        arr = pixel_array(image)
        color, alpha = split_alpha(arr)
        return Image.fromarray(merge_alpha(cv2.bitwise_not(color), alpha))

    def __eq__(self, other):
        return isinstance(other, Invert)

    def __repr__(self):
        return "Invert()"


@dataclass(frozen=True)
class Unsharpen:
    """
    Unsharp mask sharpening.

    Each channel gains its difference from a Gaussian-blurred copy wherever
    that difference exceeds ``threshold``.
    """

    sigma: float
    threshold: int

    name = "unsharpen"

    def apply(self, image: Image.Image) -> Image.Image:
        mask = ImageFilter.UnsharpMask(radius=self.sigma, percent=100, threshold=self.threshold)
        return working_copy(image).filter(mask)
