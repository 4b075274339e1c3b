"""Image processing pipeline orchestrator."""

import logging
from pathlib import Path
from typing import Iterable, Union

import cv2
from PIL import Image

from ..codec import decode
from ..errors import ImageError, ImagelessError
from .crop import Crop
from .filters import AdjustBrightness, Blur, Grayscale, Operation
from .resize import Resize

logger = logging.getLogger(__name__)

# Operations a configuration document may name
OperationType = Union[AdjustBrightness, Blur, Crop, Grayscale, Resize]

OPERATION_REGISTRY: dict[str, type] = {
    "adjust_brightness": AdjustBrightness,
    "blur": Blur,
    "crop": Crop,
    "grayscale": Grayscale,
    "resize": Resize,
}


def run(image: Image.Image, operations: Iterable[Operation]) -> Image.Image:
    """
    Apply operations in order, each to the previous one's output.

    The first failure stops the run and later operations are not applied.
    imageless errors reach the caller unchanged; errors raised by Pillow,
    OpenCV or numpy are wrapped in ImageError.
    """
    for index, operation in enumerate(operations):
        try:
            image = operation.apply(image)
        except ImagelessError:
            raise
        except (ValueError, OSError, cv2.error) as e:
            raise ImageError(f"Operation {index} ({operation.name}) failed: {e}") from e
        logger.debug("Applied operation %d: %s -> %s %s", index, operation.name, image.mode, image.size)
    return image


class ImageProcessor:
    """
    Configured sequence of operations.

    Holds the operations only; images are passed to ``process`` one at a time.
    """

    def __init__(self, operations: Iterable[Operation] = ()):
        """
        Initialize processor with the given operations.

        Args:
            operations: Operations to apply, in order
        """
        self.operations: list[Operation] = list(operations)

    def __len__(self) -> int:
        return len(self.operations)

    def process(self, image: Image.Image) -> Image.Image:
        """
        Run image through all operations in the pipeline.

        Args:
            image: Input PIL Image

        Returns:
            Processed PIL Image

        Raises:
            ImagelessError: If an operation fails
        """
        return run(image, self.operations)

    def process_file(self, path: Path | str) -> Image.Image:
        """Decode an image file and run it through the pipeline."""
        return process_file(path, self.operations)

    @classmethod
    def from_config(cls, config) -> "ImageProcessor":
        """Create processor from a loaded Config."""
        return cls(config.operations)


def process_file(path: Path | str, operations: Iterable[Operation]) -> Image.Image:
    """
    Decode an image from disk and apply operations to it.

    Args:
        path: Image file, format detected from its contents
        operations: Operations to apply, in order

    Returns:
        Processed PIL Image

    Raises:
        ImageError: If the file cannot be read or decoded
        OperationError: If an operation rejects its parameters
    """
    image = decode(path)
    logger.info("Loaded %s (%s, %dx%d)", path, image.mode, image.width, image.height)
    return run(image, operations)
