"""Reading images from and writing images to bytes and files."""

import io
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Union

from PIL import Image

from .errors import ImageError

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, BinaryIO]


class ImageFormat(str, Enum):
    """Output containers a configuration may ask for."""

    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    ICO = "ico"
    BMP = "bmp"
    FARBFELD = "farbfeld"
    TGA = "tga"
    OPENEXR = "openexr"
    TIFF = "tiff"
    AVIF = "avif"
    QOI = "qoi"
    WEBP = "webp"


# Pillow save plugin names; None means Pillow has no writer for it
PILLOW_FORMATS: dict[ImageFormat, str | None] = {
    ImageFormat.PNG: "PNG",
    ImageFormat.JPEG: "JPEG",
    ImageFormat.GIF: "GIF",
    ImageFormat.ICO: "ICO",
    ImageFormat.BMP: "BMP",
    ImageFormat.FARBFELD: None,
    ImageFormat.TGA: "TGA",
    ImageFormat.OPENEXR: None,
    ImageFormat.TIFF: "TIFF",
    ImageFormat.AVIF: "AVIF",
    ImageFormat.QOI: "QOI",
    ImageFormat.WEBP: "WEBP",
}


@dataclass(frozen=True)
class OutputFormat:
    """An output container, plus the JPEG quality when it is JPEG."""

    format: ImageFormat
    quality: int | None = None

    def __post_init__(self):
        if self.format is ImageFormat.JPEG:
            if self.quality is None or not 0 <= self.quality <= 100:
                raise ValueError(f"JPEG quality must be in 0..100, got {self.quality}")
        elif self.quality is not None:
            raise ValueError(f"Quality only applies to JPEG, not {self.format.value}")

    @classmethod
    def png(cls) -> "OutputFormat":
        return cls(ImageFormat.PNG)

    @classmethod
    def jpeg(cls, quality: int) -> "OutputFormat":
        return cls(ImageFormat.JPEG, quality)

    def save_params(self) -> dict:
        if self.quality is not None:
            return {"quality": self.quality}
        return {}


def decode(source: ImageSource) -> Image.Image:
    """
    Decode an image, detecting its format from the content.

    Args:
        source: File path, raw bytes, or a binary file object

    Returns:
        Fully loaded PIL Image

    Raises:
        ImageError: If the source cannot be read or is not a known image format
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    try:
        with Image.open(source) as image:
            image.load()
            return image
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageError(f"Could not decode image from {_describe(source)}: {e}") from e


def encode(image: Image.Image, out_format: OutputFormat) -> bytes:
    """
    Encode an image into the given container.

    Raises:
        ImageError: If Pillow cannot write the format or the image
    """
    pillow_format = PILLOW_FORMATS[out_format.format]
    if pillow_format is None:
        raise ImageError(f"Writing {out_format.format.value} images is not supported")

    # JPEG has no alpha channel
    if out_format.format is ImageFormat.JPEG and image.mode in ("LA", "RGBA", "P", "PA"):
        image = image.convert("L" if image.mode == "LA" else "RGB")

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=pillow_format, **out_format.save_params())
    except (KeyError, OSError, ValueError) as e:
        raise ImageError(f"Could not encode image as {out_format.format.value}: {e}") from e

    data = buffer.getvalue()
    logger.debug("Encoded %s image: %d bytes", out_format.format.value, len(data))
    return data


def save(image: Image.Image, path: Path | str, out_format: OutputFormat) -> None:
    """Encode an image and write it to ``path``."""
    data = encode(image, out_format)
    path = Path(path)
    try:
        path.write_bytes(data)
    except OSError as e:
        raise ImageError(f"Could not write {path}: {e}") from e

    logger.info("Saved %s image to %s", out_format.format.value, path)


def _describe(source: object) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return type(source).__name__
