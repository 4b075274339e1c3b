"""Declarative image operation pipelines."""

from .codec import ImageFormat, OutputFormat, decode, encode, save
from .config import Config
from .errors import (
    ConfigError,
    ImageError,
    ImagelessError,
    OperationError,
    PercentageOutOfRangeError,
    PixelUnderflowError,
)
from .pipeline import ImageProcessor, process_file, run
from .units import Coordinate, PercentageUnit, PixelUnit, Unit

__version__ = "0.1.0"

__all__ = [
    "Config",
    "ConfigError",
    "Coordinate",
    "ImageError",
    "ImageFormat",
    "ImageProcessor",
    "ImagelessError",
    "OperationError",
    "OutputFormat",
    "PercentageOutOfRangeError",
    "PercentageUnit",
    "PixelUnderflowError",
    "PixelUnit",
    "Unit",
    "decode",
    "encode",
    "process_file",
    "run",
    "save",
]
