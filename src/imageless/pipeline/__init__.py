"""Image processing pipeline components."""

from .crop import Crop, CropStart, Maximum, Minimum, Rectangle, resolve_crop
from .filters import AdjustBrightness, Blur, Grayscale, Invert, Unsharpen
from .processor import ImageProcessor, OPERATION_REGISTRY, OperationType, process_file, run
from .resize import CropMode, FilterType, Resize, resolve_resize

__all__ = [
    "AdjustBrightness",
    "Blur",
    "Crop",
    "CropMode",
    "CropStart",
    "FilterType",
    "Grayscale",
    "ImageProcessor",
    "Invert",
    "Maximum",
    "Minimum",
    "OPERATION_REGISTRY",
    "OperationType",
    "Rectangle",
    "Resize",
    "Unsharpen",
    "process_file",
    "resolve_crop",
    "resolve_resize",
    "run",
]
