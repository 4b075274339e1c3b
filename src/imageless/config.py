"""Configuration loading for imageless."""

import json
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .codec import ImageFormat, OutputFormat
from .errors import ConfigError
from .pipeline.crop import CropStart, Maximum, Minimum
from .pipeline.filters import BrightnessDirection, MAX_BRIGHTNESS
from .pipeline.processor import OPERATION_REGISTRY, OperationType
from .pipeline.resize import CropMode, FilterType
from .units import Coordinate, PercentageUnit, PixelUnit, Unit

logger = logging.getLogger(__name__)

DEFAULT_FILTER = FilterType.NEAREST

CROP_ORIGINS = {
    "minimum": Minimum,
    "maximum": Maximum,
    "crop_start": CropStart,
}


@dataclass
class Config:
    """A pipeline description: what to do and how to write the result."""

    out_format: OutputFormat = field(default_factory=OutputFormat.png)
    operations: list[OperationType] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path | str) -> "Config":
        """
        Load configuration from a JSON or TOML file.

        The format is picked from the file suffix; anything other than
        ``.toml`` is read as JSON.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config {path}: {e}") from e

        try:
            if path.suffix.lower() == ".toml":
                data = tomllib.loads(text)
            else:
                data = json.loads(text)
        except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not parse config {path}: {e}") from e

        config = cls.from_dict(data)
        logger.info("Loaded config %s with %d operations", path, len(config.operations))
        return config

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create Config from a parsed document."""
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a table, got {type(data).__name__}")

        if "out_format" not in data:
            raise ConfigError("Missing required key: out_format")
        if "operations" not in data:
            raise ConfigError("Missing required key: operations")

        operations = data["operations"]
        if not isinstance(operations, list):
            raise ConfigError("operations must be a list")

        return cls(
            out_format=parse_out_format(data["out_format"]),
            operations=[parse_operation(op, f"operations[{i}]") for i, op in enumerate(operations)],
        )


def _key(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def _variant(value: Any, where: str) -> tuple[str, Any]:
    """
    Split an externally tagged value into (tag, payload).

    ``"png"`` is ("png", None); ``{"jpeg": {...}}`` is ("jpeg", {...}).
    """
    if isinstance(value, str):
        return _key(value), None
    if isinstance(value, dict) and len(value) == 1:
        tag, payload = next(iter(value.items()))
        return _key(tag), payload
    raise ConfigError(f"{where}: expected a name or a single-key table, got {value!r}")


def _table(value: Any, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where}: expected a table, got {value!r}")
    return value


def _require(table: dict, key: str, where: str) -> Any:
    if key not in table:
        raise ConfigError(f"{where}: missing required key {key!r}")
    return table[key]


def _integer(value: Any, where: str, low: int = 0, high: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{where}: expected an integer, got {value!r}")
    if value < low or (high is not None and value > high):
        bound = f"{low}..{high}" if high is not None else f">= {low}"
        raise ConfigError(f"{where}: {value} is out of range ({bound})")
    return value


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{where}: expected a number, got {value!r}")
    return float(value)


def _unwrap(payload: Any, inner: str) -> Any:
    # Accept both {pixel = 10} and {pixel = {pixels = 10}}
    if isinstance(payload, dict) and set(payload) == {inner}:
        return payload[inner]
    return payload


def parse_unit(value: Any, where: str) -> Unit:
    """
    Parse ``{pixel = n}`` or ``{percentage = p}``.

    Raises:
        ConfigError: On a malformed unit
        PercentageOutOfRangeError: If p is outside [0, 1]
    """
    tag, payload = _variant(value, where)
    if tag == "pixel":
        return PixelUnit(_integer(_unwrap(payload, "pixels"), f"{where}.pixel"))
    if tag == "percentage":
        return PercentageUnit(_number(_unwrap(payload, "percentage"), f"{where}.percentage"))
    raise ConfigError(f"{where}: unknown unit {tag!r}, expected 'pixel' or 'percentage'")


def parse_coordinate(value: Any, where: str) -> Coordinate:
    table = _table(value, where)
    return Coordinate(
        x=parse_unit(_require(table, "x", where), f"{where}.x"),
        y=parse_unit(_require(table, "y", where), f"{where}.y"),
    )


def _parse_crop(payload: Any, where: str) -> dict:
    table = _table(payload, where)
    tag, origin = _variant(_require(table, "to", where), f"{where}.to")
    if tag not in CROP_ORIGINS:
        raise ConfigError(f"{where}.to: unknown crop origin {tag!r}, expected one of {list(CROP_ORIGINS)}")
    return {
        "from_": parse_coordinate(_require(table, "from", where), f"{where}.from"),
        "to": CROP_ORIGINS[tag](parse_coordinate(origin, f"{where}.to.{tag}")),
    }


def _parse_resize(payload: Any, where: str) -> dict:
    table = _table(payload, where)

    filter_name = table.get("filter", DEFAULT_FILTER.value)
    try:
        filter = FilterType(_key(str(filter_name)).replace("_", "-"))
    except ValueError:
        raise ConfigError(
            f"{where}.filter: unknown filter {filter_name!r}, expected one of {[f.value for f in FilterType]}"
        ) from None

    crop_mode_name = _require(table, "crop_mode", where)
    try:
        crop_mode = CropMode(_key(str(crop_mode_name)))
    except ValueError:
        raise ConfigError(
            f"{where}.crop_mode: unknown mode {crop_mode_name!r}, expected one of {[m.value for m in CropMode]}"
        ) from None

    return {
        "width": parse_unit(_require(table, "width", where), f"{where}.width"),
        "height": parse_unit(_require(table, "height", where), f"{where}.height"),
        "filter": filter,
        "crop_mode": crop_mode,
    }


def _parse_brightness(payload: Any, where: str) -> dict:
    tag, amount = _variant(payload, where)
    try:
        direction = BrightnessDirection(tag)
    except ValueError:
        raise ConfigError(f"{where}: expected 'darken' or 'brighten', got {tag!r}") from None
    return {
        "direction": direction,
        "amount": _integer(amount, f"{where}.{tag}", high=MAX_BRIGHTNESS),
    }


def _parse_blur(payload: Any, where: str) -> dict:
    table = _table(payload, where)
    return {"sigma": _number(_require(table, "sigma", where), f"{where}.sigma")}


def _parse_grayscale(payload: Any, where: str) -> dict:
    if _table(payload, where):
        raise ConfigError(f"{where}: grayscale takes no parameters")
    return {}


PARAMETER_PARSERS = {
    "adjust_brightness": _parse_brightness,
    "blur": _parse_blur,
    "crop": _parse_crop,
    "grayscale": _parse_grayscale,
    "resize": _parse_resize,
}


def parse_operation(value: Any, where: str = "operation") -> OperationType:
    """Parse a single-key table such as ``{blur = {sigma = 2.0}}`` into an operation."""
    name, payload = _variant(value, where)
    if name not in OPERATION_REGISTRY:
        raise ConfigError(f"{where}: unknown operation {name!r}, expected one of {list(OPERATION_REGISTRY)}")

    params = PARAMETER_PARSERS[name](payload, f"{where}.{name}")
    return OPERATION_REGISTRY[name](**params)


def parse_out_format(value: Any) -> OutputFormat:
    """Parse ``"png"`` or ``{jpeg = {quality = 85}}``."""
    tag, payload = _variant(value, "out_format")
    # Both "web-p" and "webp" name the same format
    compact = tag.replace("_", "")
    try:
        image_format = ImageFormat(compact)
    except ValueError:
        raise ConfigError(
            f"out_format: unknown format {tag!r}, expected one of {[f.value for f in ImageFormat]}"
        ) from None

    if image_format is ImageFormat.JPEG:
        table = _table(payload, "out_format.jpeg")
        quality = _integer(_require(table, "quality", "out_format.jpeg"), "out_format.jpeg.quality", high=100)
        return OutputFormat.jpeg(quality)

    if payload:
        raise ConfigError(f"out_format.{tag}: takes no parameters")
    return OutputFormat(image_format)
