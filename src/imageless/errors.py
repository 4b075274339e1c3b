"""Exception hierarchy for imageless."""


class ImagelessError(Exception):
    """Base class for every error raised by imageless."""


class PercentageOutOfRangeError(ImagelessError, ValueError):
    """A percentage outside [0.0, 1.0] was given to a PercentageUnit."""

    def __init__(self, percentage: float):
        self.percentage = percentage
        super().__init__(f"Percentage out of range: {percentage}")


class PixelUnderflowError(ImagelessError, ArithmeticError):
    """A PixelUnit subtraction would go below zero."""

    def __init__(self, minuend: int, subtrahend: int):
        self.minuend = minuend
        self.subtrahend = subtrahend
        super().__init__(f"Cannot subtract {subtrahend}px from {minuend}px")


class OperationError(ImagelessError):
    """An operation rejected its own parameters for the current image."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Error processing image: {message}")


class ImageError(ImagelessError):
    """Decoding, encoding or file access failed."""


class ConfigError(ImagelessError, ValueError):
    """A configuration document could not be turned into operations."""
