"""Error types raised by the shortener engine."""


class ShortenerError(Exception):
    """Base class for all shortener errors."""


class InvalidURLError(ShortenerError, ValueError):
    """The candidate URL failed validation. The mapping is left untouched."""


class NotFoundError(ShortenerError, LookupError):
    """The short ID is empty or not present in the mapping."""


class GenerationExhaustedError(ShortenerError, RuntimeError):
    """Every generation attempt collided with an existing short ID."""
