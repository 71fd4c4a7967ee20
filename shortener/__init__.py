"""Core engine for URL shortener."""

from .shortcode import ShortIDGenerator
from .engine import URLShortener
from .errors import (
    ShortenerError,
    InvalidURLError,
    NotFoundError,
    GenerationExhaustedError,
)
from .models import URLMapping

__all__ = [
    "ShortIDGenerator",
    "URLShortener",
    "ShortenerError",
    "InvalidURLError",
    "NotFoundError",
    "GenerationExhaustedError",
    "URLMapping",
]
