"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class URLMapping:
    """A stored short ID -> URL entry. Never mutated after insertion."""

    short_id: str
    original_url: str
    created_at: datetime

