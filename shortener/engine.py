"""In-memory URL shortening engine."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .common.validators import is_valid_url
from .errors import GenerationExhaustedError, InvalidURLError, NotFoundError
from .models import URLMapping
from .rwlock import ReadWriteLock
from .shortcode import ShortIDGenerator

DEFAULT_MAX_ATTEMPTS = 10


class URLShortener:
    """Owns the short ID -> URL mapping and answers create/resolve calls.

    Safe to share between threads: creates hold the write lock for the whole
    generate/check/insert sequence, lookups share the read lock.
    """

    def __init__(
        self,
        generator: Optional[ShortIDGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        health_timeout: float = 1.0,
    ):
        """Initialize the engine with an empty mapping.

        Args:
            generator: Optional short ID generator
            logger: Optional logger
            max_attempts: Total generation attempts before giving up on collisions
            health_timeout: Seconds the health check waits for the read lock
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.generator = generator or ShortIDGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_attempts = max_attempts
        self.health_timeout = health_timeout
        self._urls: Dict[str, URLMapping] = {}
        self._lock = ReadWriteLock()

    def create(self, original_url: str) -> str:
        """Create a new short ID for a URL.

        The URL is stored exactly as given, surrounding whitespace included.

        Args:
            original_url: The original long URL

        Returns:
            The new short ID

        Raises:
            InvalidURLError: If the URL fails validation
            GenerationExhaustedError: If every attempt collided
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            self.logger.debug(f"Rejected URL {original_url!r}: {error}")
            raise InvalidURLError(f"Invalid URL: {error}")

        with self._lock.write_locked():
            for attempt in range(1, self.max_attempts + 1):
                short_id = self.generator.generate()
                if short_id in self._urls:
                    self.logger.warning(f"Short ID collision on attempt {attempt}: {short_id}")
                    continue

                self._urls[short_id] = URLMapping(
                    short_id=short_id,
                    original_url=original_url,
                    created_at=datetime.now(timezone.utc),
                )
                self.logger.info(f"Created short URL: {short_id} -> {original_url}")
                return short_id

        self.logger.error(f"Unable to generate unique short ID after {self.max_attempts} attempts")
        raise GenerationExhaustedError(
            f"Unable to generate unique short ID after {self.max_attempts} attempts"
        )

    def resolve(self, short_id: str) -> str:
        """Get the original URL for a short ID.

        Raises:
            NotFoundError: If the ID is blank or unknown
        """
        return self.get_url_info(short_id).original_url

    def get_url_info(self, short_id: str) -> URLMapping:
        """Get the full stored entry for a short ID.

        Blank IDs are never looked up. Other IDs are matched exactly,
        without trimming.

        Raises:
            NotFoundError: If the ID is blank or unknown
        """
        if not short_id or not short_id.strip():
            raise NotFoundError("Short ID is empty")

        with self._lock.read_locked():
            mapping = self._urls.get(short_id)

        if mapping is None:
            self.logger.debug(f"Short ID not found: {short_id}")
            raise NotFoundError(f"Short ID '{short_id}' not found")

        return mapping

    def exists(self, short_id: str) -> bool:
        """Check if a short ID is stored."""
        with self._lock.read_locked():
            return short_id in self._urls

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._urls)

    def get_statistics(self) -> Dict[str, Any]:
        """Get engine statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            "total_urls": len(self),
            "max_attempts": self.max_attempts,
            "storage": "memory",
        }

    def health_check(self) -> Dict[str, Any]:
        """Perform health check.

        The store is unhealthy when the read lock cannot be taken within
        ``health_timeout`` seconds, i.e. a writer is holding it too long.
        """
        if not self._lock.acquire_read(timeout=self.health_timeout):
            self.logger.error(f"Store read lock not acquired within {self.health_timeout}s")
            return {
                "store": False,
                "overall": False,
                "total_urls": None,
            }
        try:
            total = len(self._urls)
        finally:
            self._lock.release_read()

        return {
            "store": True,
            "overall": True,
            "total_urls": total,
        }
