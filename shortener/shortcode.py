"""Short ID generation utilities."""

import base64
import math
import secrets
import string
from typing import Callable


class ShortIDGenerator:
    """Generate random short IDs for URLs."""

    # URL-safe base64 alphabet (RFC 4648 section 5)
    URL_SAFE_CHARS = string.ascii_letters + string.digits + "-_"

    def __init__(
        self,
        num_bytes: int = 6,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ):
        """Initialize short ID generator.

        Args:
            num_bytes: Number of random bytes per ID (6 bytes encode to 8 characters)
            random_bytes: Source of random bytes, called with the byte count
        """
        if num_bytes < 1:
            raise ValueError("num_bytes must be positive")
        self.num_bytes = num_bytes
        self.random_bytes = random_bytes

    @property
    def length(self) -> int:
        """Length of the IDs this generator emits."""
        return math.ceil(self.num_bytes * 4 / 3)

    def generate(self) -> str:
        """Generate a random short ID.

        Returns:
            URL-safe base64 encoding of fresh random bytes, padding stripped
        """
        raw = self.random_bytes(self.num_bytes)
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code only uses the URL-safe alphabet.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortIDGenerator.URL_SAFE_CHARS for c in code)
