"""Hash algorithm value object.

ONLY content hashing - represents a validated hashlib algorithm name and
streams byte content through it to produce the entity hash.

Following maximum separation architecture - one file = one purpose.
"""

import hashlib
from dataclasses import dataclass
from typing import BinaryIO

from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class HashAlgorithm:
    """Hash algorithm value object.

    The digest is used as a deduplication key only, so fast digests such as
    md5 are fine. Any name known to hashlib is accepted.
    """

    name: str = "md5"

    DEFAULT = "md5"
    CHUNK_SIZE = 64 * 1024

    def __post_init__(self):
        """Validate and normalize the algorithm name."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise ConfigurationError(
                "Hash algorithm name cannot be empty",
                component="hash_algorithm"
            )

        normalized = self.name.strip().lower()
        if normalized not in hashlib.algorithms_available:
            raise ConfigurationError(
                f'Hash algorithm "{self.name}" is not available',
                component="hash_algorithm",
                name=self.name
            )

        object.__setattr__(self, 'name', normalized)

    def new(self):
        """Create a fresh hashlib object for this algorithm."""
        return hashlib.new(self.name)

    def digest_bytes(self, content: bytes) -> str:
        """Hex digest of in-memory content."""
        hasher = self.new()
        hasher.update(content)
        return self._hexdigest(hasher)

    def digest_stream(self, stream: BinaryIO) -> str:
        """Hex digest of a binary stream, read from its current position.

        The stream is left at end of file; callers rewind it themselves.
        """
        hasher = self.new()
        while chunk := stream.read(self.CHUNK_SIZE):
            hasher.update(chunk)
        return self._hexdigest(hasher)

    @staticmethod
    def _hexdigest(hasher) -> str:
        # shake_* digests need an explicit length
        if hasher.name.startswith("shake_"):
            return hasher.hexdigest(32)
        return hasher.hexdigest()

    def __str__(self) -> str:
        return self.name
