"""Visibility value object."""

from enum import Enum


class Visibility(str, Enum):
    """Backend-level visibility for stored objects."""
    PUBLIC = "public"
    PRIVATE = "private"

    @property
    def file_mode(self) -> int:
        """POSIX file mode used by disk backends."""
        return 0o644 if self is Visibility.PUBLIC else 0o600
