"""Base path formatter.

Shared naming context and key helpers for the built-in formatters.
"""

import re
import unicodedata
import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from ...core.exceptions import ConfigurationError


_SLUG_INVALID = re.compile(r"[^a-z0-9_]+")


class BaseFormatter(ABC):
    """Base class for formatters holding one upload's naming context."""

    def __init__(self, base_dir: str = ""):
        self._base_dir = base_dir or ""
        self._filename: Optional[str] = None
        self._data: Any = None

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    @property
    def data(self) -> Any:
        return self._data

    def set_info(self, filename: str, data: Optional[Any] = None) -> "BaseFormatter":
        """Set the current filename and auxiliary data."""
        self._filename = filename
        self._data = data
        return self

    @abstractmethod
    def get_path(self) -> str:
        """Compute the destination key for the current context."""
        pass

    def _require_info(self) -> str:
        if not self._filename:
            raise ConfigurationError(
                f"{type(self).__name__} has no file info, call set_info() first",
                component="formatter"
            )
        return self._filename

    def split_filename(self) -> Tuple[str, str]:
        """Split the current filename into (stem, lower-cased extension)."""
        filename = self._require_info()
        stem, dot, ext = filename.rpartition(".")
        if not dot or not stem:
            # "README" or ".bashrc"
            return filename, ""
        return stem, ext.lower()

    @staticmethod
    def slugify(text: str, fallback: str = "file") -> str:
        """Lower-case ASCII slug safe for storage keys."""
        ascii_text = (
            unicodedata.normalize("NFKD", str(text))
            .encode("ascii", "ignore")
            .decode("ascii")
            .lower()
        )
        slug = _SLUG_INVALID.sub("-", ascii_text).strip("-")
        return slug or fallback

    @staticmethod
    def unique_token() -> str:
        """Random segment used to keep keys from colliding."""
        return uuid.uuid4().hex[:12]

    @staticmethod
    def with_extension(name: str, ext: str) -> str:
        return f"{name}.{ext}" if ext else name

    @staticmethod
    def join(*segments: str) -> str:
        """Join key segments with single forward slashes."""
        parts = []
        for segment in segments:
            parts.extend(p for p in str(segment).replace("\\", "/").split("/") if p)
        return "/".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(filename={self._filename!r})"
