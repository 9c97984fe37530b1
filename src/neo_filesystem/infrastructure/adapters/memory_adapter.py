"""In-memory storage adapter.

ONLY volatile storage - keeps bytes in a dict, for tests and ephemeral use.
"""

from typing import BinaryIO, Dict, List, Union

from loguru import logger

from ...core.value_objects import Visibility
from .keys import normalize_key


class MemoryAdapter:
    """Dict-backed storage adapter."""

    def __init__(self, visibility: Union[Visibility, str] = Visibility.PUBLIC):
        self._files: Dict[str, bytes] = {}
        self._visibility = Visibility(visibility)

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    def write(self, key: str, stream: BinaryIO) -> bool:
        normalized = normalize_key(key)
        self._files[normalized] = stream.read()
        logger.debug(f"Stored {len(self._files[normalized])} bytes in memory at {normalized}")
        return True

    def read(self, key: str) -> bytes:
        normalized = normalize_key(key)
        if normalized not in self._files:
            raise FileNotFoundError(f"No file stored at '{key}'")
        return self._files[normalized]

    def exists(self, key: str) -> bool:
        return normalize_key(key) in self._files

    def delete(self, key: str) -> bool:
        return self._files.pop(normalize_key(key), None) is not None

    def rename(self, old_key: str, new_key: str) -> bool:
        source = normalize_key(old_key)
        target = normalize_key(new_key)

        if source not in self._files or target in self._files:
            return False

        self._files[target] = self._files.pop(source)
        return True

    def keys(self) -> List[str]:
        return list(self._files)

    def clear(self) -> None:
        self._files.clear()

    def __len__(self) -> int:
        return len(self._files)
