"""Storage adapter protocol.

ONLY storage backend contract - the finite set of key-based operations the
coordinator needs from a byte-storage medium (local disk, object store,
memory).

Following maximum separation architecture - one file = one purpose.
"""

from typing import BinaryIO
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class StorageAdapter(Protocol):
    """Storage adapter protocol.

    Keys are opaque strings. Boolean results report success; adapters may
    raise OSError for unexpected I/O failures.
    """

    def write(self, key: str, stream: BinaryIO) -> bool:
        """Write the full content of ``stream`` under ``key``.

        Args:
            key: Destination storage key
            stream: Readable binary stream positioned at the start

        Returns:
            True if the content was stored
        """
        ...

    def read(self, key: str) -> bytes:
        """Return the stored bytes for ``key``.

        Raises:
            FileNotFoundError: If nothing is stored under ``key``
        """
        ...

    def exists(self, key: str) -> bool:
        """Check whether ``key`` is stored."""
        ...

    def delete(self, key: str) -> bool:
        """Delete ``key``.

        Returns:
            True if the key existed and was deleted
        """
        ...

    def rename(self, old_key: str, new_key: str) -> bool:
        """Move the content stored under ``old_key`` to ``new_key``.

        Returns:
            True on success, False when the source is missing or the
            target is taken
        """
        ...
