"""File entity protocol."""

from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class FileEntityProtocol(Protocol):
    """Anything the coordinator can treat as an already stored file."""

    path: str
    original_filename: str
    filesize: int
    mime: str
    hash: str
