"""neo-filesystem entities."""

from .file_entity import FileEntity, UNKNOWN_MIME

__all__ = [
    "FileEntity",
    "UNKNOWN_MIME",
]
