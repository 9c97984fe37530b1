"""neo-filesystem protocols.

Contracts for the collaborators of the storage coordinator.
"""

from .file_entity import FileEntityProtocol
from .path_formatter import PathFormatter
from .storage_adapter import StorageAdapter

__all__ = [
    "FileEntityProtocol",
    "PathFormatter",
    "StorageAdapter",
]
