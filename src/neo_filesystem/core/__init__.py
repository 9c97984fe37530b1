"""Core domain of neo-filesystem: entities, exceptions, protocols and value objects."""

from .entities import FileEntity, UNKNOWN_MIME
from .exceptions import (
    FilesystemError,
    ConfigurationError,
    InvalidInputError,
    UploadFailedError,
    create_error_response,
    get_http_status_code,
)
from .protocols import FileEntityProtocol, PathFormatter, StorageAdapter
from .value_objects import HashAlgorithm, Visibility

__all__ = [
    "FileEntity",
    "UNKNOWN_MIME",
    "FilesystemError",
    "ConfigurationError",
    "InvalidInputError",
    "UploadFailedError",
    "create_error_response",
    "get_http_status_code",
    "FileEntityProtocol",
    "PathFormatter",
    "StorageAdapter",
    "HashAlgorithm",
    "Visibility",
]
