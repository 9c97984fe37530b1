"""neo-filesystem exceptions.

Each exception represents a specific error condition of the storage
coordination layer.
"""

from .base import FilesystemError, create_error_response, get_http_status_code
from .configuration import ConfigurationError
from .invalid_input import InvalidInputError
from .upload_failed import UploadFailedError

__all__ = [
    "FilesystemError",
    "ConfigurationError",
    "InvalidInputError",
    "UploadFailedError",
    "create_error_response",
    "get_http_status_code",
]
