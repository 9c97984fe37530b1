"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .configuration import ConfigurationError
from .invalid_input import InvalidInputError
from .upload_failed import UploadFailedError


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    InvalidInputError: 400,

    # 500 Internal Server Error
    ConfigurationError: 500,

    # 502 Bad Gateway - the storage backend refused the write
    UploadFailedError: 502,
}


def get_http_status_code(exception: Exception) -> int:
    """Resolve the HTTP status code, walking the exception's MRO."""
    for exc_type in type(exception).__mro__:
        if exc_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exc_type]

    return 500
