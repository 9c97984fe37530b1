"""Invalid input exception.

ONLY invalid input - raised when a file source matches none of the
recognized shapes or points at something that cannot be read.
"""

from typing import Any, Dict, Optional

from .base import FilesystemError


class InvalidInputError(FilesystemError):
    """Raised when a file source cannot be normalized."""

    def __init__(
        self,
        message: str,
        source_type: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if source_type:
            enhanced_details["source_type"] = source_type

        super().__init__(
            message=message,
            error_code=error_code or "INVALID_INPUT",
            details=enhanced_details
        )
        self.source_type = source_type
