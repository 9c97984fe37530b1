"""Upload failed exception.

ONLY upload failed - raised when the storage backend did not accept the
byte stream for a destination key.
"""

from typing import Any, Dict, Optional

from .base import FilesystemError


class UploadFailedError(FilesystemError):
    """Raised when a backend write does not succeed.

    The normalized source has already been released when this is raised.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        filename: Optional[str] = None,
        adapter: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if path:
            enhanced_details["path"] = path
        if filename:
            enhanced_details["filename"] = filename
        if adapter:
            enhanced_details["adapter"] = adapter

        super().__init__(
            message=message,
            error_code=error_code or "UPLOAD_FAILED",
            details=enhanced_details
        )
        self.path = path
        self.filename = filename
        self.adapter = adapter
