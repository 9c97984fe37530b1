"""Configuration exception.

ONLY configuration - raised when an adapter, formatter, hash algorithm,
entity class or named filesystem configuration cannot be resolved.
"""

from typing import Any, Dict, Optional

from .base import FilesystemError


class ConfigurationError(FilesystemError):
    """Raised when a configured component cannot be resolved."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        name: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        enhanced_details = details or {}
        if component:
            enhanced_details["component"] = component
        if name:
            enhanced_details["name"] = name

        super().__init__(
            message=message,
            error_code=error_code or "CONFIGURATION_ERROR",
            details=enhanced_details
        )
        self.component = component
        self.name = name
