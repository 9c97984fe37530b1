"""Path formatter protocol.

ONLY storage key naming contract - a strategy that turns a filename plus
caller-supplied auxiliary data into a destination storage key.
"""

from typing import Any, Optional
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class PathFormatter(Protocol):
    """Path formatter protocol.

    A formatter holds the naming context of exactly one upload.
    ``set_info`` re-initializes it, so one instance can be reused for
    sequential uploads but not for concurrent ones.
    """

    def set_info(self, filename: str, data: Optional[Any] = None) -> "PathFormatter":
        """Set the current filename and auxiliary data.

        Returns:
            The formatter itself, for chaining
        """
        ...

    def get_path(self) -> str:
        """Compute the destination key for the current context."""
        ...
