"""File entity.

ONLY stored file identity - the value object handed back to callers after a
successful store. Callers persist it; the library never keeps a reference.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping


UNKNOWN_MIME = "unknown"


@dataclass
class FileEntity:
    """File entity.

    ``hash`` is computed once from the exact bytes that were stored and is
    the entity's identity for reconciliation: two entities describe the
    same file iff their hashes are equal, whatever their paths. Only
    ``Filesystem.rename`` changes ``path`` after construction.
    """

    path: str
    original_filename: str
    filesize: int
    mime: str
    hash: str

    def __post_init__(self):
        """Validate entity state after initialization."""
        if not self.path or not self.path.strip():
            raise ValueError("File entity path cannot be empty")

        if not self.hash:
            raise ValueError("File entity hash cannot be empty")

        if self.filesize < 0:
            raise ValueError("File size cannot be negative")

        if not self.mime:
            self.mime = UNKNOWN_MIME

    def same_file_as(self, other: Any) -> bool:
        """Check whether ``other`` holds the same content."""
        return getattr(other, "hash", None) == self.hash

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for persistence."""
        return {
            "path": self.path,
            "originalFilename": self.original_filename,
            "filesize": self.filesize,
            "mime": self.mime,
            "hash": self.hash,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FileEntity":
        """Restore an entity from ``to_dict`` output.

        Snake case keys are accepted as well.
        """
        return cls(
            path=data["path"],
            original_filename=data.get("originalFilename", data.get("original_filename", "")),
            filesize=int(data.get("filesize", 0)),
            mime=data.get("mime") or UNKNOWN_MIME,
            hash=data["hash"],
        )

    def __str__(self) -> str:
        return self.path
