"""Local filesystem storage adapter.

ONLY local disk storage - stores each key as a file under a root
directory, creating parent directories as needed.

Following maximum separation architecture - one file = one purpose.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, Union

from loguru import logger

from ...core.value_objects import Visibility
from .keys import normalize_key


DEFAULT_ROOT = "files"


class LocalAdapter:
    """Local filesystem storage adapter.

    File permissions follow the configured visibility: ``public`` files are
    world readable (0o644), ``private`` ones owner only (0o600).
    """

    def __init__(
        self,
        root: Union[str, os.PathLike] = DEFAULT_ROOT,
        visibility: Union[Visibility, str] = Visibility.PUBLIC,
    ):
        """Initialize local storage.

        Args:
            root: Directory holding the stored files, created if missing
            visibility: Default visibility for written files
        """
        base = Path(root)
        base.mkdir(parents=True, exist_ok=True)
        self._root = base.resolve()
        self._visibility = Visibility(visibility)
        logger.info(f"Local storage initialized at {self._root}")

    @property
    def root(self) -> Path:
        return self._root

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    def path_for(self, key: str) -> Path:
        """Absolute location of ``key`` under the root."""
        return self._root / normalize_key(key)

    def write(self, key: str, stream: BinaryIO) -> bool:
        target = self.path_for(key)
        target.parent.mkdir(parents=True, exist_ok=True)

        # Content lands under the key only once fully written
        fd, partial_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".part")
        partial = Path(partial_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                shutil.copyfileobj(stream, handle)
            os.chmod(partial, self._visibility.file_mode)
            os.replace(partial, target)
        except BaseException:
            partial.unlink(missing_ok=True)
            raise

        logger.debug(f"Wrote {target}")
        return True

    def read(self, key: str) -> bytes:
        target = self.path_for(key)
        if not target.is_file():
            raise FileNotFoundError(f"No file stored at '{key}'")
        return target.read_bytes()

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def delete(self, key: str) -> bool:
        target = self.path_for(key)
        if not target.is_file():
            return False

        try:
            target.unlink()
        except OSError as e:
            logger.warning(f"Failed to delete {target}: {e}")
            return False
        return True

    def rename(self, old_key: str, new_key: str) -> bool:
        source = self.path_for(old_key)
        target = self.path_for(new_key)

        if not source.is_file() or target.exists():
            return False

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            os.replace(source, target)
        except OSError as e:
            logger.warning(f"Failed to rename {source} to {target}: {e}")
            return False
        return True
