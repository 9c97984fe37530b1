"""File source normalizer.

ONLY source normalization - turns the file-like inputs callers hand to
``Filesystem.upload`` into one uniform descriptor with filename, size,
sniffed MIME type, content hash and an open byte stream.

Following maximum separation architecture - one file = one purpose.
"""

import io
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Mapping, Optional, Union

import magic
from loguru import logger

from ...core.entities import UNKNOWN_MIME
from ...core.exceptions import InvalidInputError
from ...core.value_objects import HashAlgorithm


# Leading bytes handed to libmagic for content sniffing
SNIFF_SIZE = 2048


@dataclass
class NormalizedSource:
    """Normalized file source.

    Owned by the upload that created it. ``shutdown`` must be called on
    every exit path; it closes streams the normalizer opened and rewinds
    caller-owned ones.
    """

    filename: str
    size: int
    mime: str
    hash: str
    resource: BinaryIO = field(repr=False)
    owns_resource: bool = field(default=True, repr=False)
    released: bool = field(default=False, init=False)

    def shutdown(self) -> None:
        """Release the underlying stream. Safe to call more than once."""
        if self.released:
            return

        self.released = True
        if self.owns_resource:
            self.resource.close()
        elif not self.resource.closed:
            self.resource.seek(0)

    def __enter__(self) -> "NormalizedSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


class FileSourceNormalizer:
    """Normalizes heterogeneous file sources.

    Recognized shapes:
    - a path (``str`` or ``os.PathLike``) to a readable regular file
    - a mapping with ``name``/``filename`` and either ``content`` (bytes)
      or ``tmp_name``/``path`` (an uploaded temporary file)
    - an upload object with ``filename`` and a seekable ``file`` or
      ``stream`` (FastAPI ``UploadFile``, Werkzeug ``FileStorage``)
    """

    def __init__(
        self,
        hash_algorithm: Union[HashAlgorithm, str] = HashAlgorithm.DEFAULT,
        sniff_size: int = SNIFF_SIZE
    ):
        """Initialize normalizer.

        Args:
            hash_algorithm: Algorithm (or hashlib name) for the content hash
            sniff_size: Number of leading bytes used for MIME sniffing

        Raises:
            ConfigurationError: If the hash algorithm is not available
        """
        if not isinstance(hash_algorithm, HashAlgorithm):
            hash_algorithm = HashAlgorithm(hash_algorithm)

        self._hash_algorithm = hash_algorithm
        self._sniff_size = sniff_size

    @property
    def hash_algorithm(self) -> HashAlgorithm:
        return self._hash_algorithm

    def normalize(self, source: Any) -> NormalizedSource:
        """Normalize a file source.

        Raises:
            InvalidInputError: If the source shape is not recognized or the
                referenced file cannot be read
        """
        if isinstance(source, (str, os.PathLike)):
            return self._from_path(source)

        if isinstance(source, Mapping):
            return self._from_mapping(source)

        if self._is_upload_object(source):
            return self._from_upload_object(source)

        raise InvalidInputError(
            f"Unsupported file source of type {type(source).__name__}",
            source_type=type(source).__name__
        )

    def _from_path(self, source: Union[str, os.PathLike], filename: Optional[str] = None) -> NormalizedSource:
        path = Path(os.fspath(source))

        if not os.fspath(source) or not path.is_file():
            raise InvalidInputError(f'File "{path}" does not exist', source_type="path")

        if not os.access(path, os.R_OK):
            raise InvalidInputError(f'File "{path}" is not readable', source_type="path")

        try:
            resource = path.open("rb")
        except OSError as e:
            raise InvalidInputError(f'File "{path}" could not be opened: {e}', source_type="path") from e

        return self._describe(filename or path.name, resource, owns_resource=True)

    def _from_mapping(self, source: Mapping[str, Any]) -> NormalizedSource:
        filename = source.get("name") or source.get("filename")
        if not filename:
            raise InvalidInputError("Upload mapping is missing a filename", source_type="mapping")

        if source.get("error"):
            raise InvalidInputError(
                f"Upload of \"{filename}\" reported error {source['error']}",
                source_type="mapping"
            )

        content = source.get("content")
        if content is not None:
            if not isinstance(content, (bytes, bytearray, memoryview)):
                raise InvalidInputError(
                    f"Upload content must be bytes, got {type(content).__name__}",
                    source_type="mapping"
                )
            return self._describe(
                self._basename(filename),
                io.BytesIO(bytes(content)),
                owns_resource=True
            )

        tmp_name = source.get("tmp_name") or source.get("path")
        if tmp_name:
            return self._from_path(tmp_name, filename=self._basename(filename))

        raise InvalidInputError(
            f'Upload mapping for "{filename}" has neither content nor tmp_name',
            source_type="mapping"
        )

    def _from_upload_object(self, source: Any) -> NormalizedSource:
        filename = source.filename
        if not filename:
            raise InvalidInputError("Uploaded file has no filename", source_type=type(source).__name__)

        stream = getattr(source, "file", None)
        if stream is None:
            stream = getattr(source, "stream", None)

        try:
            stream.seek(0)
        except (AttributeError, OSError, ValueError) as e:
            raise InvalidInputError(
                f'Uploaded file "{filename}" is not a readable seekable stream',
                source_type=type(source).__name__
            ) from e

        return self._describe(self._basename(filename), stream, owns_resource=False)

    def _describe(self, filename: str, resource: BinaryIO, owns_resource: bool) -> NormalizedSource:
        try:
            try:
                size = self._measure(resource)
                mime = self._sniff(resource)
                digest = self._hash_algorithm.digest_stream(resource)
                resource.seek(0)
            except OSError as e:
                raise InvalidInputError(f'File "{filename}" could not be read: {e}') from e
        except Exception:
            if owns_resource:
                resource.close()
            raise

        logger.debug(f"Normalized {filename} ({size} bytes, {mime}, {self._hash_algorithm}:{digest})")

        return NormalizedSource(
            filename=filename,
            size=size,
            mime=mime,
            hash=digest,
            resource=resource,
            owns_resource=owns_resource,
        )

    @staticmethod
    def _measure(resource: BinaryIO) -> int:
        resource.seek(0, io.SEEK_END)
        size = resource.tell()
        resource.seek(0)
        return size

    def _sniff(self, resource: BinaryIO) -> str:
        head = resource.read(self._sniff_size)
        resource.seek(0)

        try:
            mime = magic.from_buffer(head, mime=True)
        except magic.MagicException as e:
            logger.warning(f"MIME sniffing failed: {e}")
            return UNKNOWN_MIME

        return mime or UNKNOWN_MIME

    @staticmethod
    def _is_upload_object(source: Any) -> bool:
        return hasattr(source, "filename") and (hasattr(source, "file") or hasattr(source, "stream"))

    @staticmethod
    def _basename(filename: str) -> str:
        # Clients may send full paths, sometimes with Windows separators
        return str(filename).replace("\\", "/").rsplit("/", 1)[-1]
