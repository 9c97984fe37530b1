"""Pytest configuration and fixtures for neo-filesystem tests."""

import base64
import hashlib
from unittest.mock import MagicMock

import pytest

from neo_filesystem import FileEntity, Filesystem, HookBus, MemoryAdapter


# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

TEXT_BYTES = b"hello world\n"


def md5(content: bytes) -> str:
    return hashlib.md5(content).hexdigest()


@pytest.fixture
def memory_adapter():
    """Empty in-memory adapter."""
    return MemoryAdapter()


@pytest.fixture
def spy_adapter(memory_adapter):
    """In-memory adapter wrapped in a MagicMock recording every call.

    ``spec`` gives the mock static adapter attributes so it passes the
    runtime ``StorageAdapter`` protocol check.
    """
    return MagicMock(wraps=memory_adapter, spec=MemoryAdapter)


@pytest.fixture
def hooks():
    """Fresh hook bus."""
    return HookBus()


@pytest.fixture
def filesystem(spy_adapter, hooks):
    """Filesystem storing into the spied in-memory adapter."""
    return Filesystem({"adapter": "Memory"}, hooks=hooks).set_adapter(spy_adapter)


@pytest.fixture
def text_file(tmp_path):
    """Small text file on disk."""
    path = tmp_path / "hello.txt"
    path.write_bytes(TEXT_BYTES)
    return path


@pytest.fixture
def png_file(tmp_path):
    """Small PNG file on disk."""
    path = tmp_path / "pixel.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def make_entity():
    """Factory for entities that were never stored."""

    def _make(path: str, content: bytes, name: str = "file.txt") -> FileEntity:
        return FileEntity(
            path=path,
            original_filename=name,
            filesize=len(content),
            mime="text/plain",
            hash=md5(content),
        )

    return _make
