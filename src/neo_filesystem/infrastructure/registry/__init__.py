"""Filesystem registry."""

from .filesystem_registry import FilesystemConfig, FilesystemRegistry

__all__ = [
    "FilesystemConfig",
    "FilesystemRegistry",
]
