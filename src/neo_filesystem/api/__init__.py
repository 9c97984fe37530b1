"""FastAPI integration for neo-filesystem."""

from .dependencies import (
    filesystem_dependency,
    get_default_filesystem,
    get_filesystem_registry,
    install_filesystems,
)
from .exception_handlers import filesystem_exception_handler, register_exception_handlers

__all__ = [
    "filesystem_dependency",
    "get_default_filesystem",
    "get_filesystem_registry",
    "install_filesystems",
    "filesystem_exception_handler",
    "register_exception_handlers",
]
