"""Configuration for neo-filesystem."""

from .constants import DEFAULT_FS_CONFIG
from .logging_config import setup_logging, silence_logging
from .settings import FilesystemSettings, load_settings

__all__ = [
    "DEFAULT_FS_CONFIG",
    "FilesystemSettings",
    "load_settings",
    "setup_logging",
    "silence_logging",
]
