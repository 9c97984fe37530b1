"""Logging configuration for neo-filesystem.

The library logs through loguru. Applications call ``setup_logging`` once
at startup to install sinks driven by FilesystemSettings.
"""

import sys
from typing import Optional

from loguru import logger

from .settings import FilesystemSettings


def setup_logging(settings: Optional[FilesystemSettings] = None) -> None:
    """Install loguru sinks from settings.

    Replaces existing sinks with a stderr sink and, when ``log_file`` is
    set, a rotating file sink.
    """
    settings = settings or FilesystemSettings()

    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format=settings.log_format,
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            level=settings.log_level,
            format=settings.log_format,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
        )

    logger.enable("neo_filesystem")
    logger.debug(f"Logging configured: level={settings.log_level}, file={settings.log_file}")


def silence_logging() -> None:
    """Silence all log output from neo-filesystem."""
    logger.disable("neo_filesystem")
