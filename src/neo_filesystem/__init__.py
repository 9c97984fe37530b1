"""Neo-Filesystem - pluggable file storage for the NeoMultiTenant platform.

Store a file, get back an identity: sources are normalized, named by a
formatter, written through a storage adapter and returned as FileEntity
values, with vetoable lifecycle hooks around every mutating operation.
"""

from .__version__ import __version__

from .config import (
    DEFAULT_FS_CONFIG,
    FilesystemSettings,
    load_settings,
    setup_logging,
    silence_logging,
)

from .core import (
    # Entities
    FileEntity,
    UNKNOWN_MIME,

    # Exceptions
    FilesystemError,
    ConfigurationError,
    InvalidInputError,
    UploadFailedError,
    create_error_response,
    get_http_status_code,

    # Protocols
    FileEntityProtocol,
    PathFormatter,
    StorageAdapter,

    # Value Objects
    HashAlgorithm,
    Visibility,
)

from .application.normalizers import FileSourceNormalizer, NormalizedSource
from .application.formatters import (
    BaseFormatter,
    DefaultFormatter,
    EntityFormatter,
    FormatterRegistry,
)
from .application.hooks import (
    Continue,
    FilesystemHook,
    HookBus,
    HookEvent,
    HookPriority,
    StopWith,
)
from .application.services import Filesystem
from .infrastructure.adapters import AdapterRegistry, LocalAdapter, MemoryAdapter
from .infrastructure.registry import FilesystemRegistry

__all__ = [
    "__version__",

    # Configuration
    "DEFAULT_FS_CONFIG",
    "FilesystemSettings",
    "load_settings",
    "setup_logging",
    "silence_logging",

    # Core
    "FileEntity",
    "UNKNOWN_MIME",
    "FilesystemError",
    "ConfigurationError",
    "InvalidInputError",
    "UploadFailedError",
    "create_error_response",
    "get_http_status_code",
    "FileEntityProtocol",
    "PathFormatter",
    "StorageAdapter",
    "HashAlgorithm",
    "Visibility",

    # Application
    "FileSourceNormalizer",
    "NormalizedSource",
    "BaseFormatter",
    "DefaultFormatter",
    "EntityFormatter",
    "FormatterRegistry",
    "Continue",
    "FilesystemHook",
    "HookBus",
    "HookEvent",
    "HookPriority",
    "StopWith",
    "Filesystem",

    # Infrastructure
    "AdapterRegistry",
    "LocalAdapter",
    "MemoryAdapter",
    "FilesystemRegistry",
]
