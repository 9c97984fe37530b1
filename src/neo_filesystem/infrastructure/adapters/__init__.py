"""Storage adapters."""

from .keys import normalize_key
from .local_adapter import LocalAdapter
from .memory_adapter import MemoryAdapter
from .registry import BUILTIN_ADAPTERS, AdapterRegistry

__all__ = [
    "normalize_key",
    "LocalAdapter",
    "MemoryAdapter",
    "BUILTIN_ADAPTERS",
    "AdapterRegistry",
]
