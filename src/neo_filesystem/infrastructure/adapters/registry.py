"""Adapter registry.

ONLY adapter resolution - maps a finite set of names to adapter
constructors and accepts caller-built adapter instances.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from loguru import logger

from ...core.exceptions import ConfigurationError
from ...core.protocols import StorageAdapter
from .local_adapter import LocalAdapter
from .memory_adapter import MemoryAdapter


AdapterFactory = Callable[..., StorageAdapter]

BUILTIN_ADAPTERS: Dict[str, AdapterFactory] = {
    "Local": LocalAdapter,
    "Memory": MemoryAdapter,
}


class AdapterRegistry:
    """Registry of named storage adapter constructors."""

    def __init__(self, adapters: Optional[Mapping[str, AdapterFactory]] = None):
        self._factories: Dict[str, AdapterFactory] = dict(BUILTIN_ADAPTERS)
        if adapters:
            self._factories.update(adapters)

    def register(self, name: str, factory: AdapterFactory) -> None:
        """Register an adapter constructor under ``name``."""
        if name in self._factories:
            logger.warning(f"Adapter '{name}' already registered, replacing")
        self._factories[name] = factory

    def names(self) -> List[str]:
        return list(self._factories)

    def resolve(self, adapter: Union[str, StorageAdapter], **options: Any) -> StorageAdapter:
        """Build or accept a storage adapter.

        Args:
            adapter: Registered adapter name or an adapter instance
            **options: Constructor arguments (names only)

        Raises:
            ConfigurationError: If the adapter cannot be resolved
        """
        if isinstance(adapter, str):
            factory = self._factories.get(adapter)
            if factory is None:
                raise ConfigurationError(
                    f'Adapter "{adapter}" could not be loaded',
                    component="adapter",
                    name=adapter
                )
            try:
                return factory(**options)
            except TypeError as e:
                raise ConfigurationError(
                    f'Adapter "{adapter}" rejected its arguments: {e}',
                    component="adapter",
                    name=adapter
                ) from e

        if not isinstance(adapter, type) and isinstance(adapter, StorageAdapter):
            return adapter

        raise ConfigurationError(
            f'Adapter "{adapter!r}" could not be loaded',
            component="adapter"
        )
