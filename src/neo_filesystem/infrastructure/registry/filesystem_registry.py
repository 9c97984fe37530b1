"""Filesystem registry.

ONLY named filesystem instances - an explicitly constructed container that
builds each configured Filesystem on first request and caches it.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Union

from loguru import logger

from ...application.hooks import HookBus
from ...application.services import Filesystem
from ...config.constants import DEFAULT_FS_CONFIG
from ...config.settings import FilesystemSettings
from ...core.exceptions import ConfigurationError


FilesystemConfig = Union[FilesystemSettings, Mapping[str, Any]]


class FilesystemRegistry:
    """Container of named filesystems.

    Pass one registry to the call sites that need storage instead of
    reaching for global state; ``reset`` drops the cached instances.
    """

    def __init__(
        self,
        configs: Optional[Mapping[str, FilesystemConfig]] = None,
        hooks: Optional[HookBus] = None
    ):
        """Initialize registry.

        Args:
            configs: Configuration per filesystem name
            hooks: Hook bus shared by every filesystem built here; each
                filesystem gets its own bus when omitted
        """
        self._configs: Dict[str, FilesystemConfig] = dict(configs or {})
        self._filesystems: Dict[str, Filesystem] = {}
        self._hooks = hooks

    def configure(self, name: str, config: FilesystemConfig) -> None:
        """Add or replace a configuration.

        A cached instance for ``name`` is dropped so the next ``get``
        rebuilds it.
        """
        self._configs[name] = config
        self._filesystems.pop(name, None)

    def register(self, name: str, filesystem: Filesystem) -> None:
        """Register an already built filesystem under ``name``."""
        self._filesystems[name] = filesystem

    def get(self, name: str = DEFAULT_FS_CONFIG) -> Filesystem:
        """Get a configured filesystem, building it on first request.

        Raises:
            ConfigurationError: When no configuration exists for ``name``
        """
        if not self.exists(name):
            config = self._configs.get(name)
            if config is None:
                raise ConfigurationError(
                    f'No "{name}" filesystem configuration found.',
                    component="registry",
                    name=name
                )

            self._filesystems[name] = Filesystem(config, hooks=self._hooks)
            logger.debug(f"Built filesystem '{name}'")

        return self._filesystems[name]

    def exists(self, name: str) -> bool:
        """Check whether a filesystem instance is cached for ``name``."""
        return name in self._filesystems

    def names(self) -> Iterable[str]:
        """Configured and registered filesystem names."""
        return sorted(set(self._configs) | set(self._filesystems))

    def reset(self) -> None:
        """Drop every cached filesystem instance; configurations are kept."""
        self._filesystems = {}
