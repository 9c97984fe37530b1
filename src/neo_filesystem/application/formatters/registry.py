"""Formatter registry.

ONLY formatter resolution - maps a finite set of names to constructors and
accepts caller-built formatter instances.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from loguru import logger

from ...core.exceptions import ConfigurationError
from ...core.protocols import PathFormatter
from .default_formatter import DefaultFormatter
from .entity_formatter import EntityFormatter


FormatterFactory = Callable[..., PathFormatter]

BUILTIN_FORMATTERS: Dict[str, FormatterFactory] = {
    "Default": DefaultFormatter,
    "Entity": EntityFormatter,
}


class FormatterRegistry:
    """Registry of named formatter constructors."""

    def __init__(self, formatters: Optional[Mapping[str, FormatterFactory]] = None):
        self._factories: Dict[str, FormatterFactory] = dict(BUILTIN_FORMATTERS)
        if formatters:
            self._factories.update(formatters)

    def register(self, name: str, factory: FormatterFactory) -> None:
        """Register a formatter constructor under ``name``."""
        if name in self._factories:
            logger.warning(f"Formatter '{name}' already registered, replacing")
        self._factories[name] = factory

    def names(self) -> List[str]:
        return list(self._factories)

    def resolve(self, formatter: Union[str, PathFormatter], **options: Any) -> PathFormatter:
        """Build or accept a formatter.

        Args:
            formatter: Registered formatter name or a formatter instance
            **options: Constructor arguments (names only)

        Raises:
            ConfigurationError: If the formatter cannot be resolved
        """
        if isinstance(formatter, str):
            factory = self._factories.get(formatter)
            if factory is None:
                raise ConfigurationError(
                    f'Formatter "{formatter}" could not be loaded',
                    component="formatter",
                    name=formatter
                )
            try:
                return factory(**options)
            except TypeError as e:
                raise ConfigurationError(
                    f'Formatter "{formatter}" rejected its arguments: {e}',
                    component="formatter",
                    name=formatter
                ) from e

        # Classes expose set_info/get_path too, only instances are accepted
        if not isinstance(formatter, type) and isinstance(formatter, PathFormatter):
            return formatter

        raise ConfigurationError(
            f'Formatter "{formatter!r}" could not be loaded',
            component="formatter"
        )
