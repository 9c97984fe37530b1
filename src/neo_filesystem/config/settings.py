"""
Filesystem configuration.

Settings are read from the environment (``FILESYSTEM_`` prefix) and an
optional ``.env`` file, and can also be passed explicitly as keyword
arguments or a mapping.
"""
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError
from ..core.value_objects import Visibility
from .constants import (
    DEFAULT_ADAPTER,
    DEFAULT_FORMATTER,
    DEFAULT_HASH_ALGO,
    ENV_PREFIX,
)


class FilesystemSettings(BaseSettings):
    """Settings for one configured filesystem.

    ``adapter`` Storage adapter name (``Local``, ``Memory`` or a registered name)
    ``adapter_arguments`` Keyword arguments passed to the adapter constructor
    ``formatter`` Formatter name (``Default``, ``Entity`` or a registered name)
    ``formatter_arguments`` Keyword arguments passed to the formatter constructor
    ``visibility`` Default visibility for adapters that support it
    ``entity_hash_algo`` hashlib algorithm used for the entity hash
    ``entity_class`` Optional dotted path to the entity class or factory
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Storage
    adapter: str = Field(default=DEFAULT_ADAPTER)
    adapter_arguments: Dict[str, Any] = Field(default_factory=dict)
    visibility: Visibility = Field(default=Visibility.PUBLIC)

    # Naming
    formatter: str = Field(default=DEFAULT_FORMATTER)
    formatter_arguments: Dict[str, Any] = Field(default_factory=dict)

    # Entities
    entity_hash_algo: str = Field(default=DEFAULT_HASH_ALGO)
    entity_class: Optional[str] = Field(default=None)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    log_file: Optional[str] = Field(default=None)
    log_rotation: str = Field(default="10 MB")
    log_retention: str = Field(default="7 days")

    @field_validator("adapter", "formatter")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        # Unknown or blank names are rejected by the registries on first use
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    def adapter_options(self) -> Dict[str, Any]:
        """Constructor arguments for the adapter, visibility included."""
        options = {"visibility": self.visibility}
        options.update(self.adapter_arguments)
        return options


def load_settings(
    config: Union[FilesystemSettings, Mapping[str, Any], None] = None
) -> FilesystemSettings:
    """Coerce a mapping (or nothing) into FilesystemSettings.

    Explicit values win over environment variables.

    Raises:
        ConfigurationError: If a settings value is invalid
    """
    if isinstance(config, FilesystemSettings):
        return config

    try:
        return FilesystemSettings(**dict(config or {}))
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid filesystem settings: {e}",
            component="settings",
            details={
                "errors": [
                    {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                    for error in e.errors()
                ]
            }
        ) from e
