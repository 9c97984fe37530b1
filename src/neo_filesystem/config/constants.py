"""Constants shared by the configuration layer."""

# Name used when a registry lookup does not specify a configuration
DEFAULT_FS_CONFIG = "default"

DEFAULT_ADAPTER = "Local"
DEFAULT_FORMATTER = "Default"
DEFAULT_HASH_ALGO = "md5"
DEFAULT_ROOT = "files"

ENV_PREFIX = "FILESYSTEM_"
