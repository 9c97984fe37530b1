"""Storage key normalization shared by the built-in adapters."""

from ...core.exceptions import InvalidInputError


def normalize_key(key: str) -> str:
    """Normalize a storage key and reject unsafe ones.

    Backslashes become forward slashes, duplicate slashes collapse and the
    leading slash is dropped, since keys are relative to the adapter root.

    Raises:
        InvalidInputError: If the key is empty or contains a ``..`` segment
    """
    if not isinstance(key, str):
        raise InvalidInputError(f"Storage key must be a string, got {type(key).__name__}")

    normalized = key.strip().replace("\\", "/")
    segments = [segment for segment in normalized.split("/") if segment and segment != "."]

    if not segments:
        raise InvalidInputError("Storage key cannot be empty")

    if ".." in segments:
        raise InvalidInputError(f"Storage key contains path traversal sequence: '{key}'")

    return "/".join(segments)
