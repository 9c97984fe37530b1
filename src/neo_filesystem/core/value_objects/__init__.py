"""neo-filesystem value objects."""

from .hash_algorithm import HashAlgorithm
from .visibility import Visibility

__all__ = [
    "HashAlgorithm",
    "Visibility",
]
