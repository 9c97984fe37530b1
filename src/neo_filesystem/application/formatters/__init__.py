"""Path formatters."""

from .base import BaseFormatter
from .default_formatter import DefaultFormatter
from .entity_formatter import EntityFormatter
from .registry import BUILTIN_FORMATTERS, FormatterRegistry

__all__ = [
    "BaseFormatter",
    "DefaultFormatter",
    "EntityFormatter",
    "BUILTIN_FORMATTERS",
    "FormatterRegistry",
]
