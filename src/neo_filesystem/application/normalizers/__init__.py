"""File source normalization."""

from .file_source_normalizer import FileSourceNormalizer, NormalizedSource, SNIFF_SIZE

__all__ = [
    "FileSourceNormalizer",
    "NormalizedSource",
    "SNIFF_SIZE",
]
