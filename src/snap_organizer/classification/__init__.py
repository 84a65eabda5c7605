"""Category classification package."""

from .classifier import (
    classify,
    classify_from_filename,
    file_extension,
    is_sequence_extension,
    normalize_extension,
)

__all__ = [
    "classify",
    "classify_from_filename",
    "file_extension",
    "is_sequence_extension",
    "normalize_extension",
]
