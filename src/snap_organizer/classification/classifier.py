"""Infer asset categories from file extensions."""

from __future__ import annotations

from typing import Optional

from snap_organizer.config.defaults import CategoryType

from .extensions import (
    ALL_SEQUENCE_EXTENSIONS,
    AUDIO_EXTENSIONS,
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and strip a single leading dot."""
    ext = extension.strip().lower()
    if ext.startswith("."):
        ext = ext[1:]
    return ext


def file_extension(filename: str) -> str:
    """Return the lower-cased text after the last dot of ``filename``.

    Args:
        filename: Asset name such as ``shot_010.0001.exr``.

    Returns:
        str: Extension without the dot, or an empty string when there is none.
    """
    _, dot, ext = filename.rpartition(".")
    if not dot:
        return ""
    return ext.lower()


def is_sequence_extension(extension: str) -> bool:
    """Return whether the extension can be imported as a frame sequence."""
    return normalize_extension(extension) in ALL_SEQUENCE_EXTENSIONS


def classify(extension: str, *, is_sequence: bool = False) -> Optional[CategoryType]:
    """Map a file extension to a category type.

    Comps and Solids are never inferred here; the host reports those item
    types directly.

    Args:
        extension: Extension with or without a leading dot, any case.
        is_sequence: Whether the asset is a member of an image sequence.

    Returns:
        Optional[CategoryType]: `Footage`, `Audio`, or `Images`, or `None` for
            unknown and empty extensions.
    """
    ext = normalize_extension(extension)
    if not ext:
        return None
    if ext in VIDEO_EXTENSIONS:
        return "Footage"
    if ext in AUDIO_EXTENSIONS:
        return "Audio"
    if ext in IMAGE_EXTENSIONS:
        return "Footage" if is_sequence else "Images"
    return None


def classify_from_filename(filename: str, *, is_sequence: bool = False) -> Optional[CategoryType]:
    """Classify an asset by the extension derived from its file name."""
    return classify(file_extension(filename), is_sequence=is_sequence)


__all__ = [
    "normalize_extension",
    "file_extension",
    "is_sequence_extension",
    "classify",
    "classify_from_filename",
]
