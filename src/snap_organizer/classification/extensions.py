"""File extension tables used for category classification."""

from __future__ import annotations

VIDEO_EXTENSIONS = frozenset(
    {"mp4", "mov", "avi", "mkv", "webm", "m4v", "wmv", "flv", "mxf", "prores"}
)

AUDIO_EXTENSIONS = frozenset({"mp3", "wav", "aac", "m4a", "aif", "aiff", "ogg", "flac"})

STILL_IMAGE_EXTENSIONS = frozenset(
    {"jpg", "jpeg", "png", "psd", "tif", "tiff", "gif", "bmp", "ai", "eps", "svg"}
)

# Formats a host can import as numbered frame sequences.
SEQUENCE_IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "tif", "tiff", "tga", "bmp", "gif"})
SEQUENCE_CG_EXTENSIONS = frozenset({"exr", "dpx", "cin", "hdr"})
ALL_SEQUENCE_EXTENSIONS = SEQUENCE_IMAGE_EXTENSIONS | SEQUENCE_CG_EXTENSIONS

IMAGE_EXTENSIONS = STILL_IMAGE_EXTENSIONS | ALL_SEQUENCE_EXTENSIONS

__all__ = [
    "VIDEO_EXTENSIONS",
    "AUDIO_EXTENSIONS",
    "STILL_IMAGE_EXTENSIONS",
    "SEQUENCE_IMAGE_EXTENSIONS",
    "SEQUENCE_CG_EXTENSIONS",
    "ALL_SEQUENCE_EXTENSIONS",
    "IMAGE_EXTENSIONS",
]
