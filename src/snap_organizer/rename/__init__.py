"""Batch rename preview and session helpers."""

from .preview import (
    RenameParams,
    RenamePreview,
    build_previews,
    has_changes,
    preview_name,
    rename_requests,
)
from .session import NO_CHANGES_MESSAGE, BatchRenameSession

__all__ = [
    "RenameParams",
    "RenamePreview",
    "build_previews",
    "has_changes",
    "preview_name",
    "rename_requests",
    "BatchRenameSession",
    "NO_CHANGES_MESSAGE",
]
