"""Folder ordering and display-name helpers."""

from __future__ import annotations

from typing import Sequence

from .defaults import SYSTEM_FOLDER_ID, SYSTEM_FOLDER_ORDER
from .models import FolderConfig


def display_folder_name(folder: FolderConfig, index: int) -> str:
    """Return the on-disk folder name with its order prefix.

    Example:
        ``Source`` at index 1 becomes ``01_Source``; the system folder is
        always ``99_<name>``.
    """
    if folder.id == SYSTEM_FOLDER_ID:
        return f"{SYSTEM_FOLDER_ORDER}_{folder.name}"
    return f"{index:02d}_{folder.name}"


def sort_folders(folders: Sequence[FolderConfig]) -> list[FolderConfig]:
    """Return folders ordered by `order`, with the system folder last.

    The sort is stable, so folders sharing an order keep their stored order.
    """
    return sorted(folders, key=lambda folder: (folder.id == SYSTEM_FOLDER_ID, folder.order))


def recalculate_folder_orders(folders: Sequence[FolderConfig]) -> list[FolderConfig]:
    """Return copies numbered 0..n-1 in current sequence; the system folder keeps 99."""
    result: list[FolderConfig] = []
    order = 0
    for folder in folders:
        if folder.id == SYSTEM_FOLDER_ID:
            result.append(folder.model_copy(update={"order": SYSTEM_FOLDER_ORDER}, deep=True))
            continue
        result.append(folder.model_copy(update={"order": order}, deep=True))
        order += 1
    return result


__all__ = ["display_folder_name", "sort_folders", "recalculate_folder_orders"]
