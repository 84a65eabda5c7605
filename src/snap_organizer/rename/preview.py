"""Batch rename preview transformation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from snap_organizer.host.bridge import ItemInfo, RenameRequest


@dataclass(frozen=True)
class RenameParams:
    """Find/replace, prefix, and suffix applied to every selected name."""

    find_text: str = ""
    replace_text: str = ""
    prefix: str = ""
    suffix: str = ""


@dataclass(frozen=True)
class RenamePreview:
    """Original and proposed name for one item."""

    id: int
    original_name: str
    new_name: str

    @property
    def changed(self) -> bool:
        return self.new_name != self.original_name


def preview_name(name: str, params: RenameParams) -> str:
    """Return the renamed form of ``name``.

    Steps run in order: literal find/replace of every occurrence, then the
    prefix, then the suffix. The suffix goes before the last ``.`` when that
    dot is not the first character, otherwise at the end.

    Example:
        ``preview_name("clip.mp4", RenameParams(prefix="A_", suffix="_v2"))``
        returns ``"A_clip_v2.mp4"``.
    """
    result = name
    if params.find_text:
        result = result.replace(params.find_text, params.replace_text)
    if params.prefix:
        result = f"{params.prefix}{result}"
    if params.suffix:
        dot = result.rfind(".")
        if dot > 0:
            result = f"{result[:dot]}{params.suffix}{result[dot:]}"
        else:
            result = f"{result}{params.suffix}"
    return result


def build_previews(items: Iterable[ItemInfo], params: RenameParams) -> list[RenamePreview]:
    """Build previews for non-folder items, preserving input order."""
    return [
        RenamePreview(id=item.id, original_name=item.name, new_name=preview_name(item.name, params))
        for item in items
        if not item.is_folder
    ]


def has_changes(previews: Sequence[RenamePreview]) -> bool:
    """Return whether any preview differs from its original name."""
    return any(preview.changed for preview in previews)


def rename_requests(previews: Sequence[RenamePreview]) -> list[RenameRequest]:
    """Return host rename requests for changed previews only."""
    return [
        RenameRequest(id=preview.id, new_name=preview.new_name)
        for preview in previews
        if preview.changed
    ]


__all__ = [
    "RenameParams",
    "RenamePreview",
    "preview_name",
    "build_previews",
    "has_changes",
    "rename_requests",
]
