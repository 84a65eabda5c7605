"""Organization plan data models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from snap_organizer.config.models import SnapBaseModel
from snap_organizer.rules.models import AssignmentReason, ConfigWarning


class MoveOperation(SnapBaseModel):
    """Represents moving a project item into a folder.

    Attributes:
        item_id: Host item identifier.
        name: Item name.
        folder_id: Destination folder id.
        destination: Display path of the destination, e.g. ``01_Source/03_Images``.
        subfolder: Subfolder segments below the destination folder.
        reason: Rule kind that produced the move.
        category: Resolved category type, when any.
    """

    item_id: int
    name: str
    folder_id: str
    destination: str
    subfolder: List[str] = Field(default_factory=list)
    reason: AssignmentReason
    category: Optional[str] = None


class SkippedItem(SnapBaseModel):
    """Represents an item that stays where it is."""

    item_id: int
    name: str
    reason: AssignmentReason


class FolderSummary(SnapBaseModel):
    """Per-folder move counts."""

    folder_id: str
    display_name: str
    item_count: int = 0


class OrganizePlan(SnapBaseModel):
    """Aggregated organization plan."""

    moves: List[MoveOperation] = Field(default_factory=list)
    summaries: List[FolderSummary] = Field(default_factory=list)
    skipped: List[SkippedItem] = Field(default_factory=list)
    warnings: List[ConfigWarning] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)


__all__ = ["MoveOperation", "SkippedItem", "FolderSummary", "OrganizePlan"]
