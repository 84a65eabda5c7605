"""Value types exchanged with the rule resolver."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from snap_organizer.config.models import SnapBaseModel


class AssetDescriptor(SnapBaseModel):
    """Project item as reported by the host application.

    Attributes:
        id: Host item identifier.
        name: Item name, usually including the file extension.
        is_folder: Whether the item is a project folder.
        item_type: Host item kind (`comp`, `solid`, `footage`, ...).
        extension: Explicit file extension; derived from `name` when absent.
        is_sequence_member: Whether the item is an imported frame sequence.
    """

    id: int
    name: str
    is_folder: bool = False
    item_type: Optional[str] = None
    extension: Optional[str] = None
    is_sequence_member: bool = False


AssignmentReason = Literal["folder", "render", "category", "exception", "unmatched"]


class Assignment(SnapBaseModel):
    """Decision describing where an asset belongs.

    Attributes:
        item_id: Host item identifier.
        name: Item name at resolution time.
        reason: Which rule produced the decision.
        folder_id: Target folder id, or `None` when the item stays in place.
        folder_name: Target folder name.
        category: Resolved category type, when any.
        subfolder: Nested subfolder segments below the target folder.
        subcategory_id: Matched subcategory id, when any.
        exception_id: Exception rule that overrode the decision, when any.
    """

    item_id: int
    name: str
    reason: AssignmentReason
    folder_id: Optional[str] = None
    folder_name: Optional[str] = None
    category: Optional[str] = None
    subfolder: List[str] = Field(default_factory=list)
    subcategory_id: Optional[str] = None
    exception_id: Optional[str] = None

    @property
    def is_placed(self) -> bool:
        """Return whether the asset has a destination folder."""
        return self.folder_id is not None

    @property
    def subfolder_path(self) -> str:
        """Return the subfolder segments joined with `/`."""
        return "/".join(self.subfolder)


WarningCode = Literal[
    "duplicate_keyword",
    "filter_required",
    "invalid_category_type",
    "shadowed_category",
]


class ConfigWarning(SnapBaseModel):
    """Non-fatal configuration diagnostic.

    Attributes:
        code: Machine-readable warning identifier.
        message: Human-readable description.
        folder_id: Folder the warning refers to.
        category: Category type the warning refers to.
        subcategory_id: Subcategory the warning refers to.
    """

    code: WarningCode
    message: str
    folder_id: Optional[str] = None
    category: Optional[str] = None
    subcategory_id: Optional[str] = None


__all__ = [
    "AssetDescriptor",
    "AssignmentReason",
    "Assignment",
    "WarningCode",
    "ConfigWarning",
]
