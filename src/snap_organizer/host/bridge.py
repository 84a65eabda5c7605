"""Interface to the host application that owns the project items."""

from __future__ import annotations

from typing import List, Protocol, Sequence, runtime_checkable

from pydantic import Field

from snap_organizer.config.models import SnapBaseModel
from snap_organizer.rules.models import AssetDescriptor

# Items reported by the host double as resolver descriptors.
ItemInfo = AssetDescriptor


class RenameRequest(SnapBaseModel):
    """Single rename instruction sent to the host."""

    id: int
    new_name: str


class RenameResult(SnapBaseModel):
    """Outcome of a host batch rename.

    Attributes:
        success: Whether every rename was applied.
        errors: Host error messages for failed renames.
    """

    success: bool
    errors: List[str] = Field(default_factory=list)


class ProjectStats(SnapBaseModel):
    """Flat item counts reported by the host."""

    total_items: int = 0
    comps: int = 0
    footage: int = 0
    images: int = 0
    audio: int = 0
    sequences: int = 0
    solids: int = 0
    folders: int = 0
    missing_footage: int = 0
    unused_items: int = 0


ZERO_STATS = ProjectStats()


@runtime_checkable
class HostBridge(Protocol):
    """Synchronous request/response calls into the host application.

    Implementations may raise any exception; callers in this package contain
    the failure and fall back to empty or zero results.
    """

    def get_selected_items(self) -> Sequence[ItemInfo]: ...

    def batch_rename(self, requests: Sequence[RenameRequest]) -> RenameResult: ...

    def get_project_stats(self) -> ProjectStats: ...


__all__ = [
    "ItemInfo",
    "RenameRequest",
    "RenameResult",
    "ProjectStats",
    "ZERO_STATS",
    "HostBridge",
]
