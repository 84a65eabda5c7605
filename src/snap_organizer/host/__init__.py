"""Host application bridge interface."""

from .bridge import (
    ZERO_STATS,
    HostBridge,
    ItemInfo,
    ProjectStats,
    RenameRequest,
    RenameResult,
)
from .stats import StatsSnapshot, fetch_project_stats

__all__ = [
    "HostBridge",
    "ItemInfo",
    "ProjectStats",
    "RenameRequest",
    "RenameResult",
    "ZERO_STATS",
    "StatsSnapshot",
    "fetch_project_stats",
]
