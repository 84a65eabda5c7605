"""Project statistics fetched through the host bridge."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .bridge import ZERO_STATS, HostBridge, ProjectStats

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatsSnapshot:
    """Statistics plus the failure message, if the host call failed."""

    stats: ProjectStats
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fetch_project_stats(bridge: HostBridge) -> StatsSnapshot:
    """Fetch project statistics, substituting all-zero counts on failure.

    Args:
        bridge: Host bridge to query.

    Returns:
        StatsSnapshot: Host counts, or zero counts plus the error message.
    """
    try:
        stats = bridge.get_project_stats()
    except Exception as exc:
        LOGGER.warning("Failed to fetch project stats: %s", exc)
        return StatsSnapshot(stats=ZERO_STATS.model_copy(), error=str(exc) or type(exc).__name__)
    return StatsSnapshot(stats=stats)


__all__ = ["StatsSnapshot", "fetch_project_stats"]
