"""Tests for host statistics containment."""

from typing import Sequence

from snap_organizer.host import (
    ZERO_STATS,
    HostBridge,
    ItemInfo,
    ProjectStats,
    RenameRequest,
    RenameResult,
    fetch_project_stats,
)


class _StatsBridge:
    def __init__(self, stats: ProjectStats | None = None, error: Exception | None = None) -> None:
        self._stats = stats
        self._error = error

    def get_selected_items(self) -> Sequence[ItemInfo]:
        return []

    def batch_rename(self, requests: Sequence[RenameRequest]) -> RenameResult:
        return RenameResult(success=True)

    def get_project_stats(self) -> ProjectStats:
        if self._error is not None:
            raise self._error
        assert self._stats is not None
        return self._stats


def test_fake_bridge_satisfies_protocol() -> None:
    assert isinstance(_StatsBridge(), HostBridge)


def test_fetch_project_stats_returns_host_counts() -> None:
    stats = ProjectStats.model_validate({"totalItems": 12, "comps": 3, "missingFootage": 1})

    snapshot = fetch_project_stats(_StatsBridge(stats=stats))

    assert snapshot.ok
    assert snapshot.stats.total_items == 12
    assert snapshot.stats.missing_footage == 1


def test_fetch_project_stats_substitutes_zeros_on_failure(caplog) -> None:
    snapshot = fetch_project_stats(_StatsBridge(error=RuntimeError("bridge timeout")))

    assert not snapshot.ok
    assert snapshot.error == "bridge timeout"
    assert snapshot.stats == ZERO_STATS
    assert all(value == 0 for value in snapshot.stats.model_dump().values())
    assert "bridge timeout" in caplog.text
