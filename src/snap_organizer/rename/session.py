"""Stateful batch rename workflow over a host bridge."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from snap_organizer.host.bridge import HostBridge, ItemInfo

from .preview import RenameParams, RenamePreview, build_previews, has_changes, rename_requests

LOGGER = logging.getLogger(__name__)

NO_CHANGES_MESSAGE = "No changes to apply"


class BatchRenameSession:
    """Track selected items and rename parameters between host calls.

    Host failures never propagate out of the session; they leave an empty or
    unchanged state and record a message in :attr:`error`.
    """

    def __init__(self, bridge: HostBridge) -> None:
        self._bridge = bridge
        self.items: list[ItemInfo] = []
        self.params = RenameParams()
        self.error: Optional[str] = None
        self.applying = False

    @property
    def previews(self) -> list[RenamePreview]:
        """Return previews for the current items and parameters."""
        return build_previews(self.items, self.params)

    @property
    def has_changes(self) -> bool:
        return has_changes(self.previews)

    def update(self, **changes: str) -> RenameParams:
        """Replace individual rename parameters and return the new set."""
        self.params = replace(self.params, **changes)
        return self.params

    def fetch_selected_items(self) -> list[ItemInfo]:
        """Load the host selection, excluding folders.

        Returns:
            list[ItemInfo]: Selected non-folder items; empty when the host fails.
        """
        try:
            selected = self._bridge.get_selected_items()
        except Exception as exc:
            LOGGER.warning("Failed to fetch selected items: %s", exc)
            self.items = []
            self.error = f"Failed to fetch selected items: {exc}"
            return []
        self.items = [item for item in selected if not item.is_folder]
        self.error = None
        return list(self.items)

    def apply(self) -> bool:
        """Send changed names to the host.

        Returns:
            bool: True when the host reported success.
        """
        requests = rename_requests(self.previews)
        if not requests:
            self.error = NO_CHANGES_MESSAGE
            return False

        self.applying = True
        self.error = None
        try:
            result = self._bridge.batch_rename(requests)
        except Exception as exc:
            LOGGER.warning("Batch rename failed: %s", exc)
            self.error = str(exc) or "Rename failed"
            return False
        finally:
            self.applying = False

        if not result.success:
            self.error = ", ".join(result.errors) or "Rename failed"
            LOGGER.warning("Batch rename reported errors: %s", self.error)
            return False

        LOGGER.info("Renamed %d item(s)", len(requests))
        self.fetch_selected_items()
        self.params = RenameParams()
        return True

    def reset(self) -> None:
        """Clear parameters and any recorded error."""
        self.params = RenameParams()
        self.error = None


__all__ = ["BatchRenameSession", "NO_CHANGES_MESSAGE"]
