"""Planner for organization operations."""

from __future__ import annotations

import logging
from typing import Iterable

from snap_organizer.config.folders import display_folder_name, sort_folders
from snap_organizer.rules.models import AssetDescriptor, Assignment
from snap_organizer.rules.resolver import RuleResolver

from .models import FolderSummary, MoveOperation, OrganizePlan, SkippedItem

LOGGER = logging.getLogger(__name__)


class OrganizerPlanner:
    """Derive organization plans from asset descriptors and resolver decisions."""

    def build_plan(
        self,
        assets: Iterable[AssetDescriptor],
        resolver: RuleResolver,
        *,
        include_warnings: bool = True,
    ) -> OrganizePlan:
        """Produce an organization plan for ``assets``.

        Args:
            assets: Items reported by the host.
            resolver: Resolver bound to the configuration snapshot.
            include_warnings: Attach configuration diagnostics to the plan.

        Returns:
            OrganizePlan: Moves grouped by destination folder plus skipped items.
        """

        config = resolver.config
        display_names = {
            folder.id: display_folder_name(folder, index)
            for index, folder in enumerate(sort_folders(config.folders))
        }
        summaries = {
            folder_id: FolderSummary(folder_id=folder_id, display_name=name)
            for folder_id, name in display_names.items()
        }

        plan = OrganizePlan()
        for assignment in resolver.resolve_many(assets):
            move = self._build_move(assignment, display_names)
            if move is None:
                if assignment.reason != "folder":
                    plan.skipped.append(
                        SkippedItem(
                            item_id=assignment.item_id,
                            name=assignment.name,
                            reason=assignment.reason,
                        )
                    )
                continue
            plan.moves.append(move)
            summaries[move.folder_id].item_count += 1

        plan.summaries = [summary for summary in summaries.values() if summary.item_count]
        if include_warnings:
            plan.warnings = resolver.diagnostics()
        plan.notes.extend(self._notes(plan, resolver))

        LOGGER.debug("Planned %d moves, %d skipped", len(plan.moves), len(plan.skipped))
        return plan

    # ------------------------------------------------------------------ #
    # Helpers                                                            #
    # ------------------------------------------------------------------ #

    def _build_move(
        self,
        assignment: Assignment,
        display_names: dict[str, str],
    ) -> MoveOperation | None:
        if assignment.folder_id is None or assignment.folder_id not in display_names:
            return None

        destination = display_names[assignment.folder_id]
        if assignment.subfolder:
            destination = f"{destination}/{assignment.subfolder_path}"
        return MoveOperation(
            item_id=assignment.item_id,
            name=assignment.name,
            folder_id=assignment.folder_id,
            destination=destination,
            subfolder=list(assignment.subfolder),
            reason=assignment.reason,
            category=assignment.category,
        )

    def _notes(self, plan: OrganizePlan, resolver: RuleResolver) -> list[str]:
        settings = resolver.config.settings
        notes: list[str] = []
        unmatched = sum(1 for item in plan.skipped if item.reason == "unmatched")
        if unmatched:
            notes.append(f"{unmatched} item(s) matched no rule and stay in place.")
        if settings.delete_empty_folders:
            notes.append("Empty folders are removed after organizing.")
        if settings.isolate_missing:
            notes.append("Missing footage is isolated into its own folder.")
        if settings.isolate_unused:
            notes.append("Unused assets are isolated into their own folder.")
        return notes


__all__ = ["OrganizerPlanner"]
