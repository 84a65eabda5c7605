"""Organization planning package."""

from .models import FolderSummary, MoveOperation, OrganizePlan, SkippedItem
from .planner import OrganizerPlanner

__all__ = ["FolderSummary", "MoveOperation", "OrganizePlan", "SkippedItem", "OrganizerPlanner"]
