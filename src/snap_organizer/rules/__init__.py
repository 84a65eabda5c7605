"""Rule matching and resolution package."""

from .categories import (
    assigned_categories,
    ensure_category_type,
    find_duplicate_keywords,
    is_valid_category_type,
    recalculate_category_orders,
    sort_categories,
)
from .filters import (
    find_matching_subcategory,
    matches,
    matches_any,
    matches_subcategory,
    subcategory_filters,
)
from .models import AssetDescriptor, Assignment, ConfigWarning
from .resolver import RuleResolver

__all__ = [
    "assigned_categories",
    "ensure_category_type",
    "find_duplicate_keywords",
    "is_valid_category_type",
    "recalculate_category_orders",
    "sort_categories",
    "find_matching_subcategory",
    "matches",
    "matches_any",
    "matches_subcategory",
    "subcategory_filters",
    "AssetDescriptor",
    "Assignment",
    "ConfigWarning",
    "RuleResolver",
]
