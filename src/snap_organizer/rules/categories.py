"""Category assignment, keyword conflict detection, and ordering helpers."""

from __future__ import annotations

from typing import Any, Optional, Sequence, TypeGuard

from snap_organizer.config.defaults import ALL_CATEGORIES, CategoryType
from snap_organizer.config.exceptions import InvalidCategoryTypeError
from snap_organizer.config.models import CategoryConfig, FolderConfig

from .filters import has_filters


def is_valid_category_type(value: Any) -> TypeGuard[CategoryType]:
    """Return whether ``value`` is exactly one of the known category types."""
    return isinstance(value, str) and value in ALL_CATEGORIES


def ensure_category_type(value: Any) -> CategoryType:
    """Return ``value`` as a category type or raise.

    Args:
        value: Untrusted category type, usually read from persisted data.

    Returns:
        CategoryType: The validated category type.

    Raises:
        InvalidCategoryTypeError: If ``value`` is not a known category type.
    """
    if not is_valid_category_type(value):
        raise InvalidCategoryTypeError(
            f"Unknown category type {value!r}; expected one of {', '.join(ALL_CATEGORIES)}."
        )
    return value


def assigned_categories(folders: Sequence[FolderConfig]) -> dict[CategoryType, str]:
    """Map each exclusively assigned category type to its folder id.

    Folders and their categories are visited in stored order. Only enabled
    categories without filters or keywords take part; filtered categories may
    repeat across folders. When an unfiltered type appears in several folders
    the last one visited wins. Entries with unknown types are ignored.

    Args:
        folders: Folder rules in stored order.

    Returns:
        dict[CategoryType, str]: Category type to owning folder id.
    """
    assigned: dict[CategoryType, str] = {}
    for folder in folders:
        for category in folder.categories:
            if not category.enabled or has_filters(category):
                continue
            if not is_valid_category_type(category.type):
                continue
            assigned[category.type] = folder.id
    return assigned


def _declared_keywords(category: CategoryConfig) -> list[str]:
    declared = list(category.keywords or [])
    declared.extend(item.value for item in category.filters or [] if item.kind == "keyword")
    return [keyword for keyword in declared if keyword.strip()]


def find_duplicate_keywords(
    categories: Optional[Sequence[CategoryConfig]],
) -> dict[CategoryType, list[str]]:
    """Report keywords claimed by more than one category type.

    Keywords are compared case-insensitively. Every type sharing a keyword is
    reported, not only the later ones.

    Args:
        categories: Categories to inspect, typically those of one folder.

    Returns:
        dict[CategoryType, list[str]]: Lower-cased colliding keywords per type.
    """
    duplicates: dict[CategoryType, list[str]] = {}
    if not categories:
        return duplicates

    registry: dict[str, list[CategoryType]] = {}
    for category in categories:
        if not is_valid_category_type(category.type):
            continue
        for keyword in _declared_keywords(category):
            owners = registry.setdefault(keyword.lower(), [])
            if category.type not in owners:
                owners.append(category.type)

    for keyword, owners in registry.items():
        if len(owners) < 2:
            continue
        for owner in owners:
            collisions = duplicates.setdefault(owner, [])
            if keyword not in collisions:
                collisions.append(keyword)

    return duplicates


def sort_categories(categories: Sequence[CategoryConfig]) -> list[CategoryConfig]:
    """Return a new list ordered by `order`; ties keep their stored order."""
    return sorted(categories, key=lambda category: category.order)


def recalculate_category_orders(categories: Sequence[CategoryConfig]) -> list[CategoryConfig]:
    """Return copies whose `order` is renumbered 0..n-1 in current sequence."""
    return [
        category.model_copy(update={"order": index}, deep=True)
        for index, category in enumerate(categories)
    ]


__all__ = [
    "is_valid_category_type",
    "ensure_category_type",
    "assigned_categories",
    "find_duplicate_keywords",
    "sort_categories",
    "recalculate_category_orders",
]
