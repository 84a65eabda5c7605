"""Filter matching for categories, subcategories, exceptions, and render comps."""

from __future__ import annotations

from typing import Iterable, Literal, Optional, Sequence

from snap_organizer.classification.classifier import file_extension
from snap_organizer.config.models import (
    CategoryConfig,
    ExceptionRule,
    SubcategoryConfig,
    SubcategoryFilter,
)

FilterKind = Literal["ext", "prefix", "keyword"]

LEGACY_PREFIX_MARKER = "prefix:"


def _strip_dot(value: str) -> str:
    return value[1:] if value.startswith(".") else value


def matches(subcategory_filter: SubcategoryFilter, filename: str) -> bool:
    """Return whether a single filter matches a file name.

    Args:
        subcategory_filter: Filter to evaluate.
        filename: Asset name including its extension.

    Returns:
        bool: True when the filter matches; comparison is case-insensitive.
    """
    value = subcategory_filter.value.lower()
    if subcategory_filter.kind == "ext":
        return file_extension(filename) == _strip_dot(value)
    name = filename.lower()
    if subcategory_filter.kind == "prefix":
        return name.startswith(value)
    if subcategory_filter.kind == "keyword":
        return value in name
    return False


def matches_any(filters: Iterable[SubcategoryFilter], filename: str) -> bool:
    """Return True if any filter matches; an empty list never matches."""
    return any(matches(item, filename) for item in filters)


def _legacy_filters(
    extensions: Optional[Sequence[str]],
    keywords: Optional[Sequence[str]],
) -> list[SubcategoryFilter]:
    result: list[SubcategoryFilter] = []
    for ext in extensions or []:
        result.append(SubcategoryFilter(kind="ext", value=_strip_dot(ext.strip())))
    for keyword in keywords or []:
        keyword = keyword.strip()
        if keyword.startswith(LEGACY_PREFIX_MARKER):
            result.append(
                SubcategoryFilter(kind="prefix", value=keyword[len(LEGACY_PREFIX_MARKER) :])
            )
        else:
            result.append(SubcategoryFilter(kind="keyword", value=keyword))
    return [item for item in result if item.value]


def subcategory_filters(subcategory: SubcategoryConfig) -> list[SubcategoryFilter]:
    """Return the effective filters of a subcategory.

    The unified `filters` field wins when non-empty; otherwise legacy
    `extensions` and `keywords` are read as filters. The record itself is not
    modified.
    """
    if subcategory.filters:
        return list(subcategory.filters)
    return _legacy_filters(subcategory.extensions, subcategory.keywords)


def category_filters(category: CategoryConfig) -> list[SubcategoryFilter]:
    """Return the effective filters restricting a category rule."""
    if category.filters:
        return list(category.filters)
    return _legacy_filters(None, category.keywords)


def has_filters(category: CategoryConfig) -> bool:
    """Return whether the category carries non-empty filters or keywords."""
    return bool(category.filters) or bool(category.keywords)


def is_catch_all_eligible(
    subcategory: SubcategoryConfig,
    siblings: Sequence[SubcategoryConfig],
) -> bool:
    """Return whether an unfiltered subcategory may claim unmatched assets.

    The slot must carry no filters, be marked with ``filter_type == "all"``,
    not require keywords, and be the only unfiltered subcategory among its
    siblings.
    """
    if subcategory_filters(subcategory):
        return False
    if subcategory.keyword_required or subcategory.filter_type != "all":
        return False
    unfiltered = [item for item in siblings if not subcategory_filters(item)]
    return len(unfiltered) == 1 and unfiltered[0] is subcategory


def matches_subcategory(
    filename: str,
    subcategory: SubcategoryConfig,
    *,
    catch_all: bool = False,
) -> bool:
    """Return whether ``filename`` belongs to ``subcategory``.

    Args:
        filename: Asset name.
        subcategory: Subcategory to test.
        catch_all: Set by the caller when the slot is catch-all eligible; an
            unfiltered subcategory then matches every name.

    Returns:
        bool: True when a filter matches, or the eligible catch-all applies.
    """
    filters = subcategory_filters(subcategory)
    if filters:
        return matches_any(filters, filename)
    return catch_all


def sort_subcategories(subcategories: Sequence[SubcategoryConfig]) -> list[SubcategoryConfig]:
    """Return subcategories ordered by `order`, keeping stored order for ties."""
    return sorted(subcategories, key=lambda item: item.order)


def find_matching_subcategory(
    filename: str,
    subcategories: Sequence[SubcategoryConfig],
) -> Optional[SubcategoryConfig]:
    """Return the first subcategory claiming ``filename``.

    Filtered subcategories are tried in ascending order first; an eligible
    catch-all subcategory only receives names no filtered sibling claimed.
    """
    ordered = sort_subcategories(subcategories)
    catch_all: Optional[SubcategoryConfig] = None
    for subcategory in ordered:
        if not subcategory_filters(subcategory):
            if is_catch_all_eligible(subcategory, ordered):
                catch_all = subcategory
            continue
        if matches_subcategory(filename, subcategory):
            return subcategory
    return catch_all


def matches_exception(filename: str, rule: ExceptionRule) -> bool:
    """Return whether an exception rule matches a file name."""
    pattern = rule.pattern.lower()
    if not pattern:
        return False
    if rule.type == "nameContains":
        return pattern in filename.lower()
    if rule.type == "extension":
        return file_extension(filename) == _strip_dot(pattern)
    return False


def find_matching_exception(
    filename: str,
    rules: Iterable[ExceptionRule],
) -> Optional[ExceptionRule]:
    """Return the first exception rule matching ``filename``."""
    for rule in rules:
        if matches_exception(filename, rule):
            return rule
    return None


def matches_render_keywords(name: str, keywords: Optional[Iterable[str]]) -> bool:
    """Return whether ``name`` contains any non-blank render keyword."""
    lowered = name.lower()
    for keyword in keywords or []:
        keyword = keyword.strip()
        if keyword and keyword.lower() in lowered:
            return True
    return False


def is_valid_filter_value(value: str) -> bool:
    """Return whether a filter value is non-empty after trimming."""
    return bool(value.strip())


def normalize_filter_value(value: str) -> str:
    """Trim and lower-case a filter value for comparison."""
    return value.strip().lower()


def parse_filter_input(text: str, kind: FilterKind) -> list[SubcategoryFilter]:
    """Parse comma-separated editor input into filters.

    Example:
        ``parse_filter_input(".mp4, .mov", "ext")`` yields ``ext`` filters for
        ``mp4`` and ``mov``.
    """
    values = [value.strip() for value in text.split(",")]
    result: list[SubcategoryFilter] = []
    for value in values:
        if not value:
            continue
        if kind == "ext":
            value = _strip_dot(value)
        result.append(SubcategoryFilter(kind=kind, value=value))
    return result


__all__ = [
    "FilterKind",
    "matches",
    "matches_any",
    "subcategory_filters",
    "category_filters",
    "has_filters",
    "is_catch_all_eligible",
    "matches_subcategory",
    "sort_subcategories",
    "find_matching_subcategory",
    "matches_exception",
    "find_matching_exception",
    "matches_render_keywords",
    "is_valid_filter_value",
    "normalize_filter_value",
    "parse_filter_input",
]
