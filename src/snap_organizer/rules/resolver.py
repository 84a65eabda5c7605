"""Resolve project assets to folder and subfolder destinations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from snap_organizer.classification.classifier import classify, file_extension, normalize_extension
from snap_organizer.classification.extensions import IMAGE_EXTENSIONS
from snap_organizer.config.models import CategoryConfig, FolderConfig, VersionedConfig

from .categories import assigned_categories, find_duplicate_keywords, is_valid_category_type
from .filters import (
    category_filters,
    find_matching_exception,
    find_matching_subcategory,
    has_filters,
    is_catch_all_eligible,
    matches_any,
    matches_render_keywords,
    sort_subcategories,
    subcategory_filters,
)
from .models import AssetDescriptor, Assignment, ConfigWarning

LOGGER = logging.getLogger(__name__)

OTHERS_FOLDER_SUFFIX = "_Others"


def others_folder_name(subcategory_count: int) -> str:
    """Return the fallback subfolder name used after ``subcategory_count`` siblings."""
    return f"{subcategory_count + 1:02d}{OTHERS_FOLDER_SUFFIX}"


@dataclass(frozen=True, slots=True)
class CategoryMapping:
    """A category rule located inside its folder.

    Attributes:
        folder: Folder holding the rule.
        category: The category rule.
        position: 1-based position of the rule among the folder's sorted categories.
    """

    folder: FolderConfig
    category: CategoryConfig
    position: int

    @property
    def category_folder_name(self) -> str:
        return f"{self.position:02d}_{self.category.type}"


class RuleResolver:
    """Decide, for each asset, which folder and subfolder it belongs to.

    The resolver treats the configuration as an immutable snapshot; it never
    mutates the configuration or the descriptors it is given, so one instance
    can serve any number of resolution requests.
    """

    def __init__(self, config: VersionedConfig) -> None:
        self._config = config
        self._folders_by_id = {folder.id: folder for folder in config.folders}
        self._active_folders = [
            folder for folder in config.folders if not folder.skip_organization
        ]
        self._mappings = self._build_mappings(self._active_folders)
        self._owners: dict[str, str] = dict(assigned_categories(self._active_folders))
        self._render_comp_ids = set(config.render_comp_ids)
        self._detect_sequences = any(
            mapping.category.detect_sequences
            for category_type in ("Footage", "Images")
            for mapping in self._mappings.get(category_type, [])
        )

    @property
    def config(self) -> VersionedConfig:
        """Return the configuration snapshot used by the resolver."""
        return self._config

    def resolve(self, asset: AssetDescriptor) -> Assignment:
        """Resolve a single asset.

        Args:
            asset: Descriptor reported by the host.

        Returns:
            Assignment: Destination decision; `folder_id` is `None` when the
                asset stays where it is.
        """
        if asset.is_folder:
            return Assignment(item_id=asset.id, name=asset.name, reason="folder")

        assignment = self._resolve_render(asset) or self._resolve_category(asset)
        exception = find_matching_exception(asset.name, self._config.exceptions)
        if exception is not None:
            target = self._folders_by_id.get(exception.target_folder_id or "")
            assignment = Assignment(
                item_id=asset.id,
                name=asset.name,
                reason="exception",
                folder_id=target.id if target else None,
                folder_name=target.name if target else None,
                category=assignment.category,
                exception_id=exception.id,
            )

        LOGGER.debug(
            "Resolved %r -> %s %s/%s",
            asset.name,
            assignment.reason,
            assignment.folder_id,
            assignment.subfolder_path,
        )
        return assignment

    def resolve_many(self, assets: Iterable[AssetDescriptor]) -> list[Assignment]:
        """Resolve every asset in order."""
        return [self.resolve(asset) for asset in assets]

    def category_for(self, asset: AssetDescriptor) -> Optional[str]:
        """Return the category type of an asset, or `None` when it has none.

        Comps and solids come from the host item type; everything else is
        classified by extension, honouring sequence membership only when an
        enabled Footage or Images rule asks for sequence detection.
        """
        item_type = (asset.item_type or "").lower()
        if item_type == "comp":
            return "Comps"
        if item_type == "solid":
            return "Solids"
        return classify(self._extension(asset), is_sequence=self._is_sequence(asset))

    def diagnostics(self) -> list[ConfigWarning]:
        """Compute configuration warnings for the current snapshot.

        Returns:
            list[ConfigWarning]: Duplicate keywords, subcategories that need a
                filter, unknown category types, and shadowed categories.
        """
        warnings: list[ConfigWarning] = []
        for folder in self._config.folders:
            warnings.extend(self._folder_warnings(folder))

        for mappings in self._mappings.values():
            for mapping in mappings:
                category = mapping.category
                if has_filters(category):
                    continue
                owner = self._owners.get(category.type)
                if owner is not None and owner != mapping.folder.id:
                    owner_name = self._folders_by_id[owner].name
                    warnings.append(
                        ConfigWarning(
                            code="shadowed_category",
                            message=(
                                f"{category.type} in '{mapping.folder.name}' is shadowed by "
                                f"'{owner_name}'; add filters to keep both."
                            ),
                            folder_id=mapping.folder.id,
                            category=category.type,
                        )
                    )
        return warnings

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #

    def _build_mappings(
        self,
        folders: Iterable[FolderConfig],
    ) -> dict[str, list[CategoryMapping]]:
        mappings: dict[str, list[CategoryMapping]] = {}
        for folder in folders:
            ordered = sorted(folder.categories, key=lambda category: category.order)
            for index, category in enumerate(ordered, start=1):
                if not category.enabled or not is_valid_category_type(category.type):
                    continue
                mappings.setdefault(category.type, []).append(
                    CategoryMapping(folder=folder, category=category, position=index)
                )
        return mappings

    def _extension(self, asset: AssetDescriptor) -> str:
        if asset.extension:
            return normalize_extension(asset.extension)
        return file_extension(asset.name)

    def _is_sequence(self, asset: AssetDescriptor) -> bool:
        return asset.is_sequence_member and self._detect_sequences

    def _resolve_render(self, asset: AssetDescriptor) -> Optional[Assignment]:
        if (asset.item_type or "").lower() != "comp":
            return None
        explicit = asset.id in self._render_comp_ids
        for folder in self._config.folders:
            if not folder.is_render_folder:
                continue
            if explicit or matches_render_keywords(asset.name, folder.render_keywords):
                return Assignment(
                    item_id=asset.id,
                    name=asset.name,
                    reason="render",
                    folder_id=folder.id,
                    folder_name=folder.name,
                    category="Comps",
                )
        return None

    def _select_mapping(self, category_type: str, name: str) -> Optional[CategoryMapping]:
        candidates = self._mappings.get(category_type, [])
        for mapping in candidates:
            if has_filters(mapping.category) and matches_any(
                category_filters(mapping.category), name
            ):
                return mapping

        owner = self._owners.get(category_type)
        if owner is None:
            return None
        for mapping in reversed(candidates):
            if mapping.folder.id == owner and not has_filters(mapping.category):
                return mapping
        return None

    def _resolve_category(self, asset: AssetDescriptor) -> Assignment:
        category_type = self.category_for(asset)
        if category_type is None:
            return Assignment(item_id=asset.id, name=asset.name, reason="unmatched")

        mapping = self._select_mapping(category_type, asset.name)
        if mapping is None:
            return Assignment(
                item_id=asset.id,
                name=asset.name,
                reason="unmatched",
                category=category_type,
            )

        subfolder, subcategory_id = self._subfolder(asset, mapping)
        return Assignment(
            item_id=asset.id,
            name=asset.name,
            reason="category",
            folder_id=mapping.folder.id,
            folder_name=mapping.folder.name,
            category=category_type,
            subfolder=subfolder,
            subcategory_id=subcategory_id,
        )

    def _subfolder(
        self,
        asset: AssetDescriptor,
        mapping: CategoryMapping,
    ) -> tuple[list[str], Optional[str]]:
        category = mapping.category
        segments = [mapping.category_folder_name]
        extension = self._extension(asset)

        if (
            category.type == "Footage"
            and self._is_sequence(asset)
            and extension in IMAGE_EXTENSIONS
        ):
            if category.create_subfolders:
                segments.extend(["Sequences", f"{extension.upper()} Sequence"])
            return segments, None

        subcategories = category.subcategories or []
        if subcategories:
            matched = find_matching_subcategory(asset.name, subcategories)
            if matched is not None:
                segments.append(f"{matched.order:02d}_{matched.name}")
                return segments, matched.id
            if len(subcategories) >= 2:
                segments.append(others_folder_name(len(subcategories)))
            return segments, None

        if category.create_subfolders and extension and category.type not in ("Comps", "Solids"):
            segments.append(f"_{extension.upper()}")
        return segments, None

    def _folder_warnings(self, folder: FolderConfig) -> list[ConfigWarning]:
        warnings: list[ConfigWarning] = []

        for category_type, keywords in find_duplicate_keywords(folder.categories).items():
            warnings.append(
                ConfigWarning(
                    code="duplicate_keyword",
                    message=(
                        f"Keywords {', '.join(keywords)} in '{folder.name}' are shared by "
                        f"{category_type} and another category."
                    ),
                    folder_id=folder.id,
                    category=category_type,
                )
            )

        for category in folder.categories:
            if not is_valid_category_type(category.type):
                warnings.append(
                    ConfigWarning(
                        code="invalid_category_type",
                        message=(
                            f"Unknown category type {category.type!r} in '{folder.name}' "
                            "is ignored."
                        ),
                        folder_id=folder.id,
                        category=category.type,
                    )
                )
                continue

            siblings = sort_subcategories(category.subcategories or [])
            for subcategory in siblings:
                if subcategory_filters(subcategory):
                    continue
                if is_catch_all_eligible(subcategory, siblings):
                    continue
                warnings.append(
                    ConfigWarning(
                        code="filter_required",
                        message=(
                            f"Subcategory '{subcategory.name}' under {category.type} in "
                            f"'{folder.name}' needs at least one filter."
                        ),
                        folder_id=folder.id,
                        category=category.type,
                        subcategory_id=subcategory.id,
                    )
                )

        return warnings


__all__ = ["CategoryMapping", "RuleResolver", "others_folder_name", "OTHERS_FOLDER_SUFFIX"]
