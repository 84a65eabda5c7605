"""Tests for versioned configuration migration."""

from copy import deepcopy
from typing import Any

import pytest

from snap_organizer.config import CURRENT_VERSION, MigrationError, VersionedConfig
from snap_organizer.config.defaults import DEFAULT_RENDER_KEYWORDS, default_config_data
from snap_organizer.config.migration import document_version, migrate, needs_migration


def _v1_document() -> dict[str, Any]:
    return {
        "folders": [
            {
                "id": "render",
                "name": "Render",
                "order": 0,
                "isRenderFolder": True,
                "categories": [],
            },
            {
                "id": "src",
                "name": "My Source",
                "order": 1,
                "isRenderFolder": False,
                "categories": [
                    {
                        "type": "Footage",
                        "enabled": True,
                        "subcategories": [
                            {
                                "id": "s1",
                                "name": "Drone",
                                "filterType": "keyword",
                                "keywords": ["drone"],
                            },
                            {"id": "s2", "name": "Plates", "extensions": ["mov"]},
                        ],
                    },
                    {"type": "Audio", "enabled": False},
                ],
            },
        ],
        "exceptions": ["_old"],
        "settings": {"deleteEmptyFolders": False},
    }


def test_v1_document_reaches_current_version_with_defaults() -> None:
    migrated = migrate(_v1_document())

    assert migrated["version"] == CURRENT_VERSION
    assert migrated["renderCompIds"] == []
    assert migrated["settings"] == {
        "deleteEmptyFolders": False,
        "showStats": True,
        "applyFolderLabelColor": False,
        "language": "auto",
        "isolateMissing": False,
        "isolateUnused": False,
    }

    render, source = migrated["folders"]
    assert render["skipOrganization"] is True
    assert render["renderKeywords"] == DEFAULT_RENDER_KEYWORDS

    footage, audio = source["categories"]
    assert (footage["order"], footage["createSubfolders"]) == (0, False)
    assert (audio["order"], audio["createSubfolders"]) == (1, False)
    assert [item["order"] for item in footage["subcategories"]] == [0, 1]


def test_migration_preserves_user_content() -> None:
    original = _v1_document()

    migrated = migrate(original)

    source = migrated["folders"][1]
    assert source["name"] == "My Source"
    assert source["categories"][0]["subcategories"][0]["keywords"] == ["drone"]
    assert source["categories"][0]["subcategories"][1]["extensions"] == ["mov"]
    assert migrated["exceptions"] == ["_old"]
    assert original == _v1_document()


def test_migrated_document_validates() -> None:
    config = VersionedConfig.model_validate(migrate(_v1_document()))

    assert config.version == CURRENT_VERSION
    assert config.exceptions[0].pattern == "_old"
    assert config.settings.delete_empty_folders is False


def test_migration_is_idempotent() -> None:
    once = migrate(_v1_document())

    assert migrate(once) == once
    assert migrate(default_config_data()) == default_config_data()


def test_stepwise_migration_matches_direct_migration() -> None:
    stepwise = _v1_document()
    for target in range(2, CURRENT_VERSION + 1):
        stepwise = migrate(stepwise, target_version=target)

    assert stepwise == migrate(_v1_document())


def test_existing_render_keywords_are_kept() -> None:
    document = _v1_document()
    document["version"] = 3
    document["folders"][0]["renderKeywords"] = ["Final"]
    document["folders"][0]["skipOrganization"] = False

    render = migrate(document)["folders"][0]

    assert render["renderKeywords"] == ["Final"]
    assert render["skipOrganization"] is False


def test_newer_documents_pass_through_unchanged() -> None:
    document = deepcopy(default_config_data())
    document["version"] = CURRENT_VERSION + 3
    document["futureField"] = {"x": 1}

    assert migrate(document) == document
    assert not needs_migration(document)


@pytest.mark.parametrize("version", ["2", 0, -1, 1.5, True])
def test_malformed_versions_raise(version: Any) -> None:
    with pytest.raises(MigrationError):
        document_version({"version": version})


def test_missing_version_is_treated_as_v1() -> None:
    assert document_version({}) == 1
    assert needs_migration({})
