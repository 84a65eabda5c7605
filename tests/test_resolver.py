"""Tests for per-asset rule resolution and configuration diagnostics."""

from typing import Any

from snap_organizer.config.models import VersionedConfig, default_config
from snap_organizer.rules.models import AssetDescriptor
from snap_organizer.rules.resolver import RuleResolver, others_folder_name


def _asset(item_id: int, name: str, **fields: Any) -> AssetDescriptor:
    return AssetDescriptor(id=item_id, name=name, **fields)


def _config(folders: list[dict[str, Any]], **extra: Any) -> VersionedConfig:
    return VersionedConfig.model_validate({"folders": folders, **extra})


def test_default_seed_places_common_assets() -> None:
    resolver = RuleResolver(default_config())

    clip = resolver.resolve(_asset(1, "clip.mp4"))
    still = resolver.resolve(_asset(2, "logo.png"))
    music = resolver.resolve(_asset(3, "music.wav"))
    comp = resolver.resolve(_asset(4, "Scene 01", item_type="comp"))
    solid = resolver.resolve(_asset(5, "Black Solid 1", item_type="solid"))

    assert (clip.folder_id, clip.subfolder) == ("source", ["02_Footage"])
    assert (still.folder_id, still.subfolder) == ("source", ["03_Images"])
    assert (music.folder_id, music.subfolder) == ("source", ["04_Audio"])
    assert (comp.folder_id, comp.subfolder) == ("source", ["01_Comps"])
    assert (solid.folder_id, solid.subfolder) == ("system", ["01_Solids"])
    assert clip.reason == "category"


def test_render_keyword_and_explicit_ids_route_to_render_folder() -> None:
    config = default_config().model_copy(update={"render_comp_ids": [9]})
    resolver = RuleResolver(config)

    by_keyword = resolver.resolve(_asset(1, "Main Comp", item_type="comp"))
    by_id = resolver.resolve(_asset(9, "Scene", item_type="comp"))
    footage = resolver.resolve(_asset(2, "Main_plate.mp4"))

    assert (by_keyword.reason, by_keyword.folder_id) == ("render", "render")
    assert (by_id.reason, by_id.folder_id) == ("render", "render")
    assert footage.folder_id == "source"


def test_folders_and_unknown_extensions_stay_in_place() -> None:
    resolver = RuleResolver(default_config())

    folder = resolver.resolve(_asset(1, "Footage", is_folder=True))
    unknown = resolver.resolve(_asset(2, "notes.txt"))

    assert folder.reason == "folder"
    assert not folder.is_placed
    assert unknown.reason == "unmatched"
    assert unknown.folder_id is None


def test_sequences_follow_detect_sequences_setting() -> None:
    resolver = RuleResolver(default_config())
    frame = resolver.resolve(_asset(1, "shot.0001.exr", is_sequence_member=True))

    assert (frame.category, frame.subfolder) == ("Footage", ["02_Footage"])

    no_detection = _config(
        [
            {
                "id": "source",
                "name": "Source",
                "categories": [
                    {"type": "Footage", "order": 0},
                    {"type": "Images", "order": 1},
                ],
            }
        ]
    )
    still = RuleResolver(no_detection).resolve(
        _asset(2, "shot.0001.exr", is_sequence_member=True)
    )

    assert (still.category, still.subfolder) == ("Images", ["02_Images"])


def test_sequence_and_extension_subfolders() -> None:
    config = _config(
        [
            {
                "id": "source",
                "name": "Source",
                "categories": [
                    {
                        "type": "Footage",
                        "order": 0,
                        "createSubfolders": True,
                        "detectSequences": True,
                    },
                    {"type": "Audio", "order": 1, "createSubfolders": True},
                ],
            }
        ]
    )
    resolver = RuleResolver(config)

    frame = resolver.resolve(_asset(1, "plate_0001.dpx", is_sequence_member=True))
    clip = resolver.resolve(_asset(2, "clip.mov"))
    voice = resolver.resolve(_asset(3, "voice.WAV"))

    assert frame.subfolder == ["01_Footage", "Sequences", "DPX Sequence"]
    assert clip.subfolder == ["01_Footage", "_MOV"]
    assert voice.subfolder_path == "02_Audio/_WAV"


def test_subcategories_and_others_folder() -> None:
    config = _config(
        [
            {
                "id": "source",
                "name": "Source",
                "categories": [
                    {
                        "type": "Footage",
                        "order": 0,
                        "subcategories": [
                            {
                                "id": "drone",
                                "name": "Drone",
                                "order": 1,
                                "filters": [{"type": "keyword", "value": "drone"}],
                            },
                            {
                                "id": "interview",
                                "name": "Interview",
                                "order": 2,
                                "keywords": ["prefix:INT_"],
                            },
                        ],
                    },
                    {
                        "type": "Images",
                        "order": 1,
                        "subcategories": [
                            {
                                "id": "bg",
                                "name": "Backgrounds",
                                "order": 1,
                                "extensions": ["psd"],
                            }
                        ],
                    },
                ],
            }
        ]
    )
    resolver = RuleResolver(config)

    drone = resolver.resolve(_asset(1, "City_Drone.mp4"))
    interview = resolver.resolve(_asset(2, "int_ceo.mov"))
    other = resolver.resolve(_asset(3, "broll.mp4"))
    single_miss = resolver.resolve(_asset(4, "logo.png"))

    assert drone.subfolder == ["01_Footage", "01_Drone"]
    assert drone.subcategory_id == "drone"
    assert interview.subfolder == ["01_Footage", "02_Interview"]
    assert other.subfolder == ["01_Footage", others_folder_name(2)]
    assert others_folder_name(2) == "03_Others"
    assert single_miss.subfolder == ["02_Images"]


def test_filtered_category_claims_matches_before_owner() -> None:
    config = _config(
        [
            {"id": "source", "name": "Source", "categories": [{"type": "Footage"}]},
            {
                "id": "aerial",
                "name": "Aerial",
                "categories": [
                    {"type": "Footage", "filters": [{"type": "keyword", "value": "drone"}]}
                ],
            },
        ]
    )
    resolver = RuleResolver(config)

    assert resolver.resolve(_asset(1, "drone_01.mp4")).folder_id == "aerial"
    assert resolver.resolve(_asset(2, "street.mp4")).folder_id == "source"


def test_duplicate_unfiltered_type_last_folder_wins() -> None:
    config = _config(
        [
            {"id": "a", "name": "A", "categories": [{"type": "Audio"}]},
            {"id": "b", "name": "B", "categories": [{"type": "Audio"}]},
        ]
    )
    resolver = RuleResolver(config)

    assert resolver.resolve(_asset(1, "music.mp3")).folder_id == "b"
    codes = [(warning.code, warning.folder_id) for warning in resolver.diagnostics()]
    assert ("shadowed_category", "a") in codes


def test_skip_organization_folders_contribute_no_categories() -> None:
    config = _config(
        [
            {"id": "a", "name": "A", "categories": [{"type": "Audio"}]},
            {
                "id": "b",
                "name": "B",
                "skipOrganization": True,
                "categories": [{"type": "Audio"}],
            },
        ]
    )

    assert RuleResolver(config).resolve(_asset(1, "music.mp3")).folder_id == "a"


def test_invalid_category_type_is_ignored_and_reported() -> None:
    config = _config([{"id": "a", "name": "A", "categories": [{"type": "Video"}]}])
    resolver = RuleResolver(config)

    assert resolver.resolve(_asset(1, "clip.mp4")).reason == "unmatched"
    assert [warning.code for warning in resolver.diagnostics()] == ["invalid_category_type"]


def test_exceptions_override_last() -> None:
    config = _config(
        [
            {"id": "source", "name": "Source", "categories": [{"type": "Footage"}]},
            {"id": "temp", "name": "Temp", "categories": []},
        ],
        exceptions=[
            {"id": "x1", "type": "nameContains", "pattern": "_tmp", "targetFolderId": "temp"},
            "_keep",
        ],
    )
    resolver = RuleResolver(config)

    moved = resolver.resolve(_asset(1, "shot_tmp.mp4"))
    kept = resolver.resolve(_asset(2, "shot_keep.mp4"))

    assert (moved.reason, moved.folder_id, moved.subfolder) == ("exception", "temp", [])
    assert moved.exception_id == "x1"
    assert (kept.reason, kept.folder_id) == ("exception", None)


def test_diagnostics_flag_duplicates_and_missing_filters() -> None:
    config = _config(
        [
            {
                "id": "source",
                "name": "Source",
                "categories": [
                    {"type": "Footage", "keywords": ["bg"]},
                    {
                        "type": "Images",
                        "keywords": ["BG"],
                        "subcategories": [
                            {"id": "s1", "name": "Empty", "order": 0},
                            {"id": "s2", "name": "Rest", "order": 1, "filterType": "all"},
                        ],
                    },
                ],
            }
        ]
    )

    warnings = RuleResolver(config).diagnostics()
    codes = sorted({warning.code for warning in warnings})
    missing = [warning.subcategory_id for warning in warnings if warning.code == "filter_required"]

    assert codes == ["duplicate_keyword", "filter_required"]
    assert missing == ["s1", "s2"]


def test_default_config_has_no_warnings() -> None:
    assert RuleResolver(default_config()).diagnostics() == []


def test_resolution_does_not_mutate_config() -> None:
    config = default_config()
    before = config.model_dump()

    RuleResolver(config).resolve_many([_asset(1, "clip.mp4"), _asset(2, "logo.png")])

    assert config.model_dump() == before
