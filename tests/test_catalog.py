"""
Reference catalog tests.

Tests:
1-6.   Snapshot loading, immutability, replace()
7-12.  Internal bearing enforcement and admin validation
13-16. Pulley filtering and selection
17-19. Hub connections and bushings
"""

import json

import pytest
from pydantic import ValidationError

from conveyor_core.catalog.hub_connections import (
    default_hub_connection, get_bushing_system_option, get_hub_connection_option,
    is_not_ideal_for_drive, requires_bushing_system, visible_bushing_systems,
)
from conveyor_core.catalog.pulleys import (
    PulleyFilterCriteria, enforce_internal_bearing_rules, filter_pulleys, get_compatible_pulleys,
    get_effective_diameter, internal_bearing_violations, is_station_compatible, select_best_pulley,
    validate_pulley_catalog_item,
)
from conveyor_core.catalog.snapshot import load_reference_catalog, snapshot_from_dict
from conveyor_core.errors import CatalogShapeError
from conveyor_core.models import BushingSystem, HubConnectionType, PulleyPosition, PulleyStation
from conveyor_core.schemas import CleatCenterFactor, PulleyCatalogItem


# ============================================================
# Snapshot
# ============================================================

def test_bundled_catalog_loads(snapshot):
    assert snapshot.version == "2026.01-seed"
    assert len(snapshot.pulley_models) == 5
    assert len(snapshot.pulley_catalog) == 5
    assert len(snapshot.cleat_center_factors) == 4
    assert snapshot.get_pulley_model("PCI_DRUM_4IN").shell_od_in == 4.0
    assert snapshot.get_pulley_model("NOPE") is None


def test_snapshot_is_frozen(snapshot):
    with pytest.raises(ValidationError):
        snapshot.version = "edited"


def test_replace_builds_a_new_snapshot(snapshot):
    """A refresh never touches the snapshot an evaluation may be reading."""
    factors = [CleatCenterFactor(material_family="PVC_HOT_WELDED", centers_in=12, factor=1.1)]
    refreshed = snapshot.replace(cleat_center_factors=factors)
    assert len(refreshed.cleat_center_factors) == 1
    assert len(snapshot.cleat_center_factors) == 4
    assert refreshed.version != snapshot.version
    assert refreshed.version == refreshed.content_hash()[:12]
    assert snapshot.replace(version="v2").version == "v2"
    with pytest.raises(CatalogShapeError):
        snapshot.replace(belts=[])


def test_content_hash_ignores_version(snapshot):
    assert snapshot.content_hash() == snapshot.model_copy(update={"version": "other"}).content_hash()


def test_malformed_catalog_rejected(tmp_path):
    with pytest.raises(CatalogShapeError):
        snapshot_from_dict([])
    with pytest.raises(CatalogShapeError):
        snapshot_from_dict({"pulley_models": [{"model_key": "X"}]})
    bad = tmp_path / "catalog.json"
    bad.write_text("{not json")
    with pytest.raises(CatalogShapeError):
        load_reference_catalog(str(bad))


def test_load_from_path(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"version": "custom", "cleat_center_factors": [
        {"material_family": "PU", "centers_in": 12, "factor": 1.0},
    ]}))
    loaded = load_reference_catalog(str(path))
    assert loaded.version == "custom"
    assert loaded.pulley_models == ()


# ============================================================
# Internal bearings
# ============================================================

def test_internal_bearing_head_drive_rejected():
    result = validate_pulley_catalog_item({
        "catalog_key": "IB_4", "display_name": "Internal bearing 4", "diameter_in": 4.0,
        "face_width_max_in": 18.0, "shaft_arrangement": "INTERNAL_BEARINGS",
        "allow_head_drive": True, "allow_tail": True,
    })
    assert not result["is_valid"]
    assert "Internal bearing pulleys cannot be used as head/drive" in result["errors"]


def test_internal_bearing_violations():
    assert internal_bearing_violations("INTERNAL_BEARINGS", {"allow_tail": True}) == []
    assert internal_bearing_violations("THROUGH_SHAFT_EXTERNAL_BEARINGS", {"allow_head_drive": True}) == []
    errors = internal_bearing_violations("INTERNAL_BEARINGS", {"allow_snub": True, "allow_tail": False})
    assert len(errors) == 2


def test_snapshot_forces_tail_only_flags():
    """A stored row that slipped past validation is corrected on load, never trusted."""
    snapshot = snapshot_from_dict({"pulley_catalog": [{
        "catalog_key": "BAD_IB", "display_name": "Bad", "diameter_in": 4.0, "face_width_max_in": 18.0,
        "shaft_arrangement": "INTERNAL_BEARINGS", "allow_head_drive": True, "allow_bend": True,
    }]})
    item = snapshot.get_pulley_item("BAD_IB")
    assert not item.allow_head_drive
    assert not item.allow_bend
    assert item.allow_tail


def test_station_compatibility_ignores_bad_flags():
    item = PulleyCatalogItem(
        catalog_key="IB", display_name="IB", diameter_in=4.0, face_width_max_in=18.0,
        shaft_arrangement="INTERNAL_BEARINGS", allow_head_drive=True,
    )
    assert not is_station_compatible(item, PulleyStation.HEAD_DRIVE)
    assert is_station_compatible(item, PulleyStation.TAIL)
    assert enforce_internal_bearing_rules(item).allow_tail


def test_admin_validation_field_errors():
    result = validate_pulley_catalog_item({
        "catalog_key": " ", "display_name": "X", "diameter_in": 0, "face_width_max_in": 10.0,
        "face_width_min_in": 12.0, "is_lagged": True, "crown_height_in": -0.1,
    })
    assert result["errors"] == [
        "Catalog key is required",
        "Diameter must be positive",
        "Face width min cannot exceed max",
        "Lagging thickness required when lagged",
        "Crown height must be non-negative",
    ]


def test_admin_validation_form_strings():
    """Numeric strings are accepted; anything else is an error, never a TypeError."""
    ok = validate_pulley_catalog_item({
        "catalog_key": "DRUM_4", "display_name": "Drum 4", "diameter_in": "4.0",
        "face_width_max_in": "18", "face_width_min_in": "6", "crown_height_in": "0.06",
    })
    assert ok == {"is_valid": True, "errors": []}

    bad = validate_pulley_catalog_item({
        "catalog_key": "DRUM_4", "display_name": "Drum 4", "diameter_in": "four",
        "face_width_max_in": "18", "is_lagged": True, "lagging_thickness_in": "thick",
        "crown_height_in": "-0.1",
    })
    assert bad["errors"] == [
        "Diameter must be a number",
        "Lagging thickness must be a number",
        "Crown height must be non-negative",
    ]


# ============================================================
# Filtering / selection
# ============================================================

def test_select_preferred_smallest(snapshot):
    criteria = PulleyFilterCriteria(station=PulleyStation.HEAD_DRIVE, face_width_required_in=18.0)
    best = select_best_pulley(snapshot.active_pulley_items(), criteria)
    assert best.pulley.catalog_key == "STD_DRUM_4_STEEL"
    keys = [p.catalog_key for p in get_compatible_pulleys(snapshot.active_pulley_items(), criteria)]
    assert "WING_TAIL_4" not in keys
    assert "INTERNAL_BEARING_TAIL_4" not in keys


def test_filter_sorts_errors_last_then_preferred(snapshot):
    """Min diameter 4.5": preferred 6" beats the non-preferred 4.5" lagged drum."""
    criteria = PulleyFilterCriteria(
        station=PulleyStation.HEAD_DRIVE, face_width_required_in=18.0, min_diameter_in=4.5,
    )
    results = filter_pulleys(snapshot.active_pulley_items(), criteria)
    assert [r.pulley.catalog_key for r in results[:2]] == ["STD_DRUM_6_STEEL", "LAGGED_DRUM_4_RUBBER"]
    assert results[-1].has_errors
    internal = next(r for r in results if r.pulley.catalog_key == "INTERNAL_BEARING_TAIL_4")
    assert {i.code for i in internal.issues} >= {"STATION_INCOMPATIBLE", "INTERNAL_BEARINGS_TAIL_ONLY"}


def test_face_width_and_warnings(snapshot):
    criteria = PulleyFilterCriteria(
        station=PulleyStation.HEAD_DRIVE, face_width_required_in=30.0, require_lagged=True,
        belt_speed_fpm=900.0,
    )
    best = select_best_pulley(snapshot.active_pulley_items(), criteria)
    assert best.pulley.catalog_key == "STD_DRUM_6_STEEL"
    codes = {i.code for i in best.issues}
    assert codes == {"LAGGING_RECOMMENDED", "SPEED_LIMIT_EXCEEDED"}


def test_effective_diameter_and_exact_filters(snapshot):
    lagged = snapshot.get_pulley_item("LAGGED_DRUM_4_RUBBER")
    assert get_effective_diameter(lagged) == 4.5
    criteria = PulleyFilterCriteria(station=PulleyStation.TAIL, face_width_required_in=12.0, diameter_in=4.5)
    assert [r.pulley.catalog_key for r in filter_pulleys(snapshot.active_pulley_items(), criteria)] == [
        "LAGGED_DRUM_4_RUBBER",
    ]
    nothing = PulleyFilterCriteria(station=PulleyStation.SNUB, face_width_required_in=60.0)
    assert select_best_pulley(snapshot.active_pulley_items(), nothing) is None


# ============================================================
# Hub connections
# ============================================================

def test_hub_options():
    assert get_hub_connection_option("DEAD_SHAFT_ASSEMBLY").label == "Dead Shaft Assembly"
    assert get_hub_connection_option("NOT_A_HUB") is None
    assert is_not_ideal_for_drive(HubConnectionType.ER_INTERNAL_BEARINGS)
    assert not is_not_ideal_for_drive(HubConnectionType.KEYLESS_LOCKING_DEVICES)
    assert requires_bushing_system(HubConnectionType.WELD_ON_HUB_COMPRESSION_BUSHINGS)


def test_bushing_options():
    visible = [b.key for b in visible_bushing_systems()]
    assert BushingSystem.HE not in visible
    assert visible[0] == BushingSystem.XT
    assert "two-hub" in get_bushing_system_option("TAPER_LOCK").warning
    assert get_bushing_system_option("XT").warning is None


def test_default_hub_connections():
    assert default_hub_connection(PulleyPosition.DRIVE) == HubConnectionType.KEYED_HUB_SET_SCREW
    assert default_hub_connection(PulleyPosition.TAIL) == HubConnectionType.ER_INTERNAL_BEARINGS
