"""
Shared test fixtures: the bundled reference catalog and a clean baseline configuration.
"""

import pytest

from conveyor_core.catalog.snapshot import load_reference_catalog
from conveyor_core.schemas import Configuration


BASELINE = {
    "conveyor_length_cc_in": 96.0,
    "conveyor_incline_deg": 0.0,
    "belt_width_in": 18.0,
    "drive_pulley_diameter_in": 4.0,
    "tail_pulley_diameter_in": 4.0,
    "belt_speed_fpm": 60.0,
    "part_weight_lbs": 5.0,
    "part_length_in": 12.0,
    "part_width_in": 6.0,
    "part_spacing_in": 6.0,
    "belt_catalog_key": "PVC_120",
}


def make_config(**overrides) -> Configuration:
    """Baseline sliderbed that evaluates with no issues, plus overrides."""
    data = dict(BASELINE)
    data.update(overrides)
    return Configuration(**data)


@pytest.fixture(scope="session")
def snapshot():
    return load_reference_catalog()


@pytest.fixture
def baseline():
    return make_config()
