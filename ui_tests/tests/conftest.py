import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ui_tests.fakes import FakePage
from vivastreet_e2e.api import MappingRegistry


@pytest.fixture()
def fake_page():
    return FakePage()


@pytest.fixture()
def registry():
    """Registry with the values used throughout the search API examples."""
    return MappingRegistry.from_tables(
        categories={
            "Home Appliances": {"cat_id": 93, "meta_code": "appliances_furniture"},
            "Escorts and Massages": {"cat_id": 44, "meta_code": "escorts_massages"},
        },
        locations={
            "London": {"geo_id": 7},
            "Manchester": {"geo_id": 15},
            "": {"geo_id": 0},
        },
    )
