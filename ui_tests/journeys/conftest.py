"""
Fixtures for journeys against the live site.

The page fixtures (`home_page`, `search_results_page`, ...) and the failure
screenshot hook come from ui_tests/conftest.py.
"""
import pytest

from vivastreet_e2e.config import settings


@pytest.fixture(autouse=True)
def require_live_site():
    """Skip live journeys unless explicitly enabled."""
    if not settings.live_tests:
        pytest.skip(f"Live journeys disabled - set UI_LIVE_TESTS=1 to run against {settings.base_url}")
    yield
