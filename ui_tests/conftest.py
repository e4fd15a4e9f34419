import sys
import threading
import time
from pathlib import Path

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vivastreet_e2e.api import SearchAPIHelper, SearchValidatorHelper
from vivastreet_e2e.config import UiTargetProfile, settings
from vivastreet_e2e.pages import AdDetailsPage, HomePage, LoginPage, SearchResultsPage
from vivastreet_e2e.pages.base import handle_cookie_consent
from vivastreet_e2e.playwright_client import PlaywrightClient


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (item.rep_setup / rep_call) for fixtures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


async def _launch(client: PlaywrightClient) -> PlaywrightClient:
    """Connect `client`, skipping the test when no browser can be launched."""
    try:
        await client.connect()
    except PlaywrightError as exc:
        await client.close()
        pytest.skip(f"Playwright browser not available ({settings.browser_type}): {exc}")
    return client


@pytest_asyncio.fixture()
async def playwright_client():
    """Create a Playwright client for the active target profile."""
    client = await _launch(PlaywrightClient(headless=settings.playwright_headless))
    try:
        yield client
    finally:
        await client.close()


def _profile_id(profile: UiTargetProfile) -> str:
    return profile.name


@pytest.fixture(params=settings.profiles(), ids=_profile_id)
def active_profile(request):
    """Activate each configured UI target profile for the test run."""
    profile: UiTargetProfile = request.param
    with settings.use_profile(profile):
        yield profile


# ============================================================================
# Live site fixtures
# ============================================================================

def _screenshot_path(nodeid: str) -> Path:
    safe = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in nodeid)
    directory = Path(settings.screenshot_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return directory / f"{safe}.png"


@pytest_asyncio.fixture()
async def site_page(request, playwright_client):
    """Homepage of the active target with the cookie banner dismissed.

    Saves a full-page screenshot to SCREENSHOT_DIR when the test fails.
    """
    page = playwright_client.page
    await page.goto("/")
    await handle_cookie_consent(page)

    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        path = _screenshot_path(request.node.nodeid)
        try:
            await page.screenshot(path=str(path), full_page=True)
            print(f"[SCREENSHOT] Saved failure screenshot: {path}")
        except PlaywrightError as exc:
            print(f"[SCREENSHOT] Could not capture failure screenshot: {exc}")


@pytest.fixture()
def home_page(site_page):
    return HomePage(site_page)


@pytest.fixture()
def search_results_page(site_page):
    return SearchResultsPage(site_page)


@pytest.fixture()
def ad_details_page(site_page):
    return AdDetailsPage(site_page)


@pytest.fixture()
def login_page(site_page):
    return LoginPage(site_page)


@pytest.fixture()
def search_api(site_page):
    return SearchAPIHelper(site_page)


@pytest.fixture()
def search_validator(site_page):
    return SearchValidatorHelper(site_page)


# ============================================================================
# Mock search site fixtures
# ============================================================================

@pytest.fixture(scope='function')
def mock_search_site():
    """Fixture that provides a running mock Vivastreet site on a free port."""
    from werkzeug.serving import make_server
    from ui_tests.mock_search_site import SEARCH_PATH, create_mock_site_app, reset_mock_state

    class MockServer:
        def __init__(self, host='127.0.0.1', port=0):
            self.host = host
            self.port = port
            self.app = create_mock_site_app()
            self.server = None
            self.thread = None

        def start(self):
            self.server = make_server(self.host, self.port, self.app, threaded=True)
            self.port = self.server.server_port
            self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
            self.thread.start()
            time.sleep(0.2)  # Give server time to start

        def stop(self):
            if self.server:
                self.server.shutdown()
                if self.thread:
                    self.thread.join(timeout=5)

        @property
        def url(self):
            return f"http://{self.host}:{self.port}"

        @property
        def search_api_url(self):
            return f"{self.url}{SEARCH_PATH}"

        @property
        def profile(self):
            return UiTargetProfile(name="mock", base_url=self.url, search_api_url=self.search_api_url)

    reset_mock_state()
    server = MockServer()
    server.start()

    yield server

    server.stop()
    reset_mock_state()


@pytest.fixture()
def mock_site_profile(mock_search_site):
    """Point settings (base URL, search endpoint, Referer) at the mock site."""
    with settings.use_profile(mock_search_site.profile) as profile:
        yield profile


@pytest_asyncio.fixture()
async def mock_site_client(mock_site_profile):
    """Playwright client whose default context targets the mock site."""
    client = await _launch(PlaywrightClient(base_url=mock_site_profile.base_url))
    try:
        yield client
    finally:
        await client.close()
