"""Shared configuration for the Vivastreet E2E harness.

Values are resolved in this order: real environment variables, `.env`
(skipped on CI), `.env.defaults`, built-in fallback. See `.env.defaults`
for the full catalogue of keys.

The active target (site origin + search endpoint) can be switched for a
block of code with `settings.use_profile(...)`, which is how the local mock
site is driven by the same page objects and helpers as the real site.
"""
from __future__ import annotations

from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional
from urllib.parse import urljoin, urlsplit

from vivastreet_e2e.env_defaults import get_setting

DEFAULT_BASE_URL = "https://www.vivastreet.co.uk"
DEFAULT_SEARCH_API_URL = "https://search.vivastreet.co.uk/ajax/regions_tree.php"


@dataclass
class UiTargetProfile:
    """Concrete site origin + search endpoint for a test target."""

    name: str
    base_url: str
    search_api_url: str

    @property
    def origin(self) -> str:
        """Scheme and host of the site, with a trailing slash (used as Referer)."""
        parts = urlsplit(self.base_url)
        return f"{parts.scheme}://{parts.netloc}/"


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str


@dataclass(frozen=True)
class InvalidCredentials:
    """Synthetic values, not secrets - no need to configure them."""

    email: str = "invalid-test-user@example.com"
    password: str = "WrongPassword123!"
    email_incorrect_format: str = "not-an-email-address"


def _as_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes"}


def _as_int(key: str, fallback: int) -> int:
    raw = get_setting(key)
    if raw is None or raw == "":
        return fallback
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be an integer, got {raw!r}") from None


class UiTestConfig:
    """Configuration loaded from the environment and `.env` files."""

    def __init__(self) -> None:
        self.playwright_headless: bool = _as_bool(get_setting("PLAYWRIGHT_HEADLESS", "true"))
        self.browser_type: str = (get_setting("PLAYWRIGHT_BROWSER", "chromium") or "chromium").lower()
        if self.browser_type not in ("chromium", "firefox", "webkit"):
            raise RuntimeError(
                f"Invalid PLAYWRIGHT_BROWSER: {self.browser_type}\n"
                f"Must be 'chromium', 'firefox' or 'webkit'"
            )
        self.test_id_attribute: str = get_setting("UI_TEST_ID_ATTRIBUTE", "data-automation") or "data-automation"
        self.viewport: Dict[str, int] = {
            "width": _as_int("UI_VIEWPORT_WIDTH", 1920),
            "height": _as_int("UI_VIEWPORT_HEIGHT", 1080),
        }

        self.action_timeout_ms: int = _as_int("UI_ACTION_TIMEOUT_MS", 15000)
        self.navigation_timeout_ms: int = _as_int("UI_NAVIGATION_TIMEOUT_MS", 30000)
        self.expect_timeout_ms: int = _as_int("UI_EXPECT_TIMEOUT_MS", 10000)
        self.search_api_timeout_ms: int = _as_int("SEARCH_API_TIMEOUT_MS", 30000)
        self.intercept_timeout_s: float = float(_as_int("UI_INTERCEPT_TIMEOUT_S", 10))

        self.live_tests: bool = _as_bool(get_setting("UI_LIVE_TESTS", "0"))
        self.screenshot_dir: str = get_setting("SCREENSHOT_DIR", "test-results/screenshots") or "test-results/screenshots"
        self.mappings_dir: Optional[str] = get_setting("SEARCH_MAPPINGS_DIR") or None

        self.valid_credentials = Credentials(
            email=get_setting("TEST_EMAIL_VALID", "") or "",
            password=get_setting("TEST_PASSWORD_VALID", "") or "",
        )
        self.invalid_credentials = InvalidCredentials()
        if not self.valid_credentials.email or not self.valid_credentials.password:
            print("[CONFIG] WARNING: Valid test credentials not found (TEST_EMAIL_VALID / TEST_PASSWORD_VALID)")
            print("[CONFIG] Create a .env file next to .env.defaults and add your credentials")

        primary = UiTargetProfile(
            name="primary",
            base_url=get_setting("UI_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
            search_api_url=get_setting("SEARCH_API_URL", DEFAULT_SEARCH_API_URL) or DEFAULT_SEARCH_API_URL,
        )
        self._profiles: Dict[str, UiTargetProfile] = {primary.name: primary}
        self._active: UiTargetProfile = primary

    # ---- active profile helpers -------------------------------------------------
    @property
    def profile(self) -> UiTargetProfile:
        return self._active

    @property
    def base_url(self) -> str:
        return self._active.base_url

    @property
    def search_api_url(self) -> str:
        return self._active.search_api_url

    @property
    def referer(self) -> str:
        return self._active.origin

    # ---- profile orchestration --------------------------------------------------
    def profiles(self) -> List[UiTargetProfile]:
        return list(self._profiles.values())

    @contextmanager
    def use_profile(self, profile: UiTargetProfile) -> Iterator[UiTargetProfile]:
        """Temporarily switch the active target.

        A copy is activated so mutations inside the block never leak into
        the registered profile.
        """
        previous = self._active
        self._active = deepcopy(profile)
        try:
            yield self._active
        finally:
            self._active = previous

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str) -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


# Singleton instance - initialized on first import
settings = UiTestConfig()
