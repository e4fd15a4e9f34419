"""
Direct Playwright Client
========================

Launches Playwright in-process with the harness settings applied to the
default context: base URL, viewport, action/navigation timeouts and the
`data-automation` test-id attribute used by `get_by_test_id`.

Usage:
    from vivastreet_e2e.playwright_client import PlaywrightClient

    async with PlaywrightClient() as client:
        await client.page.goto("/")
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright, expect

from vivastreet_e2e.config import settings

logger = logging.getLogger(__name__)


class PlaywrightClient:
    """
    Direct Playwright client with full API access.

    Example:
        async with PlaywrightClient(browser_type="firefox") as client:
            page = await client.new_page()
            await page.goto("/")
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        base_url: Optional[str] = None,
        action_timeout: Optional[int] = None,
        navigation_timeout: Optional[int] = None,
    ):
        """
        Initialize Playwright client.

        Args:
            browser_type: Browser to use (chromium, firefox, webkit); default from settings
            headless: Run in headless mode; default from settings
            base_url: Base URL for relative navigation; default from the active profile
            action_timeout: Default action timeout in milliseconds
            navigation_timeout: Default navigation timeout in milliseconds
        """
        self.browser_type = browser_type or settings.browser_type
        self.headless = settings.playwright_headless if headless is None else headless
        self.base_url = base_url or settings.base_url
        self.action_timeout = action_timeout or settings.action_timeout_ms
        self.navigation_timeout = navigation_timeout or settings.navigation_timeout_ms

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> "PlaywrightClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def connect(self) -> None:
        """Launch the browser and open the default context and page."""
        self._playwright = await async_playwright().start()
        self._playwright.selectors.set_test_id_attribute(settings.test_id_attribute)
        expect.set_options(timeout=settings.expect_timeout_ms)

        if self.browser_type == "firefox":
            launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            launcher = self._playwright.webkit
        else:
            launcher = self._playwright.chromium
        self._browser = await launcher.launch(headless=self.headless)
        logger.info("Launched %s (headless=%s) for %s", self.browser_type, self.headless, self.base_url)

        self._context = await self.new_context()
        self._page = await self._context.new_page()

    async def new_context(self, **kwargs: Any) -> BrowserContext:
        """
        Create a browser context with the harness defaults.

        Args:
            **kwargs: Context options overriding the defaults (viewport, base_url, ...)
        """
        if not self._browser:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")

        options: Dict[str, Any] = {"base_url": self.base_url, "viewport": dict(settings.viewport)}
        options.update(kwargs)
        context = await self._browser.new_context(**options)
        context.set_default_timeout(self.action_timeout)
        context.set_default_navigation_timeout(self.navigation_timeout)
        return context

    async def new_page(self) -> Page:
        if not self._context:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")
        return await self._context.new_page()

    async def close(self) -> None:
        """Close all connections and cleanup resources."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("Client not connected")
        return self._browser

    @property
    def context(self) -> BrowserContext:
        if not self._context:
            raise RuntimeError("Client not connected")
        return self._context

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page
