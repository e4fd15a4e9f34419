"""
Capabilities shared by every page object.

Page objects hold a Playwright `Page` and implement `SitePage`. Shared
behaviour lives in the plain functions below; `PageActions` only binds them
to the page handle and carries no other state.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from playwright.async_api import Page

from vivastreet_e2e.pages import consent
from vivastreet_e2e.steps import step


@runtime_checkable
class SitePage(Protocol):
    page: Page

    async def navigate(self) -> None: ...

    async def wait_until_ready(self) -> None: ...

    async def handle_cookie_consent(self) -> consent.ConsentReport: ...

    async def handle_adult_disclaimer(self, action: str) -> consent.ConsentReport: ...


async def wait_for_page_ready(page: Page) -> None:
    await page.wait_for_load_state("domcontentloaded")


async def handle_cookie_consent(page: Page) -> consent.ConsentReport:
    async with step("Handle cookie consent banner"):
        return await consent.handle_cookie_consent(page)


async def handle_adult_disclaimer(page: Page, action: str) -> consent.ConsentReport:
    async with step("Handle adult content disclaimer: {action}", action=action):
        return await consent.handle_adult_disclaimer(page, action)


class PageActions:
    """Default implementations of the non-navigation `SitePage` methods.

    Concrete pages mix this in and add `navigate` plus their own actions.
    """

    page: Page

    def __init__(self, page: Page) -> None:
        self.page = page

    async def wait_until_ready(self) -> None:
        await wait_for_page_ready(self.page)

    async def handle_cookie_consent(self) -> consent.ConsentReport:
        return await handle_cookie_consent(self.page)

    async def handle_adult_disclaimer(self, action: str) -> consent.ConsentReport:
        return await handle_adult_disclaimer(self.page, action)
