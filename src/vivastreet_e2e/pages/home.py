"""Home page: category / location search form and the My Account link."""
from __future__ import annotations

import re

from playwright.async_api import Page, expect

from vivastreet_e2e.pages.base import PageActions
from vivastreet_e2e.steps import step


class HomePage(PageActions):
    def __init__(self, page: Page) -> None:
        super().__init__(page)
        self.category_dropdown = page.locator('[data-automation="categoryDropdown"]')
        self.geolocation_dropdown = page.locator('[data-automation="searchGeoDropdown"]')
        self.search_button = page.locator('[data-automation="homepageSearchButton"]')
        self.my_account_link = page.locator('[data-automation="lnkHeaderLogin"]')

    async def navigate(self) -> None:
        async with step("Navigate to homepage"):
            await self.page.goto("/")
            await self.wait_until_ready()

    async def verify_loaded(self, url_pattern: str = r"vivastreet\.co\.uk") -> None:
        async with step("Verify homepage has loaded"):
            await expect(self.page).to_have_url(re.compile(url_pattern))
            await expect(self.page.locator("body")).to_be_visible()

    async def select_category(self, category: str) -> None:
        async with step("Select category: {category}", category=category):
            await self.category_dropdown.select_option(label=category)

    async def select_location(self, location: str) -> None:
        async with step("Select location: {location}", location=location):
            await self.geolocation_dropdown.select_option(label=location)

    async def click_search(self) -> None:
        async with step("Click search button"):
            await self.search_button.click()

    async def click_my_account(self) -> None:
        async with step("Click My Account link"):
            await self.my_account_link.click()
