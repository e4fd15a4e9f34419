"""
Ad Details Page Object

The page showing a single ad, where the contact phone number can be revealed.
"""
from __future__ import annotations

from playwright.async_api import Page, expect

from vivastreet_e2e.pages.base import PageActions
from vivastreet_e2e.steps import step


class AdDetailsPage(PageActions):
    def __init__(self, page: Page) -> None:
        super().__init__(page)
        self.phone_button = page.locator('[data-automation="spnDetailsContactPhoneButtonDesktopLabel_right"]')

    async def navigate(self) -> None:
        async with step("Navigate to ad details page"):
            raise RuntimeError(
                "Cannot navigate directly to ad details page. "
                "Use SearchResultsPage.click_search_result() instead."
            )

    async def click_phone_number(self) -> None:
        async with step("Click phone number button"):
            await self.phone_button.click()

    async def verify_phone_number_revealed(self) -> None:
        async with step("Verify phone number is revealed"):
            expected_phone_number = await self.phone_button.get_attribute("data-phone-number")
            if not expected_phone_number:
                raise AssertionError("Phone number data attribute not found on button")
            await expect(self.phone_button).to_have_text(expected_phone_number)
