"""
Search Results Page Object

The results page carries an expanded search form (category dropdown,
location autocomplete, keywords) above the result cards.
"""
from __future__ import annotations

import logging
from typing import Optional

from playwright.async_api import Locator, Page, expect

from vivastreet_e2e.pages.base import PageActions
from vivastreet_e2e.steps import step

logger = logging.getLogger(__name__)


class SearchResultsPage(PageActions):
    def __init__(self, page: Page) -> None:
        super().__init__(page)
        self.last_clicked_ad_id: Optional[str] = None

        self.category_dropdown = page.get_by_label("Category")
        self.location_input = page.locator('[data-automation="filterGeoSearchField"]')
        self.results_summary_container = page.locator('[data-automation="divResultsSummaryContainer"]')
        self.keyword_input = page.locator("#vs_search_keywords")
        self.search_button = page.locator('[data-automation="filterSearchButton"]')
        self.no_results_container = page.locator(".vs-search-no-results")

    def search_result_card(self, result_number: int) -> Locator:
        return self.page.locator(f"li.classified.row{result_number}")

    async def navigate(self) -> None:
        # Normally reached by searching from the home page
        async with step("Navigate to search results page"):
            await self.page.goto("/search")
            await self.wait_until_ready()

    async def select_category(self, category: str) -> None:
        async with step("Select category: {category}", category=category):
            await self.category_dropdown.select_option(label=category)

    async def enter_location(self, location: str) -> None:
        async with step("Enter location: {location}", location=location):
            await self.location_input.clear()
            await self.location_input.fill(location)

    async def enter_keywords(self, keywords: str) -> None:
        async with step("Enter keywords: {keywords}", keywords=keywords):
            await self.keyword_input.clear()
            await self.keyword_input.fill(keywords)

    async def click_search_button(self) -> None:
        async with step("Click search button"):
            await self.search_button.click()
            await self.wait_until_ready()

    async def verify_category(self, expected_category: str) -> None:
        async with step("Verify category is: {expected_category}", expected_category=expected_category):
            selected_option = self.category_dropdown.locator("option:checked")
            await expect(selected_option).to_have_text(expected_category.strip(), ignore_case=False)

    async def verify_location(self, expected_location: str) -> None:
        async with step("Verify location is: {expected_location}", expected_location=expected_location):
            await expect(self.location_input).to_have_value(expected_location)

    async def verify_search_filters(self, category: str, location: str) -> None:
        async with step("Verify search filters match selected values"):
            await self.verify_category(category)
            await self.verify_location(location)

    async def get_results_count(self) -> int:
        async with step("Get results count"):
            count_text = await self.results_summary_container.locator("b").first.text_content()
            digits = "".join(ch for ch in (count_text or "") if ch.isdigit())
            return int(digits) if digits else 0

    async def verify_has_results(self) -> None:
        async with step("Verify search has results"):
            count = await self.get_results_count()
            assert count > 0, f"Expected search results, results summary shows {count}"

    async def verify_no_results(self) -> None:
        async with step("Verify no results found"):
            await expect(self.no_results_container).to_be_visible()
            await expect(self.no_results_container.locator(".no-results-header")).to_have_text("No Results Found")

    async def verify_results_count(self, expected_count: int) -> None:
        async with step("Verify results count is: {expected_count}", expected_count=expected_count):
            actual_count = await self.get_results_count()
            assert actual_count == expected_count, f"Expected {expected_count} results, got {actual_count}"

    async def click_search_result(self, result_number: int) -> None:
        """Open result card N and remember its ad id for verify_opened_ad()."""
        async with step("Click search result number {result_number}", result_number=result_number):
            clad = self.search_result_card(result_number).locator('[data-automation="searchResultClad"]')
            self.last_clicked_ad_id = await clad.get_attribute("data-clad-id")
            logger.info("Opening search result %d (ad id %s)", result_number, self.last_clicked_ad_id)

            ad_link = clad.locator("a.clad__ad_link")
            await expect(ad_link).to_be_visible()

            current_url = self.page.url
            await ad_link.click()
            await self.page.wait_for_url(lambda url: url != current_url, timeout=10000)
            await self.page.wait_for_load_state("domcontentloaded")

    async def verify_opened_ad(self) -> None:
        async with step("Verify opened ad matches clicked result"):
            if not self.last_clicked_ad_id:
                raise RuntimeError("No ad was clicked. Call click_search_result() first.")

            current_url = self.page.url
            expected_ending = f"/{self.last_clicked_ad_id}"
            assert current_url.endswith(expected_ending), (
                f'Expected URL to end with "{expected_ending}" but got "{current_url}"'
            )
            await expect(self.page.locator(f'[data-clad-id="{self.last_clicked_ad_id}"]')).to_be_visible()
