"""
Search API Helper

Makes direct requests to the Vivastreet search endpoint. The request goes
through the page's APIRequestContext, so it shares cookies and auth state
with the browser. No validation happens here; pass the response to
`SearchValidatorHelper.validate_response` when the test wants to assert.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from playwright.async_api import APIResponse, Page

from vivastreet_e2e.api.codec import SEARCH_API_HEADERS, build_search_api_url
from vivastreet_e2e.api.mappings import MappingRegistry
from vivastreet_e2e.api.translator import translate
from vivastreet_e2e.api.types import SearchAPIParams, SearchParameters
from vivastreet_e2e.config import settings
from vivastreet_e2e.steps import step

logger = logging.getLogger(__name__)


class SearchAPIHelper:
    """Direct search API requests with UI-friendly parameters."""

    def __init__(
        self,
        page: Page,
        registry: Optional[MappingRegistry] = None,
        endpoint: Optional[str] = None,
        referer: Optional[str] = None,
    ) -> None:
        self.page = page
        self.registry = registry
        self._endpoint = endpoint
        self._referer = referer

    @property
    def endpoint(self) -> str:
        return self._endpoint or settings.search_api_url

    @property
    def headers(self) -> Dict[str, str]:
        """Headers emulating the site's own AJAX call."""
        return {"Referer": self._referer or settings.referer, **SEARCH_API_HEADERS}

    async def search(self, params: SearchParameters) -> APIResponse:
        """Make a search API request with friendly parameters.

        Args:
            params: Search parameters with UI-friendly labels

        Returns:
            The raw API response
        """
        async with step(
            "Search API request: category={category}, location={location}, keyword={keyword}",
            category=params.category,
            location=params.location,
            keyword=params.keyword,
        ):
            url = build_search_api_url(translate(params, self.registry), endpoint=self.endpoint)
            logger.debug("GET %s", url)
            response = await self.page.request.get(
                url,
                headers=self.headers,
                timeout=settings.search_api_timeout_ms,
            )
            logger.info("Search API responded %s for %s", response.status, url)
            return response

    async def get_api_params(self, params: SearchParameters) -> SearchAPIParams:
        """Mapped API parameters without making a request.

        Useful for debugging and validation setup.
        """
        async with step(
            "Get API parameters for: category={category}, location={location}",
            category=params.category,
            location=params.location,
        ):
            return translate(params, self.registry)
