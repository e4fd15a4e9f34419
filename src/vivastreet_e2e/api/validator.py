"""
Search Validator Helper

Checks that a search request carried the parameters a UI-level search
should produce. Two entry points share one comparison:

- validate_response: a response from SearchAPIHelper.search (status first)
- validate_intercepted_request: a request captured while driving the UI
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from playwright.async_api import APIResponse, Page

from vivastreet_e2e.api.codec import parse_search_api_url
from vivastreet_e2e.api.errors import ParameterMismatchError, ResponseNotOkError
from vivastreet_e2e.api.interception import InterceptionState, SearchInterceptor
from vivastreet_e2e.api.mappings import MappingRegistry
from vivastreet_e2e.api.search_api import SearchAPIHelper
from vivastreet_e2e.api.translator import untranslated_fields
from vivastreet_e2e.api.types import SearchAPIParams, SearchParameters, ValidationResult
from vivastreet_e2e.steps import step

logger = logging.getLogger(__name__)

# summary, country and country_id are constants, not test signal
COMPARED_FIELDS: Tuple[str, ...] = ("cat_id", "geo_id", "meta_code")


def _show(value: object) -> str:
    return "(absent)" if value is None else str(value)


def compare_params(
    actual: SearchAPIParams,
    expected: SearchAPIParams,
    ignored: Iterable[str] = (),
) -> ValidationResult:
    """Compare actual vs expected parameters.

    A field is only checked when the expected set defines it, so an
    expectation with just a category says nothing about the location.
    """
    differences: List[str] = []
    for key in COMPARED_FIELDS:
        expected_value = getattr(expected, key)
        if expected_value is None:
            continue
        actual_value = getattr(actual, key)
        if actual_value != expected_value:
            differences.append(f"{key}: expected {_show(expected_value)}, got {_show(actual_value)}")

    return ValidationResult(
        matched=not differences,
        actual=actual,
        expected=expected,
        differences=tuple(differences) if differences else None,
        ignored=tuple(ignored),
    )


class SearchValidatorHelper:
    """Validates API responses and intercepted UI requests."""

    def __init__(
        self,
        page: Page,
        registry: Optional[MappingRegistry] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        self.page = page
        self.search_api = SearchAPIHelper(page, registry=registry, endpoint=endpoint)
        self.interceptor = SearchInterceptor(page, endpoint=endpoint)

    async def _validate_url(self, url: str, expected: SearchParameters, source: str) -> ValidationResult:
        actual = parse_search_api_url(url)
        expected_api_params = await self.search_api.get_api_params(expected)
        result = compare_params(actual, expected_api_params, ignored=untranslated_fields(expected))
        if not result.matched:
            logger.error("%s parameters mismatch for %s: %s", source, url, "; ".join(result.differences or ()))
            raise ParameterMismatchError(result, source=source)
        return result

    async def validate_response(self, response: APIResponse, expected: SearchParameters) -> ValidationResult:
        """Validate that an API response was requested with the expected parameters.

        Raises:
            ResponseNotOkError: If the backend did not answer with a 2xx status
            ParameterMismatchError: If a constrained parameter differs
        """
        async with step(
            "Validate API response matches: category={category}, location={location}",
            category=expected.category,
            location=expected.location,
        ):
            if not response.ok:
                raise ResponseNotOkError(response.status, response.status_text, response.url)
            return await self._validate_url(response.url, expected, source="API request")

    async def start_interception(self) -> None:
        """Start intercepting search API requests.

        Call before the UI action, then validate with validate_intercepted_request().
        """
        async with step("Start intercepting search API requests"):
            await self.interceptor.start()

    async def stop_interception(self) -> None:
        async with step("Stop intercepting search API requests"):
            await self.interceptor.stop()

    async def wait_for_intercepted_request(self, timeout: Optional[float] = None) -> str:
        async with step("Wait for intercepted search API request"):
            return await self.interceptor.wait_for_request(timeout)

    async def validate_intercepted_request(
        self,
        expected: SearchParameters,
        timeout: Optional[float] = None,
    ) -> ValidationResult:
        """Validate the request the UI issued since start_interception().

        With a `timeout`, waits up to that many seconds for the request first.
        The session is back to idle afterwards, whether validation passed or
        not, so a later step cannot validate the same request again.

        Raises:
            NoInterceptedRequestError: If no request was captured
            InterceptionTimeoutError: If waiting for the request timed out
            ParameterMismatchError: If a constrained parameter differs
        """
        async with step(
            "Validate intercepted request matches: category={category}, location={location}",
            category=expected.category,
            location=expected.location,
        ):
            try:
                if timeout is not None and self.interceptor.state is InterceptionState.ARMED:
                    await self.interceptor.wait_for_request(timeout)
                url = await self.interceptor.consume()
            except Exception:
                await self.interceptor.stop()
                raise
            return await self._validate_url(url, expected, source="Intercepted API request")
