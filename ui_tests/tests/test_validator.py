"""Parameter validation tests (response mode and interception mode).

Run with: pytest ui_tests/tests/test_validator.py -v
"""
import pytest

from vivastreet_e2e.api import (
    InterceptionState,
    NoInterceptedRequestError,
    ParameterMismatchError,
    ResponseNotOkError,
    SearchAPIParams,
    SearchParameters,
    SearchValidatorHelper,
    compare_params,
)

from ui_tests.fakes import SEARCH_ENDPOINT, FakeAPIResponse

ACTUAL_URL = (
    f"{SEARCH_ENDPOINT}?summary=1&country=GB&country_id=GB"
    "&geo_id=7&cat_id=44&meta_code=escorts_massages"
)


class TestCompareParams:
    def test_match(self):
        actual = SearchAPIParams(geo_id=7, cat_id=44, meta_code="escorts_massages", summary=1, country="GB")
        expected = SearchAPIParams(geo_id=7, cat_id=44, meta_code="escorts_massages")
        result = compare_params(actual, expected)
        assert result.matched
        assert result.differences is None

    def test_mismatch_lists_each_field(self):
        actual = SearchAPIParams(geo_id=7, cat_id=44, meta_code="escorts_massages")
        expected = SearchAPIParams(geo_id=15, cat_id=93, meta_code="escorts_massages")
        result = compare_params(actual, expected)
        assert not result.matched
        assert result.differences == ("cat_id: expected 93, got 44", "geo_id: expected 15, got 7")

    def test_undefined_expected_field_is_unconstrained(self):
        actual = SearchAPIParams(geo_id=999, cat_id=44, meta_code="escorts_massages")
        assert compare_params(actual, SearchAPIParams(cat_id=44, meta_code="escorts_massages")).matched

    def test_bookkeeping_fields_are_not_compared(self):
        actual = SearchAPIParams(cat_id=44, summary=0, country="IE", country_id="IE")
        expected = SearchAPIParams(cat_id=44, summary=1, country="GB", country_id="GB")
        assert compare_params(actual, expected).matched

    def test_missing_actual_field(self):
        result = compare_params(SearchAPIParams(cat_id=44), SearchAPIParams(geo_id=0))
        assert result.differences == ("geo_id: expected 0, got (absent)",)


@pytest.mark.asyncio
class TestValidateResponse:
    async def test_matching_response(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        result = await validator.validate_response(
            FakeAPIResponse(url=ACTUAL_URL),
            SearchParameters(category="Escorts and Massages", location="London"),
        )
        assert result.matched
        assert result.actual.summary == 1

    async def test_mismatch_names_the_field(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        with pytest.raises(ParameterMismatchError) as exc_info:
            await validator.validate_response(
                FakeAPIResponse(url=ACTUAL_URL),
                SearchParameters(category="Escorts and Massages", location="Manchester"),
            )
        message = str(exc_info.value)
        assert "geo_id: expected 15, got 7" in message
        assert message.startswith("API request parameters do not match expected values:")
        assert '"geo_id": 7' in message
        assert '"geo_id": 15' in message
        assert exc_info.value.result.differences == ("geo_id: expected 15, got 7",)

    async def test_partial_expectation_ignores_location(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        result = await validator.validate_response(
            FakeAPIResponse(url=ACTUAL_URL),
            SearchParameters(category="Escorts and Massages"),
        )
        assert result.matched
        assert result.expected.geo_id is None

    async def test_non_success_status_is_not_a_mismatch(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        with pytest.raises(ResponseNotOkError) as exc_info:
            await validator.validate_response(
                FakeAPIResponse(url=ACTUAL_URL, status=503, status_text="Service Unavailable"),
                SearchParameters(category="Escorts and Massages", location="London"),
            )
        assert exc_info.value.status == 503
        assert "HTTP 503 Service Unavailable" in str(exc_info.value)
        assert not isinstance(exc_info.value, ParameterMismatchError)

    async def test_keyword_reported_as_ignored(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        with pytest.warns(UserWarning):
            result = await validator.validate_response(
                FakeAPIResponse(url=ACTUAL_URL),
                SearchParameters(category="Escorts and Massages", keyword="sofa"),
            )
        assert result.ignored == ("keyword",)


@pytest.mark.asyncio
class TestValidateInterceptedRequest:
    """Interception-mode validation and its session lifecycle."""

    async def test_before_start(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        with pytest.raises(NoInterceptedRequestError, match="start_interception"):
            await validator.validate_intercepted_request(SearchParameters(category="Escorts and Massages"))

    async def test_lifecycle(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        expected = SearchParameters(category="Escorts and Massages", location="London")

        await validator.start_interception()
        routes = await fake_page.fire(ACTUAL_URL)
        assert [route.continued for route in routes] == [True]

        result = await validator.validate_intercepted_request(expected)
        assert result.matched
        assert validator.interceptor.state is InterceptionState.IDLE
        assert fake_page.routes == []

        with pytest.raises(NoInterceptedRequestError):
            await validator.validate_intercepted_request(expected)

    async def test_armed_but_nothing_captured(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        await validator.start_interception()
        with pytest.raises(NoInterceptedRequestError, match="did not issue a matching request"):
            await validator.validate_intercepted_request(SearchParameters(category="Escorts and Massages"))
        assert validator.interceptor.state is InterceptionState.IDLE

    async def test_mismatch_still_consumes_the_capture(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        await validator.start_interception()
        await fake_page.fire(ACTUAL_URL)

        with pytest.raises(ParameterMismatchError, match="Intercepted API request parameters"):
            await validator.validate_intercepted_request(SearchParameters(location="Manchester"))
        assert validator.interceptor.state is InterceptionState.IDLE

    async def test_waits_for_request_with_timeout(self, fake_page, registry):
        import anyio

        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        await validator.start_interception()

        async def issue_later():
            await anyio.sleep(0.05)
            await fake_page.fire(ACTUAL_URL)

        async with anyio.create_task_group() as tg:
            tg.start_soon(issue_later)
            result = await validator.validate_intercepted_request(
                SearchParameters(category="Escorts and Massages", location="London"),
                timeout=2,
            )
        assert result.matched

    async def test_stop_interception(self, fake_page, registry):
        validator = SearchValidatorHelper(fake_page, registry=registry, endpoint=SEARCH_ENDPOINT)
        await validator.start_interception()
        await validator.stop_interception()
        await validator.stop_interception()
        assert validator.interceptor.state is InterceptionState.IDLE
        assert await fake_page.fire(ACTUAL_URL) == []
