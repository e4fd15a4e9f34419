"""Step naming and reporting tests.

Run with: pytest ui_tests/tests/test_steps.py -v
"""
import logging

import pytest

from vivastreet_e2e.api import SearchParameters
from vivastreet_e2e.steps import StepTrail, format_step_name, run_step, step, use_trail


class TestFormatStepName:
    def test_interpolates_values(self):
        assert format_step_name("Select category: {category}", category="Cars") == "Select category: Cars"

    def test_missing_value_keeps_placeholder(self):
        assert format_step_name("Enter location: {location}") == "Enter location: {location}"

    def test_none_and_numbers(self):
        name = format_step_name("result {n} in {location}", n=1, location=None)
        assert name == "result 1 in None"

    def test_dataclass_values_render_as_json(self):
        name = format_step_name("Search: {params}", params=SearchParameters(category="Cars"))
        assert name == 'Search: {"category": "Cars"}'

    def test_other_braces_untouched(self):
        assert format_step_name("literal {} and {x}", x="y") == "literal {} and y"


@pytest.mark.asyncio
class TestStep:
    async def test_passing_step_is_recorded(self, caplog):
        with use_trail() as trail, caplog.at_level(logging.INFO, logger="vivastreet_e2e.steps"):
            async with step("Click search result number {result_number}", result_number=3) as record:
                pass

        assert trail.names == ["Click search result number 3"]
        assert record.status == "passed"
        assert "STEP PASSED Click search result number 3" in caplog.text

    async def test_failing_step_reraises_original_error(self, caplog):
        error = ValueError("boom")
        with use_trail() as trail, caplog.at_level(logging.ERROR, logger="vivastreet_e2e.steps"):
            with pytest.raises(ValueError) as exc_info:
                async with step("Verify error message: {expected_message}", expected_message="Nope"):
                    raise error

        assert exc_info.value is error
        failed = trail.failed()
        assert [record.name for record in failed] == ["Verify error message: Nope"]
        assert failed[0].error == "ValueError: boom"
        assert "STEP FAILED" in caplog.text

    async def test_nested_steps_keep_order(self):
        with use_trail() as trail:
            async with step("outer"):
                async with step("inner"):
                    pass
        assert trail.names == ["outer", "inner"]

    async def test_no_active_trail(self):
        async with step("unrecorded") as record:
            pass
        assert record.status == "passed"

    async def test_run_step_returns_result(self):
        async def work():
            return 42

        trail = StepTrail()
        with use_trail(trail):
            assert await run_step("Get results count", work) == 42
        assert trail.names == ["Get results count"]
