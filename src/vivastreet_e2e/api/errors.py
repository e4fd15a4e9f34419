"""Error taxonomy of the search API validation helpers.

Every error is terminal for the calling test step and nothing here is
retried. Messages are written for a person reading a failed test report:
each one says what was expected, what was observed and, where it applies,
how to fix it.
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vivastreet_e2e.api.types import ValidationResult


class SearchAPIError(Exception):
    """Base class for search API helper failures."""
    pass


class MappingDefinitionError(SearchAPIError, ValueError):
    """A mapping table exists but one of its entries is malformed."""
    pass


_FIELDS_BY_KIND = {
    "category": "cat_id and meta_code parameters",
    "location": "geo_id parameter",
}


class MappingNotFoundError(SearchAPIError, LookupError):
    """A UI label has no backend mapping. Fixed only by adding the mapping."""

    def __init__(self, kind: str, label: str, mappings_file: str) -> None:
        self.kind = kind
        self.label = label
        self.mappings_file = mappings_file
        super().__init__(
            f"{kind.capitalize()} mapping not found for: \"{label}\".\n"
            f"Add mapping to {mappings_file}\n\n"
            f"To find the mapping:\n"
            f"1. Open browser DevTools -> Network tab\n"
            f"2. Select \"{label}\" in UI\n"
            f"3. Observe request to regions_tree.php\n"
            f"4. Record {_FIELDS_BY_KIND.get(kind, 'parameters')}"
        )


class NoInterceptedRequestError(SearchAPIError):
    """Validation of an intercepted request was attempted with nothing captured."""
    pass


class InterceptionTimeoutError(SearchAPIError, TimeoutError):
    """No matching request was observed within the allowed time."""

    def __init__(self, endpoint: str, timeout: float) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        super().__init__(
            f"No request to {endpoint} was intercepted within {timeout:g}s. "
            f"Check that the UI action actually triggers a search request."
        )


class ResponseNotOkError(SearchAPIError, AssertionError):
    """The backend rejected the call (non-2xx), as opposed to a parameter mismatch."""

    def __init__(self, status: int, status_text: str, url: str) -> None:
        self.status = status
        self.status_text = status_text
        self.url = url
        super().__init__(
            f"Search API responded with HTTP {status} {status_text}".rstrip()
            + f" for {url}\n"
            f"Expected a 2xx status before validating request parameters."
        )


class ParameterMismatchError(SearchAPIError, AssertionError):
    """Actual request parameters differ from the expected ones."""

    def __init__(self, result: "ValidationResult", source: str = "API request") -> None:
        self.result = result
        self.source = source
        differences = "\n  - ".join(result.differences or ()) or "Unknown differences"
        super().__init__(
            f"{source} parameters do not match expected values:\n"
            f"  - {differences}\n\n"
            f"Actual params: {json.dumps(result.actual.to_dict())}\n"
            f"Expected params: {json.dumps(result.expected.to_dict())}"
            + _ignored_note(result)
        )


def _ignored_note(result: "ValidationResult") -> str:
    if not result.ignored:
        return ""
    return f"\nNot validated (no API parameter): {', '.join(result.ignored)}"
