"""URL building and parsing for the Vivastreet search API.

Low-level utilities with no step reporting. `build_search_api_url` and
`parse_search_api_url` are inverses over the recognized fields:

    parse_search_api_url(build_search_api_url(p)) == merge_with_defaults(p)
"""
from __future__ import annotations

import re
from dataclasses import fields
from typing import Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit

from vivastreet_e2e.api.types import INTEGER_FIELDS, STRING_FIELDS, SearchAPIParams
from vivastreet_e2e.config import DEFAULT_SEARCH_API_URL, settings

# Production endpoint; the configured one (settings.search_api_url) may differ
SEARCH_API_URL = DEFAULT_SEARCH_API_URL

# Included in all requests
DEFAULT_API_PARAMS = SearchAPIParams(summary=1, country="GB", country_id="GB")

SEARCH_API_HEADERS: Dict[str, str] = {
    "Accept": "application/json, text/javascript, */*; q=0.01",
    "X-Requested-With": "XMLHttpRequest",
}

_RECOGNIZED = frozenset(f.name for f in fields(SearchAPIParams))
_INTEGER = re.compile(r"-?[0-9]+")


def merge_with_defaults(params: SearchAPIParams) -> SearchAPIParams:
    return DEFAULT_API_PARAMS.merged_with(params)


def _ordered_query(params: SearchAPIParams) -> Dict[str, str]:
    # Defaults keep their position and take the caller's value; caller-only
    # fields follow in declaration order.
    ordered = DEFAULT_API_PARAMS.to_dict()
    ordered.update(params.to_dict())
    return {key: str(value) for key, value in ordered.items()}


def build_search_api_url(params: SearchAPIParams, endpoint: Optional[str] = None) -> str:
    """Build full URL with query parameters.

    Args:
        params: API parameters to include in URL
        endpoint: Search endpoint, defaults to the configured one

    Returns:
        Complete URL with query string, byte-for-byte stable for equal input
    """
    if endpoint is None:
        endpoint = settings.search_api_url
    return f"{endpoint}?{urlencode(_ordered_query(params))}"


def parse_query_params(url: str) -> Dict[str, str]:
    """Query parameters of `url`; on repeated keys the last value wins.

    Blank values (`country=`) are kept as empty strings.
    """
    return dict(parse_qsl(urlsplit(url).query, keep_blank_values=True))


def _to_int(value: str) -> Optional[int]:
    # Optional minus sign and ASCII digits, nothing else
    return int(value) if _INTEGER.fullmatch(value) else None


def to_search_api_params(raw: Dict[str, str]) -> SearchAPIParams:
    """Typed view of raw query parameters; unrecognized keys are dropped.

    String fields keep blank values. Integer fields that are not plain
    decimal integers are absent.
    """
    values: Dict[str, object] = {}
    for key, value in raw.items():
        if key not in _RECOGNIZED:
            continue
        if key in INTEGER_FIELDS:
            values[key] = _to_int(value)
        elif key in STRING_FIELDS:
            values[key] = value
    return SearchAPIParams(**values)


def parse_search_api_url(url: str) -> SearchAPIParams:
    return to_search_api_params(parse_query_params(url))
