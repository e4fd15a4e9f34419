"""
Search API request construction and validation.

Data flow:
    SearchParameters --translate--> expected SearchAPIParams
    request URL      --parse------> actual SearchAPIParams
    compare_params(actual, expected) -> ValidationResult

Usage:
    from vivastreet_e2e.api import SearchAPIHelper, SearchParameters, SearchValidatorHelper

    params = SearchParameters(category="Home Appliances", location="London")
    response = await SearchAPIHelper(page).search(params)
    await SearchValidatorHelper(page).validate_response(response, params)
"""

from .codec import (
    DEFAULT_API_PARAMS,
    SEARCH_API_HEADERS,
    SEARCH_API_URL,
    build_search_api_url,
    merge_with_defaults,
    parse_query_params,
    parse_search_api_url,
    to_search_api_params,
)
from .errors import (
    InterceptionTimeoutError,
    MappingDefinitionError,
    MappingNotFoundError,
    NoInterceptedRequestError,
    ParameterMismatchError,
    ResponseNotOkError,
    SearchAPIError,
)
from .interception import InterceptionState, SearchInterceptor
from .mappings import MappingRegistry, load_registry
from .search_api import SearchAPIHelper
from .translator import UntranslatedKeywordWarning, translate, untranslated_fields
from .types import CategoryMapping, LocationMapping, SearchAPIParams, SearchParameters, ValidationResult
from .validator import COMPARED_FIELDS, SearchValidatorHelper, compare_params

__all__ = [
    'DEFAULT_API_PARAMS',
    'SEARCH_API_HEADERS',
    'SEARCH_API_URL',
    'build_search_api_url',
    'merge_with_defaults',
    'parse_query_params',
    'parse_search_api_url',
    'to_search_api_params',
    'InterceptionTimeoutError',
    'MappingDefinitionError',
    'MappingNotFoundError',
    'NoInterceptedRequestError',
    'ParameterMismatchError',
    'ResponseNotOkError',
    'SearchAPIError',
    'InterceptionState',
    'SearchInterceptor',
    'MappingRegistry',
    'load_registry',
    'SearchAPIHelper',
    'UntranslatedKeywordWarning',
    'translate',
    'untranslated_fields',
    'CategoryMapping',
    'LocationMapping',
    'SearchAPIParams',
    'SearchParameters',
    'ValidationResult',
    'COMPARED_FIELDS',
    'SearchValidatorHelper',
    'compare_params',
]
