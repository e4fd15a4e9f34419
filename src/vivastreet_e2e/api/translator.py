"""Translate UI-level search parameters into search API parameters."""
from __future__ import annotations

import logging
import warnings
from typing import Optional, Tuple

from vivastreet_e2e.api.errors import MappingNotFoundError
from vivastreet_e2e.api.mappings import MappingRegistry, load_registry
from vivastreet_e2e.api.types import SearchAPIParams, SearchParameters

logger = logging.getLogger(__name__)


class UntranslatedKeywordWarning(UserWarning):
    """A keyword was given but regions_tree.php has no keyword parameter."""


def untranslated_fields(params: SearchParameters) -> Tuple[str, ...]:
    """UI fields present in `params` that have no API parameter."""
    return ("keyword",) if params.keyword is not None else ()


def translate(params: SearchParameters, registry: Optional[MappingRegistry] = None) -> SearchAPIParams:
    """Convert friendly parameters to API parameters.

    Absent UI fields stay absent; defaults are only added when a URL is built.

    Raises:
        MappingNotFoundError: If a category or location label is not mapped
    """
    registry = registry or load_registry()
    cat_id: Optional[int] = None
    meta_code: Optional[str] = None
    geo_id: Optional[int] = None

    if params.category is not None:
        category = registry.lookup_category(params.category)
        if category is None:
            logger.error("No category mapping for %r", params.category)
            raise MappingNotFoundError("category", params.category, registry.categories_file)
        cat_id = category.cat_id
        meta_code = category.meta_code

    if params.location is not None:
        location = registry.lookup_location(params.location)
        if location is None:
            logger.error("No location mapping for %r", params.location)
            raise MappingNotFoundError("location", params.location, registry.locations_file)
        geo_id = location.geo_id

    if params.keyword is not None:
        message = (
            f"Keyword {params.keyword!r} is not sent to regions_tree.php and will not be validated; "
            f"only category and location are checked"
        )
        logger.warning(message)
        warnings.warn(message, UntranslatedKeywordWarning, stacklevel=2)

    return SearchAPIParams(geo_id=geo_id, cat_id=cat_id, meta_code=meta_code)
