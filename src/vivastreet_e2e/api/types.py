"""Typed contracts for the Vivastreet search API.

Two vocabularies meet here:
- UI level (`SearchParameters`): labels as shown on the page.
- API level (`SearchAPIParams`): query parameters sent to regions_tree.php.

Field names of `SearchAPIParams` are the wire names, and its field order is
the order fields are appended after the defaults when a URL is built.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class SearchParameters:
    """UI-level search. `None` means "do not constrain on this axis"."""

    category: Optional[str] = None  # e.g. "Home Appliances"
    location: Optional[str] = None  # e.g. "London"; "" means no geo filter
    keyword: Optional[str] = None  # e.g. "conditioner"


@dataclass(frozen=True)
class SearchAPIParams:
    """API-level parameters for regions_tree.php."""

    geo_id: Optional[int] = None
    cat_id: Optional[int] = None
    meta_code: Optional[str] = None
    summary: Optional[int] = None
    country: Optional[str] = None
    country_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Defined fields only, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def merged_with(self, overrides: "SearchAPIParams") -> "SearchAPIParams":
        """Field-by-field merge; defined values in `overrides` win."""
        merged = self.to_dict()
        merged.update(overrides.to_dict())
        return SearchAPIParams(**merged)


INTEGER_FIELDS: Tuple[str, ...] = ("geo_id", "cat_id", "summary")
STRING_FIELDS: Tuple[str, ...] = ("meta_code", "country", "country_id")


@dataclass(frozen=True)
class CategoryMapping:
    """UI category label to API parameters."""

    label: str
    cat_id: int
    meta_code: str


@dataclass(frozen=True)
class LocationMapping:
    """UI location label to API parameter."""

    label: str
    geo_id: int


@dataclass(frozen=True)
class ValidationResult:
    matched: bool
    actual: SearchAPIParams
    expected: SearchAPIParams
    differences: Optional[Tuple[str, ...]] = None
    ignored: Tuple[str, ...] = ()
