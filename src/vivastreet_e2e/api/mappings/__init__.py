"""
UI label to search API parameter mappings.

The tables live next to this module as human-edited YAML files:

- categories.yaml: label -> {cat_id, meta_code}
- locations.yaml:  label -> {geo_id}

They are loaded once per process (`load_registry`) and never mutated after
that. A label that is missing from a table is a normal lookup result
(`None`); callers decide whether that is an error. A malformed entry is
reported at load time as `MappingDefinitionError`.

Usage:
    from vivastreet_e2e.api.mappings import load_registry

    registry = load_registry()
    registry.lookup_category("Home Appliances")
    # CategoryMapping(label='Home Appliances', cat_id=93, meta_code='appliances_furniture')
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

import yaml

from vivastreet_e2e.api.errors import MappingDefinitionError
from vivastreet_e2e.api.types import CategoryMapping, LocationMapping
from vivastreet_e2e.config import settings

logger = logging.getLogger(__name__)

MAPPINGS_DIR = Path(__file__).resolve().parent
CATEGORIES_FILE = "categories.yaml"
LOCATIONS_FILE = "locations.yaml"

# Empty location = no geo filter
NO_LOCATION_FILTER = LocationMapping(label="", geo_id=0)


class MappingRegistry:
    """Read-only lookup tables for categories and locations."""

    def __init__(
        self,
        categories: Iterable[CategoryMapping],
        locations: Iterable[LocationMapping],
        categories_file: str = CATEGORIES_FILE,
        locations_file: str = LOCATIONS_FILE,
    ) -> None:
        category_table: Dict[str, CategoryMapping] = {}
        for mapping in categories:
            if mapping.label in category_table:
                raise MappingDefinitionError(f"Duplicate category label {mapping.label!r} in {categories_file}")
            category_table[mapping.label] = mapping

        location_table: Dict[str, LocationMapping] = {}
        for mapping in locations:
            if mapping.label in location_table:
                raise MappingDefinitionError(f"Duplicate location label {mapping.label!r} in {locations_file}")
            location_table[mapping.label] = mapping

        no_filter = location_table.setdefault(NO_LOCATION_FILTER.label, NO_LOCATION_FILTER)
        if no_filter.geo_id != NO_LOCATION_FILTER.geo_id:
            raise MappingDefinitionError(
                f"The empty location label means 'no geographic filter' and must map to "
                f"geo_id 0, got {no_filter.geo_id} in {locations_file}"
            )

        self._categories: Mapping[str, CategoryMapping] = MappingProxyType(category_table)
        self._locations: Mapping[str, LocationMapping] = MappingProxyType(location_table)
        self.categories_file = categories_file
        self.locations_file = locations_file

    # ---- construction ----------------------------------------------------------
    @classmethod
    def from_tables(
        cls,
        categories: Mapping[str, Mapping[str, Any]],
        locations: Mapping[str, Mapping[str, Any]],
        categories_file: str = CATEGORIES_FILE,
        locations_file: str = LOCATIONS_FILE,
    ) -> "MappingRegistry":
        """Build a registry from label -> fields tables (the YAML file shape)."""
        return cls(
            categories=[
                CategoryMapping(
                    label=label,
                    cat_id=_require_int(fields, "cat_id", label, categories_file),
                    meta_code=_require_str(fields, "meta_code", label, categories_file),
                )
                for label, fields in _entries(categories, categories_file)
            ],
            locations=[
                LocationMapping(
                    label=label,
                    geo_id=_require_int(fields, "geo_id", label, locations_file),
                )
                for label, fields in _entries(locations, locations_file)
            ],
            categories_file=categories_file,
            locations_file=locations_file,
        )

    @classmethod
    def from_files(cls, directory: Path | str) -> "MappingRegistry":
        """Load categories.yaml and locations.yaml from `directory`."""
        directory = Path(directory)
        categories_path = directory / CATEGORIES_FILE
        locations_path = directory / LOCATIONS_FILE
        registry = cls.from_tables(
            _load_yaml(categories_path),
            _load_yaml(locations_path),
            categories_file=str(categories_path),
            locations_file=str(locations_path),
        )
        logger.info(
            "Loaded %d category and %d location mappings from %s",
            len(registry._categories),
            len(registry._locations),
            directory,
        )
        return registry

    # ---- lookups -----------------------------------------------------------------
    @property
    def categories(self) -> Mapping[str, CategoryMapping]:
        return self._categories

    @property
    def locations(self) -> Mapping[str, LocationMapping]:
        return self._locations

    def lookup_category(self, label: str) -> Optional[CategoryMapping]:
        return self._categories.get(label)

    def lookup_location(self, label: str) -> Optional[LocationMapping]:
        return self._locations.get(label)

    def get_category_id(self, label: str) -> Optional[int]:
        mapping = self.lookup_category(label)
        return mapping.cat_id if mapping else None

    def get_meta_code(self, label: str) -> Optional[str]:
        mapping = self.lookup_category(label)
        return mapping.meta_code if mapping else None

    def get_geo_id(self, label: str) -> Optional[int]:
        mapping = self.lookup_location(label)
        return mapping.geo_id if mapping else None


def load_registry(directory: Optional[str] = None) -> MappingRegistry:
    """Process-wide registry, loaded once per directory.

    Without an argument the directory comes from SEARCH_MAPPINGS_DIR, or the
    tables bundled with this package. Different spellings of the same
    directory share one registry.
    """
    if directory is None:
        directory = settings.mappings_dir or str(MAPPINGS_DIR)
    return _load_registry(str(Path(directory).resolve()))


@lru_cache(maxsize=None)
def _load_registry(directory: str) -> MappingRegistry:
    return MappingRegistry.from_files(directory)


def _load_yaml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise MappingDefinitionError(f"Mapping file not found: {path}")
    with open(path, "r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise MappingDefinitionError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MappingDefinitionError(f"{path} must contain a mapping of label -> fields, got {type(data).__name__}")
    return data


def _entries(table: Mapping[str, Any], source: str) -> Iterable[tuple[str, Mapping[str, Any]]]:
    for label, fields in table.items():
        if not isinstance(label, str):
            raise MappingDefinitionError(f"Label {label!r} in {source} must be a string (quote it in YAML)")
        if not isinstance(fields, Mapping):
            raise MappingDefinitionError(f"Entry {label!r} in {source} must be a mapping of fields")
        declared = fields.get("label", label)
        if declared != label:
            raise MappingDefinitionError(f"Entry {label!r} in {source} declares a different label {declared!r}")
        yield label, fields


def _require_int(fields: Mapping[str, Any], key: str, label: str, source: str) -> int:
    value = fields.get(key)
    # bool is an int subclass; `true` in YAML is never a valid id
    if isinstance(value, bool) or not isinstance(value, int):
        raise MappingDefinitionError(f"Entry {label!r} in {source}: {key} must be an integer, got {value!r}")
    return value


def _require_str(fields: Mapping[str, Any], key: str, label: str, source: str) -> str:
    value = fields.get(key)
    if not isinstance(value, str) or not value:
        raise MappingDefinitionError(f"Entry {label!r} in {source}: {key} must be a non-empty string, got {value!r}")
    return value
