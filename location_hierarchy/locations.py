"""
Process-wide location hierarchy.

The packaged city/district/neighborhood table is loaded once, when this
module is first imported, and shared by every caller. The functions below
delegate to that instance; build a LocationHierarchy directly to work with
another table or configuration.
"""

from typing import List, Optional

from .config import HierarchyConfig
from .hierarchy.location_filter import LocationFilter
from .hierarchy.location_hierarchy import LocationHierarchy
from .models import LocationKey


DEFAULT_HIERARCHY = LocationHierarchy.from_config(HierarchyConfig())


def list_cities() -> List[str]:
    return DEFAULT_HIERARCHY.list_cities()


def list_districts(city: str) -> List[str]:
    return DEFAULT_HIERARCHY.list_districts(city)


def list_neighborhoods(city: str, district: Optional[str] = None) -> List[str]:
    return DEFAULT_HIERARCHY.list_neighborhoods(city, district)


def is_district(name: str, city: str) -> bool:
    return DEFAULT_HIERARCHY.is_district(name, city)


def find_parent_district(name: str, city: str) -> Optional[str]:
    return DEFAULT_HIERARCHY.find_parent_district(name, city)


def is_city_wide_search(query: str, city: str) -> bool:
    return DEFAULT_HIERARCHY.is_city_wide_search(query, city)


def expand_search(query: str, city: str) -> List[str]:
    return DEFAULT_HIERARCHY.expand_search(query, city)


def format_display_name(neighborhood: str, district: Optional[str], city: str) -> str:
    return DEFAULT_HIERARCHY.format_display_name(neighborhood, district, city)


def parse_display_name(label: str) -> Optional[LocationKey]:
    return DEFAULT_HIERARCHY.parse_display_name(label)


def search_by_prefix_or_substring(query: str, min_length: int = 3, limit: int = 10) -> List[str]:
    return DEFAULT_HIERARCHY.search_by_prefix_or_substring(query, min_length, limit)


def resolve_filter(query: Optional[str], city: Optional[str] = None) -> Optional[LocationFilter]:
    return DEFAULT_HIERARCHY.resolve_filter(query, city)


def expand_filter(location_filter: LocationFilter) -> List[str]:
    return DEFAULT_HIERARCHY.expand_filter(location_filter)
