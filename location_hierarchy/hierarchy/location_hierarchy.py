"""
City -> district -> neighborhood lookups.

This module provides the LocationHierarchy class: membership tests, parent
resolution, search expansion and display-name handling over an immutable
set of cities. Every lookup is total: unrecognised input yields an empty
list, None or False, never an exception.
"""

import logging
import re
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from ..config import HierarchyConfig
from ..data_loader import HierarchyDataLoader
from ..matching.suggestion_matcher import SuggestionMatcher
from ..models import City, District, HierarchyStats, LocationKey
from ..utils.data_utils import is_null_or_empty
from .display_names import DisplayNameCodec
from .location_filter import (
    AllCities,
    CityFilter,
    DistrictFilter,
    LocationFilter,
    NeighborhoodFilter
)


class LocationHierarchy:
    """
    Read-only tree of cities, districts and neighborhoods.

    Instances hold tuples of frozen dataclasses and expose no mutators, so a
    single instance can be shared by any number of concurrent readers.
    """

    def __init__(
        self,
        cities: Sequence[City],
        config: Optional[HierarchyConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the hierarchy.

        Args:
            cities: Cities in display order
            config: Optional configuration; defaults apply when omitted
            logger: Optional logger instance for logging operations
        """
        self.config = config or HierarchyConfig()
        self.logger = logger or logging.getLogger(__name__)

        self._cities: Tuple[City, ...] = tuple(cities)
        self._cities_by_name: Dict[str, City] = {city.name: city for city in self._cities}

        # (city, neighborhood) -> district
        self._parent_district: Dict[Tuple[str, str], str] = {}
        # neighborhood -> key, across all cities
        self._neighborhood_keys: Dict[str, LocationKey] = {}
        for city in self._cities:
            for district, neighborhood in city.iter_neighborhoods():
                self._parent_district.setdefault((city.name, neighborhood), district)
                self._neighborhood_keys.setdefault(
                    neighborhood, LocationKey(neighborhood, district, city.name)
                )

        self._codec = DisplayNameCodec(self.config.display_separator)
        self._city_wide_patterns: Dict[str, Pattern] = {
            city.name: self._compile_city_wide_pattern(city.name) for city in self._cities
        }
        self._matcher = SuggestionMatcher(
            self._cities,
            fuzzy_threshold=self.config.fuzzy_threshold,
            enable_fuzzy=self.config.enable_fuzzy_suggestions,
            logger=self.logger
        )

    @classmethod
    def from_config(
        cls,
        config: Optional[HierarchyConfig] = None,
        logger: Optional[logging.Logger] = None
    ) -> 'LocationHierarchy':
        """
        Load the location table named by the configuration.

        Args:
            config: Optional configuration; the packaged table when omitted
            logger: Optional logger instance

        Returns:
            LocationHierarchy instance

        Raises:
            FileAccessError, DataLoadError, HierarchyValidationError: From the loader
        """
        config = config or HierarchyConfig()
        loader = HierarchyDataLoader(logger)
        cities = loader.load_cities(config.resolve_data_file())
        return cls(cities, config=config, logger=logger)

    def _compile_city_wide_pattern(self, city: str) -> Pattern:
        phrases = '|'.join(re.escape(phrase) for phrase in self.config.city_wide_phrases)
        return re.compile(rf"{re.escape(city)}\s*\((?:{phrases})\)", re.IGNORECASE)

    # Structure queries

    @property
    def cities(self) -> Tuple[City, ...]:
        return self._cities

    def get_city(self, city: str) -> Optional[City]:
        if not isinstance(city, str):
            return None
        return self._cities_by_name.get(city)

    def _get_district(self, city: str, district: str) -> Optional[District]:
        city_obj = self.get_city(city)
        if city_obj is None or not isinstance(district, str):
            return None
        return city_obj.get_district(district)

    def list_cities(self) -> List[str]:
        """Return every city name in dataset order."""
        return [city.name for city in self._cities]

    def list_districts(self, city: str) -> List[str]:
        """
        Return the districts of a city in dataset order.

        Args:
            city: City name

        Returns:
            List of district names, empty for an unknown city
        """
        city_obj = self.get_city(city)
        return list(city_obj.district_names()) if city_obj else []

    def list_neighborhoods(self, city: str, district: Optional[str] = None) -> List[str]:
        """
        Return neighborhoods of a city, or of one of its districts.

        Args:
            city: City name
            district: Optional district name; when omitted, every neighborhood
                of the city is returned, flattened in dataset order

        Returns:
            List of neighborhood names, empty for an unknown city or district
        """
        if district is None:
            city_obj = self.get_city(city)
            if city_obj is None:
                return []
            return [neighborhood for _, neighborhood in city_obj.iter_neighborhoods()]

        district_obj = self._get_district(city, district)
        return list(district_obj.neighborhoods) if district_obj else []

    def is_district(self, name: str, city: str) -> bool:
        """True if ``name`` is exactly one of the district names of ``city``."""
        return self._get_district(city, name) is not None

    def is_neighborhood(self, name: str, city: str) -> bool:
        """True if ``name`` is exactly one of the neighborhood names of ``city``."""
        if not isinstance(name, str) or not isinstance(city, str):
            return False
        return (city, name) in self._parent_district

    def stats(self) -> HierarchyStats:
        return HierarchyDataLoader.compute_stats(self._cities)

    # Resolution and expansion

    def is_city_wide_search(self, query: str, city: str) -> bool:
        """
        Check whether a query means "the whole city".

        True when the query equals the city name, or reads
        "<city> (<phrase>)" for one of the configured phrases, ignoring case
        and whitespace before the parenthesis.

        Args:
            query: Search box text
            city: City name

        Returns:
            True for a city-wide query of a known city
        """
        pattern = self._city_wide_patterns.get(city) if isinstance(city, str) else None
        if pattern is None or not isinstance(query, str):
            return False
        if query == city:
            return True
        return pattern.fullmatch(query.strip()) is not None

    def find_parent_district(self, name: str, city: str) -> Optional[str]:
        """
        Resolve a neighborhood, district or city-wide marker to its district.

        Resolution order:
            1. city-wide marker -> the city name itself
            2. district name -> the same district
            3. neighborhood name -> the district containing it
            4. anything else -> None

        Args:
            name: Free-text location
            city: City name

        Returns:
            District name, city name for a city-wide marker, or None
        """
        if self.get_city(city) is None or not isinstance(name, str):
            return None

        if self.is_city_wide_search(name, city):
            return city

        if self.is_district(name, city):
            return name

        return self._parent_district.get((city, name))

    def expand_search(self, query: str, city: str) -> List[str]:
        """
        Expand one search string into the neighborhoods it filters by.

        A city-wide query yields every neighborhood of the city, a district
        yields its neighborhoods and a neighborhood yields itself. Anything
        else yields an empty list; whether that means "show nothing" or
        "show everything" is up to the caller.

        Args:
            query: Search box text
            city: City name

        Returns:
            List of neighborhood names
        """
        if self.get_city(city) is None or not isinstance(query, str):
            return []

        if self.is_city_wide_search(query, city):
            return self.list_neighborhoods(city)

        if self.is_district(query, city):
            return self.list_neighborhoods(city, query)

        if self.is_neighborhood(query, city):
            return [query]

        return []

    def resolve_filter(self, query: Optional[str], city: Optional[str] = None) -> Optional[LocationFilter]:
        """
        Resolve search box text to a typed location filter.

        Without a city, a blank query means no filter, a city name or
        city-wide label picks that city, and a neighborhood name (unique
        across cities) or a district name found in exactly one city is
        qualified automatically. With a city, resolution follows the same
        order as expand_search.

        Args:
            query: Search box text
            city: Optional city name

        Returns:
            LocationFilter, or None when nothing matches
        """
        if query is not None and not isinstance(query, str):
            return None

        if city is None:
            return self._resolve_without_city(query)

        if self.get_city(city) is None:
            return None

        if is_null_or_empty(query) or self.is_city_wide_search(query, city):
            return CityFilter(city)

        if self.is_district(query, city):
            return DistrictFilter(city, query)

        district = self._parent_district.get((city, query))
        if district is not None:
            return NeighborhoodFilter(city, district, query)

        return None

    def _resolve_without_city(self, query: Optional[str]) -> Optional[LocationFilter]:
        if is_null_or_empty(query):
            return AllCities()

        for city in self._cities:
            if self.is_city_wide_search(query, city.name):
                return CityFilter(city.name)

        key = self._neighborhood_keys.get(query)
        if key is not None:
            return NeighborhoodFilter(key.city, key.district, key.neighborhood)

        owners = [city.name for city in self._cities if city.get_district(query) is not None]
        if len(owners) == 1:
            return DistrictFilter(owners[0], query)

        if len(owners) > 1:
            self.logger.debug(f"District '{query}' is ambiguous across cities: {owners}")
        return None

    def expand_filter(self, location_filter: LocationFilter) -> List[str]:
        """
        Return the neighborhoods selected by a typed filter.

        A NeighborhoodFilter yields exactly its neighborhood when it belongs
        to the given district, even if the neighborhood shares the district's
        name.

        Args:
            location_filter: Filter produced by resolve_filter or built by a caller

        Returns:
            List of neighborhood names, empty when the filter names unknown places
        """
        if isinstance(location_filter, AllCities):
            return [
                neighborhood
                for city in self._cities
                for _, neighborhood in city.iter_neighborhoods()
            ]

        if isinstance(location_filter, CityFilter):
            return self.list_neighborhoods(location_filter.city)

        if isinstance(location_filter, DistrictFilter):
            return self.list_neighborhoods(location_filter.city, location_filter.district)

        if isinstance(location_filter, NeighborhoodFilter):
            district = self._get_district(location_filter.city, location_filter.district)
            if district is not None and location_filter.neighborhood in district:
                return [location_filter.neighborhood]
            return []

        return []

    def resolve_key(self, neighborhood: str, city: str,
                    district: Optional[str] = None) -> Optional[LocationKey]:
        """
        Build the canonical rating key for a neighborhood.

        Args:
            neighborhood: Neighborhood name
            city: City name
            district: Optional district; must agree with the hierarchy if given

        Returns:
            LocationKey with the district filled in, or None
        """
        if not isinstance(neighborhood, str) or not isinstance(city, str):
            return None

        parent = self._parent_district.get((city, neighborhood))
        if parent is None:
            return None

        if not is_null_or_empty(district) and district != parent:
            self.logger.debug(
                f"District mismatch for '{neighborhood}' in {city}: "
                f"given '{district}', expected '{parent}'"
            )
            return None

        return LocationKey(neighborhood, parent, city)

    # Display names

    def city_wide_label(self, city: str, phrase: Optional[str] = None) -> Optional[str]:
        """
        Build the "<city> (<phrase>)" suggestion label for a known city.

        Args:
            city: City name
            phrase: Configured phrase to use; the first one by default

        Returns:
            Label string, or None for an unknown city or a phrase that is
            not configured
        """
        if self.get_city(city) is None:
            return None
        if phrase is None:
            phrase = self.config.city_wide_phrases[0]
        elif phrase not in self.config.city_wide_phrases:
            return None
        return f"{city} ({phrase})"

    def format_display_name(self, neighborhood: str, district: Optional[str], city: str) -> str:
        """Join neighborhood, district and city into a display name."""
        return self._codec.format(neighborhood, district, city)

    def parse_display_name(self, label: str) -> Optional[LocationKey]:
        """
        Parse a display name back into its location key.

        Labels naming known places are parsed against the hierarchy, so
        neighborhood names containing the separator and the two-segment
        (no district) form both round-trip. Other labels parse only in the
        plain three-segment form.

        Args:
            label: Display name

        Returns:
            LocationKey, or None when the label cannot be parsed
        """
        parts = self._codec.split(label)
        if len(parts) < 2 or any(not part for part in parts):
            return None

        city = parts[-1]
        if self.get_city(city) is not None:
            if len(parts) >= 3:
                district = parts[-2]
                neighborhood = self._codec.join(parts[:-2])
                if self._parent_district.get((city, neighborhood)) == district:
                    return LocationKey(neighborhood, district, city)

            neighborhood = self._codec.join(parts[:-1])
            if self.is_neighborhood(neighborhood, city):
                return LocationKey(neighborhood, None, city)

        return self._codec.parse_segments(label)

    # Suggestions

    def search_suggestion_keys(self, query: str, min_length: Optional[int] = None,
                               limit: Optional[int] = None) -> List[LocationKey]:
        """Location keys behind search_by_prefix_or_substring."""
        min_length = self.config.search_min_length if min_length is None else min_length
        limit = self.config.search_max_results if limit is None else limit
        return self._matcher.match(query, min_length=min_length, limit=limit)

    def search_by_prefix_or_substring(self, query: str, min_length: Optional[int] = None,
                                      limit: Optional[int] = None) -> List[str]:
        """
        Suggest neighborhoods whose name contains the query.

        Matching ignores case and accents. Queries shorter than ``min_length``
        return nothing. Misspelled queries with no literal match fall back to
        fuzzy suggestions when enabled in the configuration.

        Args:
            query: User-typed text
            min_length: Minimum query length (config default: 3)
            limit: Maximum number of suggestions (config default: 10)

        Returns:
            List of three-segment display names
        """
        return [
            self.format_display_name(key.neighborhood, key.district, key.city)
            for key in self.search_suggestion_keys(query, min_length, limit)
        ]
