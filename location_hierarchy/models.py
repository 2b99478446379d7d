"""
Data models for the location hierarchy package.

This module defines the immutable structures the hierarchy is built from and
the canonical key used to store and query neighborhood ratings.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, Any, Iterator


@dataclass(frozen=True)
class District:
    """An administrative district and its ordered neighborhood names."""

    name: str
    neighborhoods: Tuple[str, ...] = field(default_factory=tuple)

    def __contains__(self, neighborhood: object) -> bool:
        return neighborhood in self.neighborhoods


@dataclass(frozen=True)
class City:
    """A city and its ordered districts."""

    name: str
    districts: Tuple[District, ...] = field(default_factory=tuple)

    def get_district(self, name: str) -> Optional[District]:
        """
        Get a district of this city by exact name.

        Args:
            name: District name to look up

        Returns:
            District if found, None otherwise
        """
        for district in self.districts:
            if district.name == name:
                return district
        return None

    def district_names(self) -> Tuple[str, ...]:
        return tuple(district.name for district in self.districts)

    def iter_neighborhoods(self) -> Iterator[Tuple[str, str]]:
        """Yield (district, neighborhood) pairs in dataset order."""
        for district in self.districts:
            for neighborhood in district.neighborhoods:
                yield district.name, neighborhood


@dataclass(frozen=True)
class LocationKey:
    """
    Canonical (neighborhood, district, city) tuple.

    Used as the storage key for neighborhood ratings and as the parsed form
    of a display name. ``district`` is None for the two-segment label form.
    """

    neighborhood: str
    district: Optional[str]
    city: str

    def as_tuple(self) -> Tuple[str, Optional[str], str]:
        return (self.neighborhood, self.district, self.city)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'neighborhood': self.neighborhood,
            'district': self.district,
            'city': self.city
        }


@dataclass(frozen=True)
class HierarchyStats:
    """Size of a loaded hierarchy."""

    cities: int = 0
    districts: int = 0
    neighborhoods: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'cities': self.cities,
            'districts': self.districts,
            'neighborhoods': self.neighborhoods
        }
