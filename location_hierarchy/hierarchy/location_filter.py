"""
Typed location filters.

A search box value resolves to one of four filter variants, so "the whole
city" is its own case instead of a "<city> (Todos los barrios)" string that
every caller has to pattern-match.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AllCities:
    """No location filter at all."""

    def describe(self) -> str:
        return "all cities"


@dataclass(frozen=True)
class CityFilter:
    """Every neighborhood of one city."""

    city: str

    def describe(self) -> str:
        return f"all neighborhoods of {self.city}"


@dataclass(frozen=True)
class DistrictFilter:
    """Every neighborhood of one district."""

    city: str
    district: str

    def describe(self) -> str:
        return f"district {self.district} of {self.city}"


@dataclass(frozen=True)
class NeighborhoodFilter:
    """A single neighborhood, qualified by its district and city."""

    city: str
    district: str
    neighborhood: str

    def describe(self) -> str:
        return f"neighborhood {self.neighborhood} ({self.district}, {self.city})"


LocationFilter = Union[AllCities, CityFilter, DistrictFilter, NeighborhoodFilter]
