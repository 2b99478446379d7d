"""
Hierarchical location module.

This module provides the city -> district -> neighborhood tree together with
display-name handling, typed location filters and URL path-segment helpers.
"""

from location_hierarchy.hierarchy.location_hierarchy import LocationHierarchy
from location_hierarchy.hierarchy.display_names import DisplayNameCodec
from location_hierarchy.hierarchy.location_filter import (
    AllCities,
    CityFilter,
    DistrictFilter,
    NeighborhoodFilter,
    LocationFilter
)
from location_hierarchy.hierarchy.path_segments import to_path_segment, from_path_segment

__all__ = [
    'LocationHierarchy',
    'DisplayNameCodec',
    'AllCities',
    'CityFilter',
    'DistrictFilter',
    'NeighborhoodFilter',
    'LocationFilter',
    'to_path_segment',
    'from_path_segment'
]
