"""
Display names for (neighborhood, district, city) tuples.

A display name joins the parts with a separator, e.g.
"Sants, Sants-Montjuïc, Barcelona", or "Sants, Barcelona" when the district
is omitted. Splitting is done from the right because some neighborhood
names contain the separator themselves
("Sant Pere, Santa Caterina i la Ribera").
"""

from typing import List, Optional

from ..models import LocationKey
from ..utils.data_utils import is_null_or_empty, safe_string_conversion


class DisplayNameCodec:
    """Formats and splits display names with a fixed separator."""

    def __init__(self, separator: str = ", "):
        self.separator = separator

    def format(self, neighborhood: str, district: Optional[str], city: str) -> str:
        """
        Join the parts of a location into its display name.

        Args:
            neighborhood: Neighborhood name
            district: District name, or None to omit the segment
            city: City name

        Returns:
            Display name string
        """
        neighborhood = safe_string_conversion(neighborhood)
        city = safe_string_conversion(city)
        if is_null_or_empty(district):
            return self.separator.join([neighborhood, city])
        return self.separator.join([neighborhood, safe_string_conversion(district), city])

    def split(self, label: str) -> List[str]:
        """
        Split a label on the separator, trimming each segment.

        Labels that never contain the exact separator are split on its
        visible part instead, so "Sants,Barcelona" still splits under ", ".
        """
        if not isinstance(label, str):
            return []
        separator = self.separator if self.separator in label else self.separator.strip()
        return [part.strip() for part in label.split(separator)]

    def join(self, parts: List[str]) -> str:
        return self.separator.join(parts)

    def parse_segments(self, label: str) -> Optional[LocationKey]:
        """
        Parse a three-segment label without consulting any dataset.

        Args:
            label: Display name

        Returns:
            LocationKey if the label has exactly three non-blank segments,
            None otherwise
        """
        parts = self.split(label)
        if len(parts) != 3 or any(not part for part in parts):
            return None
        return LocationKey(neighborhood=parts[0], district=parts[1], city=parts[2])
