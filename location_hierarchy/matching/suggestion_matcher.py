"""
Suggestion matching for location search boxes.

This module provides the SuggestionMatcher class that turns a partial,
user-typed string into neighborhood suggestions: a case- and
accent-insensitive substring match in dataset order, with a rapidfuzz
fallback for misspelled queries that match nothing literally.
"""

import logging
from typing import List, Optional, Sequence

from rapidfuzz import fuzz, process

from ..models import City, LocationKey
from ..utils.data_utils import fold_text


class SuggestionMatcher:
    """
    Matches free text against every neighborhood of a hierarchy.

    Candidates are indexed once at construction in dataset order; matching
    never raises for any query value.
    """

    def __init__(
        self,
        cities: Sequence[City],
        fuzzy_threshold: int = 85,
        enable_fuzzy: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the matcher.

        Args:
            cities: Cities whose neighborhoods are searched
            fuzzy_threshold: Minimum partial_ratio score (0-100) for fuzzy suggestions
            enable_fuzzy: Whether to fall back to fuzzy matching
            logger: Optional logger instance for logging operations
        """
        if not 0 <= fuzzy_threshold <= 100:
            raise ValueError("Threshold must be between 0 and 100")

        self.fuzzy_threshold = fuzzy_threshold
        self.enable_fuzzy = enable_fuzzy
        self.logger = logger or logging.getLogger(__name__)

        self._entries: List[LocationKey] = []
        for city in cities:
            for district, neighborhood in city.iter_neighborhoods():
                self._entries.append(LocationKey(neighborhood, district, city.name))
        self._folded_names: List[str] = [fold_text(entry.neighborhood) for entry in self._entries]

    def match(self, query: str, min_length: int = 3, limit: int = 10) -> List[LocationKey]:
        """
        Find neighborhoods whose name contains the query.

        Args:
            query: User-typed text
            min_length: Queries shorter than this return no suggestions
            limit: Maximum number of suggestions

        Returns:
            Matching location keys, in dataset order for substring matches
            and best score first for fuzzy matches
        """
        folded = fold_text(query)
        if limit <= 0 or len(folded) < min_length:
            return []

        hits = [
            entry for entry, name in zip(self._entries, self._folded_names)
            if folded in name
        ][:limit]

        if hits or not self.enable_fuzzy:
            self.logger.debug(f"Substring suggestions for '{query}': {len(hits)}")
            return hits

        return self._fuzzy_match(folded, limit)

    def _fuzzy_match(self, folded_query: str, limit: int) -> List[LocationKey]:
        """Score every candidate with partial_ratio and keep those above threshold."""
        matches = process.extract(
            folded_query,
            self._folded_names,
            scorer=fuzz.partial_ratio,
            limit=None,
            score_cutoff=self.fuzzy_threshold
        )

        # rapidfuzz returns (choice, score, index); ties keep dataset order
        ranked = sorted(matches, key=lambda match: (-match[1], match[2]))
        suggestions = [self._entries[index] for _, _, index in ranked[:limit]]

        self.logger.debug(
            f"Fuzzy suggestions for '{folded_query}': "
            f"{[(m[0], round(m[1], 1)) for m in ranked[:limit]]}"
        )
        return suggestions
