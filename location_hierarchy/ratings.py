"""
Neighborhood ratings keyed by canonical location.

This module provides validated rating submissions, the in-memory store that
keeps them under their canonical (neighborhood, district, city) key, and the
per-key aggregates shown next to a neighborhood: submission count, average
of each sub-score and an overall mark.
"""

import logging
import math
import numbers
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd
from tqdm import tqdm

from .exceptions import (
    DataLoadError,
    FileAccessError,
    ValidationError,
    create_file_error,
    create_validation_error
)
from .hierarchy.location_hierarchy import LocationHierarchy
from .models import LocationKey
from .utils.data_utils import is_null_or_empty, safe_string_conversion


SCORE_FIELDS = [
    'security',
    'parking',
    'family_friendly',
    'public_transport',
    'green_spaces',
    'services'
]

MIN_SCORE = 1
MAX_SCORE = 10

# Field names used by the marketplace's JSON API
FIELD_ALIASES = {
    'familyFriendly': 'family_friendly',
    'publicTransport': 'public_transport',
    'greenSpaces': 'green_spaces',
    'userId': 'user_id',
    'createdAt': 'created_at'
}

KEY_COLUMNS = ['city', 'district', 'neighborhood']


def _coerce_score(field_name: str, value: Any) -> float:
    rules = [f"numeric value between {MIN_SCORE} and {MAX_SCORE}"]

    if isinstance(value, bool):
        raise create_validation_error(field_name, value, rules)

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise create_validation_error(field_name, value, rules)

    if not isinstance(value, numbers.Real) or math.isnan(float(value)):
        raise create_validation_error(field_name, value, rules)

    score = float(value)
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise create_validation_error(field_name, value, rules)
    return score


def _coerce_user_id(value: Any) -> int:
    rules = ["integer user id (negative for anonymous users)"]

    if isinstance(value, bool):
        raise create_validation_error('user_id', value, rules)

    if isinstance(value, numbers.Integral):
        return int(value)

    if isinstance(value, numbers.Real) and not math.isnan(float(value)) and float(value).is_integer():
        return int(value)

    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass

    raise create_validation_error('user_id', value, rules)


def _require_name(field_name: str, value: Any) -> str:
    if not isinstance(value, str) or is_null_or_empty(value):
        raise create_validation_error(field_name, value, ["non-empty string"])
    return value.strip()


@dataclass(frozen=True)
class NeighborhoodRating:
    """One resident's rating of a neighborhood, each sub-score on a 1-10 scale."""

    neighborhood: str
    city: str
    security: float
    parking: float
    family_friendly: float
    public_transport: float
    green_spaces: float
    services: float
    user_id: int
    district: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NeighborhoodRating':
        """
        Build a rating from a submission payload.

        Accepts snake_case keys and the camelCase keys of the marketplace API.

        Args:
            data: Submission fields

        Returns:
            Validated NeighborhoodRating

        Raises:
            ValidationError: Naming the first invalid or missing field
        """
        if not isinstance(data, dict):
            raise ValidationError(
                "Rating submission must be a mapping",
                invalid_value=type(data).__name__
            )

        fields = {FIELD_ALIASES.get(key, key): value for key, value in data.items()}

        for required in ['neighborhood', 'city', 'user_id'] + SCORE_FIELDS:
            if required not in fields:
                raise ValidationError(
                    f"Missing required field '{required}'",
                    field_name=required,
                    validation_rules=["required"]
                )

        district = fields.get('district')
        district = None if is_null_or_empty(district) else safe_string_conversion(district)

        return cls(
            neighborhood=_require_name('neighborhood', fields['neighborhood']),
            city=_require_name('city', fields['city']),
            district=district,
            user_id=_coerce_user_id(fields['user_id']),
            **{name: _coerce_score(name, fields[name]) for name in SCORE_FIELDS}
        )

    def scores(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in SCORE_FIELDS}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'neighborhood': self.neighborhood,
            'district': self.district,
            'city': self.city,
            **self.scores(),
            'user_id': self.user_id,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }


@dataclass(frozen=True)
class RatingSummary:
    """Aggregate of every rating stored under one location key."""

    key: LocationKey
    count: int
    averages: Dict[str, float] = field(default_factory=dict)
    overall: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.key.to_dict(),
            'count': self.count,
            **self.averages,
            'overall': self.overall
        }


class RatingStore:
    """
    In-memory store of neighborhood ratings.

    Ratings are filed under the canonical key resolved by the hierarchy, so a
    submission without a district lands with the ones that name it.
    """

    def __init__(self, hierarchy: LocationHierarchy, logger: Optional[logging.Logger] = None):
        """
        Initialize the store.

        Args:
            hierarchy: Hierarchy used to canonicalize rating keys
            logger: Optional logger instance for logging operations
        """
        self.hierarchy = hierarchy
        self.logger = logger or logging.getLogger(__name__)
        self._ratings: List[NeighborhoodRating] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._ratings)

    def add_rating(self, rating: NeighborhoodRating) -> NeighborhoodRating:
        """
        Store a rating under its canonical key.

        Args:
            rating: Validated rating

        Returns:
            The stored rating, with id, district and created_at filled in

        Raises:
            ValidationError: If the neighborhood is not part of the hierarchy
        """
        key = self.hierarchy.resolve_key(rating.neighborhood, rating.city, rating.district)
        if key is None:
            raise ValidationError(
                f"Unknown location for rating: "
                f"{self.hierarchy.format_display_name(rating.neighborhood, rating.district, rating.city)}",
                field_name='neighborhood',
                invalid_value=rating.neighborhood,
                validation_rules=["neighborhood must belong to the given city (and district)"]
            )

        stored = replace(
            rating,
            district=key.district,
            id=self._next_id,
            created_at=rating.created_at or datetime.now()
        )
        self._next_id += 1
        self._ratings.append(stored)

        self.logger.debug(f"Stored rating {stored.id} for {key.as_tuple()}")
        return stored

    def get_ratings(self, neighborhood: str, city: Optional[str] = None) -> List[NeighborhoodRating]:
        """Return stored ratings of a neighborhood, optionally limited to one city."""
        return [
            rating for rating in self._ratings
            if rating.neighborhood == neighborhood and (city is None or rating.city == city)
        ]

    def to_dataframe(self) -> pd.DataFrame:
        """Return the stored ratings as a DataFrame, one row per rating."""
        columns = ['id'] + KEY_COLUMNS + SCORE_FIELDS + ['user_id', 'created_at']
        return pd.DataFrame(
            [{column: getattr(rating, column) for column in columns} for rating in self._ratings],
            columns=columns
        )

    def summarize(self, key: LocationKey) -> Optional[RatingSummary]:
        """
        Aggregate the ratings stored under one location.

        Args:
            key: Location key; a missing district is resolved from the hierarchy

        Returns:
            RatingSummary, or None when the location has no ratings
        """
        canonical = self.hierarchy.resolve_key(key.neighborhood, key.city, key.district)
        if canonical is None or not self._ratings:
            return None

        df = self.to_dataframe()
        mask = (
            (df['city'] == canonical.city)
            & (df['district'] == canonical.district)
            & (df['neighborhood'] == canonical.neighborhood)
        )
        selected = df.loc[mask, SCORE_FIELDS]
        if selected.empty:
            return None

        return self._build_summary(canonical, len(selected), selected.mean())

    def summaries(self) -> List[RatingSummary]:
        """Aggregate every rated location, in order of first rating."""
        if not self._ratings:
            return []

        grouped = self.to_dataframe().groupby(KEY_COLUMNS, sort=False)
        means = grouped[SCORE_FIELDS].mean()
        counts = grouped.size()

        return [
            self._build_summary(
                LocationKey(neighborhood=neighborhood, district=district, city=city),
                int(counts.loc[(city, district, neighborhood)]),
                row
            )
            for (city, district, neighborhood), row in means.iterrows()
        ]

    @staticmethod
    def _build_summary(key: LocationKey, count: int, means: pd.Series) -> RatingSummary:
        raw = {name: float(means[name]) for name in SCORE_FIELDS}
        return RatingSummary(
            key=key,
            count=count,
            averages={name: round(value, 1) for name, value in raw.items()},
            overall=round(sum(raw.values()) / len(raw), 1)
        )

    def load_csv(self, file_path: Union[str, Path], show_progress: bool = True) -> Tuple[int, int]:
        """
        Import rating submissions from a CSV file.

        Rows that fail validation, or name a location outside the hierarchy,
        are skipped and logged.

        Args:
            file_path: CSV with one submission per row
            show_progress: Whether to display a progress bar

        Returns:
            Tuple of (rows stored, rows skipped)

        Raises:
            FileAccessError: If the file cannot be opened
            DataLoadError: If the file cannot be parsed
        """
        file_path = str(file_path)
        if not Path(file_path).is_file():
            raise FileAccessError(
                f"Ratings file not found: {file_path}",
                file_path=file_path,
                operation="read"
            )

        try:
            df = pd.read_csv(file_path, keep_default_na=False, na_values=[''], encoding='utf-8')
        except pd.errors.EmptyDataError as e:
            raise DataLoadError("Ratings file is empty", file_path=file_path, original_error=e)
        except pd.errors.ParserError as e:
            raise DataLoadError(
                f"Error parsing ratings file: {str(e)}",
                file_path=file_path,
                original_error=e
            )
        except PermissionError as e:
            raise create_file_error("read", file_path, e)

        stored = 0
        skipped = 0
        records = df.to_dict('records')

        for line_number, record in enumerate(
            tqdm(records, desc="Importing ratings", unit="rating", disable=not show_progress),
            start=2
        ):
            try:
                self.add_rating(NeighborhoodRating.from_dict(record))
                stored += 1
            except ValidationError as e:
                skipped += 1
                self.logger.warning(f"Skipping rating on line {line_number}: {e.message}")

        self.logger.info(f"Imported {stored} ratings from {file_path} ({skipped} skipped)")
        return stored, skipped
