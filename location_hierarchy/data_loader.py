"""
Data loading and validation module.

This module provides the HierarchyDataLoader class for reading a
city/district/neighborhood table from CSV, checking the hierarchy
invariants and building the immutable City structures.
"""

import pandas as pd
from typing import List, Dict, Optional, Tuple, Union
import logging
from pathlib import Path

from .config import DEFAULT_DATA_FILE
from .models import City, District, HierarchyStats
from .exceptions import DataLoadError, FileAccessError, HierarchyValidationError
from .utils.data_utils import clean_dataframe_strings, detect_duplicates


REQUIRED_COLUMNS = ['city', 'district', 'neighborhood']


class HierarchyDataLoader:
    """
    Handles loading and validation of location tables.

    The table has one row per neighborhood with ``city``, ``district`` and
    ``neighborhood`` columns. Row order is display order.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the loader.

        Args:
            logger: Optional logger instance for logging operations
        """
        self.logger = logger or logging.getLogger(__name__)

    def load_cities(self, file_path: Optional[Union[str, Path]] = None) -> Tuple[City, ...]:
        """
        Load, validate and build the hierarchy from a CSV file.

        Args:
            file_path: Path to the location table; the packaged table if None

        Returns:
            Tuple of City objects in dataset order

        Raises:
            FileAccessError: If the file cannot be opened
            DataLoadError: If the file cannot be parsed
            HierarchyValidationError: If the table breaks a hierarchy invariant
        """
        path = Path(file_path) if file_path else DEFAULT_DATA_FILE
        df = self.load_dataframe(path)
        self.validate_dataframe(df, str(path))
        cities = self.build_cities(df)

        stats = self.compute_stats(cities)
        self.logger.info(
            f"Loaded {stats.neighborhoods} neighborhoods in {stats.districts} districts "
            f"of {stats.cities} cities from {path}"
        )
        return cities

    def load_dataframe(self, file_path: Union[str, Path]) -> pd.DataFrame:
        """
        Read the location table into a cleaned DataFrame.

        Args:
            file_path: Path to the CSV file

        Returns:
            DataFrame with stripped string columns

        Raises:
            FileAccessError: If the file is missing or unreadable
            DataLoadError: If the file is empty, malformed or lacks columns
        """
        file_path = str(file_path)
        self.logger.debug(f"Reading location table: {file_path}")

        path_obj = Path(file_path)
        if not path_obj.exists():
            raise FileAccessError(
                f"Location table not found: {file_path}",
                file_path=file_path,
                operation="read"
            )

        if not path_obj.is_file():
            raise FileAccessError(
                f"Path is not a file: {file_path}",
                file_path=file_path,
                operation="read"
            )

        try:
            # keep_default_na=False: a place called "NA" is a name, not a null
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False, encoding='utf-8')
        except pd.errors.EmptyDataError as e:
            raise DataLoadError(
                "Location table is empty or contains no valid data",
                file_path=file_path,
                original_error=e
            )
        except pd.errors.ParserError as e:
            raise DataLoadError(
                f"Error parsing location table: {str(e)}",
                file_path=file_path,
                original_error=e
            )
        except UnicodeDecodeError as e:
            raise DataLoadError(
                "Location table is not valid UTF-8",
                file_path=file_path,
                original_error=e
            )
        except PermissionError as e:
            raise FileAccessError(
                f"Permission denied reading location table: {file_path}",
                file_path=file_path,
                operation="read",
                original_error=e
            )

        df.columns = [str(col).strip().lower() for col in df.columns]

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise DataLoadError(
                f"Location table is missing required columns: {', '.join(missing)}. "
                f"Available columns: {list(df.columns)}",
                file_path=file_path
            )

        if df.empty:
            raise DataLoadError("Location table contains no rows", file_path=file_path)

        self.logger.debug(f"Read {len(df)} rows from {file_path}")
        return clean_dataframe_strings(df[REQUIRED_COLUMNS], REQUIRED_COLUMNS)

    def validate_dataframe(self, df: pd.DataFrame, file_path: Optional[str] = None) -> None:
        """
        Check the hierarchy invariants on a cleaned table.

        Args:
            df: Cleaned DataFrame with the required columns
            file_path: Source path, for error context

        Raises:
            HierarchyValidationError: Listing every violation found
        """
        issues: List[str] = []
        first_level: Optional[str] = None

        # Line numbers are 1-based and count the header row
        for column in REQUIRED_COLUMNS:
            blank_rows = df.index[df[column] == ''].tolist()
            if blank_rows:
                first_level = first_level or column
                lines = ', '.join(str(i + 2) for i in blank_rows[:10])
                issues.append(f"Blank {column} name on line(s) {lines}")

        named = df[(df['city'] != '') & (df['district'] != '') & (df['neighborhood'] != '')]

        duplicates = detect_duplicates(named, REQUIRED_COLUMNS)
        if not duplicates.empty:
            first_level = first_level or 'neighborhood'
            for row in duplicates.drop_duplicates().itertuples(index=False):
                issues.append(
                    f"Neighborhood '{row.neighborhood}' listed more than once "
                    f"under {row.district}, {row.city}"
                )

        parents = named.drop_duplicates().groupby('neighborhood', sort=False)
        for neighborhood, group in parents:
            if len(group) > 1:
                first_level = first_level or 'neighborhood'
                owners = '; '.join(f"{r.district}, {r.city}" for r in group.itertuples(index=False))
                issues.append(
                    f"Neighborhood '{neighborhood}' belongs to more than one district: {owners}"
                )

        if issues:
            message = (
                f"Location table breaks the hierarchy invariants ({len(issues)} issue(s)): "
                f"{issues[0]}"
            )
            self.logger.error(message)
            raise HierarchyValidationError(
                message,
                hierarchy_level=first_level,
                issues=issues,
                file_path=file_path
            )

        self.logger.debug("Location table validation passed")

    def build_cities(self, df: pd.DataFrame) -> Tuple[City, ...]:
        """
        Group validated rows into City and District structures.

        Cities and districts keep the order of their first row.

        Args:
            df: Validated DataFrame

        Returns:
            Tuple of City objects
        """
        tree: Dict[str, Dict[str, List[str]]] = {}

        for row in df.itertuples(index=False):
            districts = tree.setdefault(row.city, {})
            districts.setdefault(row.district, []).append(row.neighborhood)

        return tuple(
            City(
                name=city,
                districts=tuple(
                    District(name=district, neighborhoods=tuple(neighborhoods))
                    for district, neighborhoods in districts.items()
                )
            )
            for city, districts in tree.items()
        )

    @staticmethod
    def compute_stats(cities: Tuple[City, ...]) -> HierarchyStats:
        """Count cities, districts and neighborhoods."""
        return HierarchyStats(
            cities=len(cities),
            districts=sum(len(city.districts) for city in cities),
            neighborhoods=sum(
                len(district.neighborhoods) for city in cities for district in city.districts
            )
        )
