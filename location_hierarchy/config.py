"""
Configuration management for the location hierarchy package.

This module provides the dataclass holding the data source, display-name,
search and logging settings shared by the hierarchy, the suggestion matcher
and the command-line interface.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from pathlib import Path

from .exceptions import ConfigurationError


DEFAULT_DATA_FILE = Path(__file__).parent / "data" / "locations.csv"

# Phrases accepted after a city name to mean "the whole city",
# e.g. "Barcelona (Todos los barrios)".
DEFAULT_CITY_WIDE_PHRASES = ["Todos los barrios", "All neighborhoods", "Tots els barris"]

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class HierarchyConfig:
    """Configuration class for hierarchy loading, display names and search."""

    # Location table; None means the packaged table
    data_file: Optional[str] = None

    # Display names
    display_separator: str = ", "
    city_wide_phrases: List[str] = field(default_factory=lambda: list(DEFAULT_CITY_WIDE_PHRASES))

    # Suggestion search
    search_min_length: int = 3
    search_max_results: int = 10
    enable_fuzzy_suggestions: bool = True
    fuzzy_threshold: int = 85

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_paths()
        self._validate_display()
        self._validate_search()
        self._validate_logging()

    def _validate_paths(self):
        """Validate that a custom location table exists."""
        if self.data_file is not None and not Path(self.data_file).is_file():
            raise ConfigurationError(
                f"Location data file not found: {self.data_file}",
                config_key='data_file',
                config_value=self.data_file
            )

    def _validate_display(self):
        """Validate separator and city-wide phrases."""
        if not self.display_separator or not self.display_separator.strip():
            raise ConfigurationError(
                "Display separator must contain a visible character",
                config_key='display_separator',
                config_value=repr(self.display_separator)
            )

        phrases = [p.strip() for p in self.city_wide_phrases if p and p.strip()]
        if not phrases:
            raise ConfigurationError(
                "At least one city-wide phrase must be specified",
                config_key='city_wide_phrases',
                config_value=self.city_wide_phrases
            )
        self.city_wide_phrases = phrases

    def _validate_search(self):
        """Validate suggestion search limits and fuzzy threshold."""
        if self.search_min_length < 1:
            raise ConfigurationError(
                f"Search minimum length must be at least 1: {self.search_min_length}",
                config_key='search_min_length',
                config_value=self.search_min_length
            )

        if self.search_max_results < 1:
            raise ConfigurationError(
                f"Search result cap must be at least 1: {self.search_max_results}",
                config_key='search_max_results',
                config_value=self.search_max_results
            )

        if not 0 <= self.fuzzy_threshold <= 100:
            raise ConfigurationError(
                f"Fuzzy threshold must be between 0 and 100: {self.fuzzy_threshold}",
                config_key='fuzzy_threshold',
                config_value=self.fuzzy_threshold
            )

    def _validate_logging(self):
        """Normalise and validate the log level."""
        level = str(self.log_level).upper()
        if level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {self.log_level}",
                config_key='log_level',
                config_value=self.log_level,
                valid_values=VALID_LOG_LEVELS
            )
        self.log_level = level

    def resolve_data_file(self) -> Path:
        """Return the location table this configuration points at."""
        return Path(self.data_file) if self.data_file else DEFAULT_DATA_FILE

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'HierarchyConfig':
        """Create configuration from dictionary."""
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                config_key=unknown[0],
                valid_values=sorted(known)
            )
        return cls(**config_dict)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return {
            'data_file': self.data_file,
            'display_separator': self.display_separator,
            'city_wide_phrases': list(self.city_wide_phrases),
            'search_min_length': self.search_min_length,
            'search_max_results': self.search_max_results,
            'enable_fuzzy_suggestions': self.enable_fuzzy_suggestions,
            'fuzzy_threshold': self.fuzzy_threshold,
            'log_level': self.log_level,
            'log_file': self.log_file
        }
