"""
Logging configuration for the location hierarchy package.

This module provides the logger used by the command-line interface, with a
console handler, an optional file handler and helpers for the recurring
dataset and rating messages.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO


class HierarchyLogger:
    """Custom logger for location hierarchy operations."""

    def __init__(self, name: str = "location_hierarchy", level: str = "INFO",
                 log_file: Optional[str] = None,
                 stream: Optional[TextIO] = None):
        """
        Initialize the hierarchy logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for log output
            stream: Console stream; stdout when omitted
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear any existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_handler = logging.StreamHandler(stream or sys.stdout)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            self._setup_file_handler(log_file, formatter)

    def _setup_file_handler(self, log_file: str, formatter: logging.Formatter):
        """Set up file logging handler."""
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def log_hierarchy_loaded(self, stats, source: str):
        """Log the size of a freshly loaded hierarchy."""
        self.info(f"Location hierarchy loaded from: {source}")
        self.info(f"Cities: {stats.cities:,} | Districts: {stats.districts:,} | "
                  f"Neighborhoods: {stats.neighborhoods:,}")

    def log_data_quality_warning(self, message: str):
        """Log data quality warnings."""
        self.warning(f"DATA QUALITY: {message}")

    def log_file_operation(self, operation: str, file_path: str, record_count: int):
        """Log file operations."""
        self.info(f"{operation}: {file_path} ({record_count:,} records)")


def setup_logging(config, stream: Optional[TextIO] = None) -> HierarchyLogger:
    """
    Set up logging based on configuration.

    Library modules log through ``logging.getLogger(__name__)``; they are
    children of the ``location_hierarchy`` logger configured here.

    Args:
        config: HierarchyConfig instance
        stream: Console stream; stdout when omitted

    Returns:
        Configured HierarchyLogger instance
    """
    return HierarchyLogger(
        name="location_hierarchy",
        level=config.log_level,
        log_file=config.log_file,
        stream=stream
    )
