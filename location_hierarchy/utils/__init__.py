"""
Utility functions and helpers.
"""

from .data_utils import (
    safe_string_conversion,
    is_null_or_empty,
    fold_text,
    clean_dataframe_strings,
    detect_duplicates
)

__all__ = [
    'safe_string_conversion',
    'is_null_or_empty',
    'fold_text',
    'clean_dataframe_strings',
    'detect_duplicates'
]
