"""
Data utility functions for string cleaning and null handling.

This module provides the helpers shared by the loader, the suggestion matcher
and the ratings store for cleaning cell values and comparing place names.
"""

import unicodedata
import pandas as pd
from typing import Any


def safe_string_conversion(value: Any) -> str:
    """
    Safely convert a value to string, handling nulls and cleaning whitespace.

    Args:
        value: Value to convert to string

    Returns:
        Cleaned string value or empty string if null
    """
    if is_null_or_empty(value):
        return ""

    return str(value).strip()


def is_null_or_empty(value: Any) -> bool:
    """
    Check if a value is null, empty, or contains only whitespace.

    Args:
        value: Value to check

    Returns:
        True if value is null/empty, False otherwise
    """
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # Array-likes are not scalar nulls
        return False


def fold_text(value: str) -> str:
    """
    Fold a place name for case- and accent-insensitive comparison.

    "Sarrià" and "SARRIA" both fold to "sarria". Whitespace runs collapse
    to single spaces.

    Args:
        value: String to fold

    Returns:
        Folded string, empty for non-string input
    """
    if not isinstance(value, str):
        return ""

    decomposed = unicodedata.normalize('NFKD', value)
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return ' '.join(stripped.casefold().split())


def clean_dataframe_strings(df: pd.DataFrame, string_columns: list) -> pd.DataFrame:
    """
    Clean string columns in a DataFrame by removing extra whitespace.

    Args:
        df: DataFrame to clean
        string_columns: List of column names to clean

    Returns:
        DataFrame with cleaned string columns
    """
    df_cleaned = df.copy()

    for col in string_columns:
        if col in df_cleaned.columns:
            df_cleaned[col] = df_cleaned[col].apply(safe_string_conversion)

    return df_cleaned


def detect_duplicates(df: pd.DataFrame, key_columns: list) -> pd.DataFrame:
    """
    Detect duplicate records based on specified key columns.

    Args:
        df: DataFrame to check for duplicates
        key_columns: List of column names to use for duplicate detection

    Returns:
        DataFrame containing only the duplicate records
    """
    duplicated_mask = df[key_columns].duplicated(keep=False)

    return df[duplicated_mask].copy()
