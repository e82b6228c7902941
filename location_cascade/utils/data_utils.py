"""
Data utility functions for string cleaning and null handling.

This module provides utility functions for cleaning location names,
handling null values, and summarising the quality of hierarchy tables.
"""

import pandas as pd
from typing import Any, Optional


def safe_string_conversion(value: Any) -> str:
    """
    Safely convert a value to string, handling nulls and cleaning whitespace.

    Args:
        value: Value to convert to string

    Returns:
        Cleaned string value or empty string if null
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""

    return str(value).strip()


def optional_string(value: Any) -> Optional[str]:
    """
    Convert a value to a cleaned string, using None for "no value".

    Args:
        value: Value to convert

    Returns:
        Stripped string, or None if the value is null, empty or whitespace
    """
    cleaned = safe_string_conversion(value)
    return cleaned or None


def normalize_key(value: str) -> str:
    """
    Normalize a name for case-insensitive comparison.

    Args:
        value: String to normalize

    Returns:
        Whitespace-collapsed, casefolded string
    """
    if not value:
        return ""

    return ' '.join(value.strip().split()).casefold()


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
        DataFrame containing the repeated records (first occurrences excluded)
    """
    duplicated_mask = df[key_columns].duplicated(keep='first')

    return df[duplicated_mask].copy()


def get_data_quality_summary(df: pd.DataFrame, key_columns: list) -> dict:
    """
    Generate a summary of data quality metrics for a hierarchy table.

    Args:
        df: DataFrame to analyze
        key_columns: Level columns, in hierarchical order

    Returns:
        Dictionary containing data quality metrics
    """
    summary = {
        'total_records': len(df),
        'empty_string_counts': {},
        'distinct_counts': {},
        'duplicate_paths': int(df.duplicated(subset=key_columns).sum()) if len(df) else 0
    }

    for col in key_columns:
        if col not in df.columns:
            continue
        summary['empty_string_counts'][col] = int((df[col].astype(str).str.strip() == '').sum())
        summary['distinct_counts'][col] = int(df[col].nunique())

    return summary
