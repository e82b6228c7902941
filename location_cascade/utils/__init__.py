"""
Utility functions and helpers.
"""

from .data_utils import (
    safe_string_conversion,
    optional_string,
    normalize_key,
    clean_dataframe_strings,
    detect_duplicates,
    get_data_quality_summary
)

__all__ = [
    'safe_string_conversion',
    'optional_string',
    'normalize_key',
    'clean_dataframe_strings',
    'detect_duplicates',
    'get_data_quality_summary'
]
