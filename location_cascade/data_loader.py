"""
Data loading and validation module.

This module provides the DataLoader class for loading the administrative
hierarchy from CSV or nested JSON files with validation and error handling.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from .exceptions import DataLoadError, FileAccessError, HierarchyValidationError
from .hierarchy.hierarchy_config import LEVEL_COLUMNS
from .utils.data_utils import (
    clean_dataframe_strings,
    detect_duplicates,
    get_data_quality_summary
)
from .utils.error_handler import (
    safe_file_operation,
    create_error_context,
    log_error_details
)


DEFAULT_DATA_FILE = Path(__file__).parent / 'data' / 'rwanda_locations.csv'


class DataLoader:
    """
    Handles loading and validation of hierarchy tables.

    A hierarchy table has one row per village with the columns province,
    district, sector, cell and village. Nested JSON files are flattened into
    the same shape.
    """

    SUPPORTED_SUFFIXES = ('.csv', '.json')

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the DataLoader.

        Args:
            logger: Optional logger instance for logging operations
        """
        self.logger = logger or logging.getLogger(__name__)

    def load(self, file_path: Union[str, Path]) -> pd.DataFrame:
        """
        Load a hierarchy table from a CSV or JSON file.

        Args:
            file_path: Path to the hierarchy file

        Returns:
            DataFrame with one cleaned, unique row per village path

        Raises:
            FileAccessError: If the file is missing or unreadable
            DataLoadError: If the file cannot be parsed
            HierarchyValidationError: If no usable rows remain after cleaning
        """
        file_path = str(file_path)
        self.logger.info(f"Loading hierarchy from: {file_path}")

        path_obj = Path(file_path)
        if not path_obj.exists():
            raise FileAccessError(
                f"Hierarchy file not found: {file_path}",
                file_path=file_path,
                operation="read"
            )

        if not path_obj.is_file():
            raise FileAccessError(
                f"Path is not a file: {file_path}",
                file_path=file_path,
                operation="read"
            )

        suffix = path_obj.suffix.lower()
        if suffix not in self.SUPPORTED_SUFFIXES:
            raise DataLoadError(
                f"Unsupported hierarchy file type '{suffix}', expected one of "
                f"{', '.join(self.SUPPORTED_SUFFIXES)}",
                file_path=file_path
            )

        try:
            if suffix == '.csv':
                df = safe_file_operation(
                    operation=lambda: pd.read_csv(file_path, dtype=str, keep_default_na=False),
                    file_path=file_path,
                    operation_name="read CSV",
                    logger=self.logger
                )
            else:
                nested = safe_file_operation(
                    operation=lambda: self._read_json(file_path),
                    file_path=file_path,
                    operation_name="read JSON",
                    logger=self.logger
                )
                df = self.flatten_nested(nested)
        except (FileAccessError, DataLoadError, HierarchyValidationError):
            raise
        except pd.errors.EmptyDataError as e:
            raise DataLoadError(
                "Hierarchy file is empty or contains no valid data",
                file_path=file_path,
                original_error=e
            ) from e
        except pd.errors.ParserError as e:
            raise DataLoadError(
                f"Error parsing hierarchy CSV file: {str(e)}",
                file_path=file_path,
                original_error=e
            ) from e
        except json.JSONDecodeError as e:
            raise DataLoadError(
                f"Error parsing hierarchy JSON file: {e.msg}",
                file_path=file_path,
                line_number=e.lineno,
                original_error=e
            ) from e
        except Exception as e:
            context = create_error_context(
                operation="load_hierarchy",
                file_path=file_path,
                error_type=type(e).__name__
            )
            log_error_details(self.logger, e, context)

            raise DataLoadError(
                f"Unexpected error loading hierarchy from {file_path}: {str(e)}",
                file_path=file_path,
                original_error=e
            ) from e

        self.logger.info(f"Loaded {len(df)} hierarchy rows")
        return self.prepare(df, source=file_path)

    @staticmethod
    def _read_json(file_path: str) -> Any:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def from_records(self, records: Iterable[Union[Mapping[str, Any], Iterable[Any]]]) -> pd.DataFrame:
        """
        Build a hierarchy table from in-memory rows.

        Args:
            records: Mappings keyed by level name, or 5-item sequences in level order

        Returns:
            Cleaned hierarchy DataFrame
        """
        rows = []
        for record in records:
            if isinstance(record, Mapping):
                rows.append({col: record.get(col) for col in LEVEL_COLUMNS})
            else:
                rows.append(dict(zip(LEVEL_COLUMNS, record)))

        return self.prepare(pd.DataFrame(rows, columns=LEVEL_COLUMNS), source='records')

    def flatten_nested(self, nested: Any) -> pd.DataFrame:
        """
        Flatten a nested province -> district -> sector -> cell -> villages mapping.

        Args:
            nested: Nested dictionaries, with a list of village names at the bottom

        Returns:
            DataFrame with one row per village path (uncleaned)

        Raises:
            DataLoadError: If the structure is not nested mappings ending in lists
        """
        if not isinstance(nested, Mapping):
            raise DataLoadError("Hierarchy JSON must be an object keyed by province")

        rows: List[Dict[str, Any]] = []

        def walk(node: Any, path: List[str]):
            depth = len(path)
            if depth == len(LEVEL_COLUMNS) - 1:
                if not isinstance(node, list):
                    raise DataLoadError(
                        f"Expected a list of villages under {' / '.join(path)}"
                    )
                for village in node:
                    rows.append(dict(zip(LEVEL_COLUMNS, path + [village])))
                return
            if not isinstance(node, Mapping):
                raise DataLoadError(
                    f"Expected an object of {LEVEL_COLUMNS[depth]} names under "
                    f"{' / '.join(path) or 'the root'}"
                )
            for name, child in node.items():
                walk(child, path + [name])

        walk(nested, [])
        return pd.DataFrame(rows, columns=LEVEL_COLUMNS)

    def prepare(self, df: pd.DataFrame, source: str = 'dataframe') -> pd.DataFrame:
        """
        Validate and clean a raw hierarchy table.

        Args:
            df: Raw DataFrame
            source: Description of where the data came from, for messages

        Returns:
            Cleaned DataFrame restricted to the level columns

        Raises:
            DataLoadError: If required columns are missing
            HierarchyValidationError: If no complete rows remain
        """
        self._validate_columns(df, source)

        df = clean_dataframe_strings(df[LEVEL_COLUMNS], LEVEL_COLUMNS)
        self.logger.info(f"Hierarchy data quality: {get_data_quality_summary(df, LEVEL_COLUMNS)}")

        blank_mask = (df[LEVEL_COLUMNS] == '').any(axis=1)
        blank_count = int(blank_mask.sum())
        if blank_count:
            self.logger.warning(
                f"DATA QUALITY: dropping {blank_count} row(s) with blank levels from {source}"
            )
            df = df[~blank_mask]

        duplicates = detect_duplicates(df, LEVEL_COLUMNS)
        if not duplicates.empty:
            self.logger.warning(
                f"DATA QUALITY: dropping {len(duplicates)} duplicate village path(s) from {source}"
            )
            df = df.drop_duplicates(subset=LEVEL_COLUMNS, keep='first')

        if df.empty:
            raise HierarchyValidationError(
                f"No complete province/district/sector/cell/village rows in {source}",
                hierarchy_level='village',
                validation_type='completeness'
            )

        df = df.reset_index(drop=True)
        self.logger.info(f"Kept {len(df)} village path(s) from {source}")
        return df

    def _validate_columns(self, df: pd.DataFrame, source: str):
        """Validate that every level column is present."""
        missing = [col for col in LEVEL_COLUMNS if col not in df.columns]
        if missing:
            raise DataLoadError(
                f"Hierarchy data from {source} is missing required columns: {', '.join(missing)}",
                file_path=source
            )
