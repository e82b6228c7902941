#!/usr/bin/env python3
"""
Hierarchy File Validation Script

This script checks that a hierarchy CSV file has the expected columns and
reports data quality issues before it is used by the location selector.

Usage:
    python examples/validate_hierarchy.py --data rwanda_locations.csv
"""

import argparse
import sys
from pathlib import Path
import pandas as pd

from location_cascade.hierarchy.hierarchy_config import Level, LEVEL_COLUMNS


class HierarchyFileValidator:
    """Validates hierarchy CSV files for the location selector."""

    def __init__(self, verbose=False):
        """Initialize validator."""
        self.verbose = verbose
        self.errors = []
        self.warnings = []

    def log(self, message, level='INFO'):
        """Log a message."""
        if self.verbose or level in ['ERROR', 'WARNING']:
            prefix = {
                'INFO': '✓',
                'WARNING': '⚠',
                'ERROR': '✗'
            }.get(level, ' ')
            print(f"{prefix} {message}")

    def validate_file_exists(self, file_path: str) -> bool:
        """Validate that file exists and is readable."""
        self.log(f"Checking hierarchy file: {file_path}")

        if not Path(file_path).is_file():
            self.errors.append(f"Hierarchy file not found: {file_path}")
            self.log("Hierarchy file not found", 'ERROR')
            return False

        self.log("Hierarchy file exists", 'INFO')
        return True

    def validate_csv_format(self, file_path: str):
        """Validate CSV file can be read."""
        try:
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
            self.log(f"Successfully read {len(df)} rows", 'INFO')
            return df
        except pd.errors.EmptyDataError:
            self.errors.append("Hierarchy file is empty")
            self.log("File is empty", 'ERROR')
            return None
        except pd.errors.ParserError as e:
            self.errors.append(f"Hierarchy file has parsing errors: {e}")
            self.log(f"CSV parsing error: {e}", 'ERROR')
            return None

    def validate_columns(self, df: pd.DataFrame) -> bool:
        """Validate that every level column is present."""
        missing = [col for col in LEVEL_COLUMNS if col not in df.columns]
        if missing:
            self.errors.append(f"Missing required columns: {', '.join(missing)}")
            self.log(f"Missing required columns: {', '.join(missing)}", 'ERROR')
            return False

        extra = [col for col in df.columns if col not in LEVEL_COLUMNS]
        if extra:
            self.warnings.append(f"Extra columns will be ignored: {', '.join(extra)}")
            self.log(f"Extra columns found: {', '.join(extra)}", 'WARNING')

        self.log("All level columns present", 'INFO')
        return True

    def validate_blank_values(self, df: pd.DataFrame):
        """Report rows with a blank level; the loader drops them."""
        for col in LEVEL_COLUMNS:
            blank_count = int((df[col].str.strip() == '').sum())
            if blank_count:
                self.warnings.append(f"Column '{col}' has {blank_count} blank value(s)")
                self.log(f"Column '{col}' has {blank_count} blank value(s)", 'WARNING')

    def validate_duplicates(self, df: pd.DataFrame):
        """Report repeated village paths; the loader keeps the first."""
        dup_count = int(df.duplicated(subset=LEVEL_COLUMNS).sum())
        if dup_count:
            self.warnings.append(f"{dup_count} duplicate village path(s)")
            self.log(f"Found {dup_count} duplicate village path(s)", 'WARNING')
        else:
            self.log("No duplicate village paths found", 'INFO')

    def report_shared_names(self, df: pd.DataFrame):
        """Count names that occur under more than one parent at the same level."""
        for level in Level:
            if level is Level.PROVINCE:
                continue
            parent_columns = LEVEL_COLUMNS[:level]
            parents_per_name = df.groupby(level.field_name)[parent_columns].apply(
                lambda group: len(group.drop_duplicates())
            )
            shared = int((parents_per_name > 1).sum())
            if shared:
                self.log(f"{shared} {level.field_name} name(s) appear under several parents", 'INFO')

    def validate_file(self, file_path: str) -> bool:
        """Run every check on one hierarchy file."""
        print("\n" + "="*60)
        print("VALIDATING HIERARCHY FILE")
        print("="*60)

        if not self.validate_file_exists(file_path):
            return False

        df = self.validate_csv_format(file_path)
        if df is None or not self.validate_columns(df):
            return False

        self.validate_blank_values(df)
        self.validate_duplicates(df)
        self.report_shared_names(df)
        return True

    def print_summary(self) -> bool:
        """Print validation summary."""
        print("\n" + "="*60)
        print("VALIDATION SUMMARY")
        print("="*60)

        if self.errors:
            print(f"\n✗ Found {len(self.errors)} error(s):")
            for i, error in enumerate(self.errors, 1):
                print(f"  {i}. {error}")

        if self.warnings:
            print(f"\n⚠ Found {len(self.warnings)} warning(s):")
            for i, warning in enumerate(self.warnings, 1):
                print(f"  {i}. {warning}")

        if self.errors:
            print("\n✗ Validation failed!")
            return False

        print("\n✓ No critical errors found.")
        return True


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Validate a hierarchy CSV file for the location selector"
    )
    parser.add_argument("--data", required=True, help="Path to hierarchy CSV file")
    parser.add_argument("--verbose", action="store_true", help="Show detailed validation output")
    args = parser.parse_args()

    validator = HierarchyFileValidator(verbose=args.verbose)
    validator.validate_file(args.data)
    sys.exit(0 if validator.print_summary() else 1)


if __name__ == "__main__":
    main()
