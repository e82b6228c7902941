"""
Logging configuration for the location cascade application.

This module provides the logger wrapper used by the CLI, with configurable
levels, console and optional file output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


class SelectorLogger:
    """Custom logger for location selection sessions."""

    def __init__(self, name: str = "location_cascade", level: str = "INFO",
                 log_file: Optional[str] = None):
        """
        Initialize the selector logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for log output
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear any existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # stdout is reserved for the submitted JSON
        console_handler = logging.StreamHandler(sys.stderr)
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
        self.logger.info(message)

    def debug(self, message: str):
        self.logger.debug(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str):
        self.logger.error(message)

    def critical(self, message: str):
        self.logger.critical(message)

    def log_session_start(self, data_source: str, level_counts: dict):
        """Log the start of a selection session with the size of each level."""
        self.info("-" * 40)
        self.info("LOCATION SELECTION STARTED")
        self.info(f"Hierarchy data: {data_source}")
        for name, count in level_counts.items():
            self.info(f"  {name}: {count}")

    def log_session_end(self, error_summary: dict):
        """Log the outcome of a session; failed lookups are reported as a warning."""
        if error_summary["total_errors"]:
            self.warning(
                f"{error_summary['total_errors']} hierarchy lookup error(s) this session: "
                f"{error_summary['error_counts']}"
            )
        self.info("LOCATION SELECTION FINISHED")

    def log_submission(self, location: dict):
        """Log a submitted location."""
        path = ' / '.join(location.values())
        self.info(f"Location submitted: {path}")


def setup_logging(config) -> SelectorLogger:
    """
    Set up logging based on configuration.

    Args:
        config: SelectorConfig instance

    Returns:
        Configured SelectorLogger instance
    """
    return SelectorLogger(
        name="location_cascade",
        level=config.log_level,
        log_file=config.log_file
    )
