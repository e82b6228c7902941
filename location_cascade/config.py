"""
Configuration management for the location cascade application.

This module provides the dataclass holding the data file, option ordering,
submission, matching and logging settings.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import os

from .exceptions import ConfigurationError


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class SelectorConfig:
    """Configuration class for the location selector."""

    # Hierarchy file (CSV or nested JSON); None uses the bundled dataset
    data_file: Optional[str] = None

    # Option ordering
    sort_options: bool = False

    # Submission behaviour
    reset_on_submit: bool = True

    # Free-text option matching
    fuzzy_threshold: int = 85
    max_suggestions: int = 5

    show_progress: bool = False

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_paths()
        self._validate_matching()
        self._validate_logging()

    def _validate_paths(self):
        """Validate that the hierarchy file exists when one is given."""
        if self.data_file is not None and not os.path.exists(self.data_file):
            raise ConfigurationError(
                f"Hierarchy data file not found: {self.data_file}",
                config_key='data_file',
                config_value=self.data_file
            )

    def _validate_matching(self):
        """Validate fuzzy matching settings."""
        if not 0 <= self.fuzzy_threshold <= 100:
            raise ConfigurationError(
                f"Fuzzy threshold must be between 0 and 100: {self.fuzzy_threshold}",
                config_key='fuzzy_threshold',
                config_value=self.fuzzy_threshold
            )

        if self.max_suggestions < 0:
            raise ConfigurationError(
                f"Maximum suggestions cannot be negative: {self.max_suggestions}",
                config_key='max_suggestions',
                config_value=self.max_suggestions
            )

    def _validate_logging(self):
        """Normalise and validate the log level name."""
        level = str(self.log_level).upper()
        if level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                config_key='log_level',
                config_value=self.log_level,
                valid_values=VALID_LOG_LEVELS
            )
        self.log_level = level

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'SelectorConfig':
        """Create configuration from dictionary."""
        return cls(**config_dict)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return {
            'data_file': self.data_file,
            'sort_options': self.sort_options,
            'reset_on_submit': self.reset_on_submit,
            'fuzzy_threshold': self.fuzzy_threshold,
            'max_suggestions': self.max_suggestions,
            'show_progress': self.show_progress,
            'log_level': self.log_level,
            'log_file': self.log_file
        }
