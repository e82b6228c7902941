"""
Custom exception classes for the location cascade application.

This module defines custom exception classes for the errors that can occur
while loading hierarchy data, driving the cascade controller, and submitting
a selection.
"""

from typing import Optional, List, Dict, Any


class LocationCascadeError(Exception):
    """Base exception class for all location cascade errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        """
        Initialize the base cascade error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information about the error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'context': self.context
        }


class ValidationError(LocationCascadeError):
    """Exception raised for validation errors."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 invalid_value: Any = None, validation_rules: Optional[List[str]] = None):
        """
        Initialize validation error.

        Args:
            message: Human-readable error message
            field_name: Name of the field that failed validation
            invalid_value: The invalid value that caused the error
            validation_rules: List of validation rules that were violated
        """
        context = {
            'field_name': field_name,
            'invalid_value': str(invalid_value) if invalid_value is not None else None,
            'validation_rules': validation_rules or []
        }
        super().__init__(message, error_code='VALIDATION_ERROR', context=context)
        self.field_name = field_name
        self.invalid_value = invalid_value
        self.validation_rules = validation_rules or []


class IncompleteSelectionError(ValidationError):
    """Exception raised when a submission is attempted before every level is selected."""

    def __init__(self, message: str, missing_levels: Optional[List[str]] = None,
                 field_errors: Optional[Dict[str, str]] = None):
        """
        Initialize incomplete selection error.

        Args:
            message: Human-readable error message
            missing_levels: Field names of the levels that are still unselected
            field_errors: Mapping of field name to the required message to display
        """
        missing_levels = missing_levels or []
        super().__init__(
            message=message,
            field_name=missing_levels[0] if missing_levels else None,
            validation_rules=['required']
        )
        self.error_code = 'INCOMPLETE_SELECTION'
        self.context.update({
            'missing_levels': missing_levels,
            'field_errors': field_errors or {}
        })
        self.missing_levels = missing_levels
        self.field_errors = field_errors or {}


class HierarchyValidationError(ValidationError):
    """Exception raised when a selection or dataset breaks the hierarchy structure."""

    def __init__(self, message: str, hierarchy_level: Optional[str] = None,
                 parent_level: Optional[str] = None, child_level: Optional[str] = None,
                 validation_type: str = 'consistency'):
        """
        Initialize hierarchy validation error.

        Args:
            message: Human-readable error message
            hierarchy_level: The hierarchical level where validation failed
            parent_level: Parent level in the hierarchy
            child_level: Child level in the hierarchy
            validation_type: Type of validation that failed (consistency, completeness, structure)
        """
        super().__init__(
            message=message,
            field_name=hierarchy_level,
            validation_rules=[f'hierarchy_{validation_type}']
        )
        self.context.update({
            'hierarchy_level': hierarchy_level,
            'parent_level': parent_level,
            'child_level': child_level,
            'validation_type': validation_type
        })
        self.hierarchy_level = hierarchy_level
        self.parent_level = parent_level
        self.child_level = child_level
        self.validation_type = validation_type


class DataLoadError(LocationCascadeError):
    """Exception raised for hierarchy data loading errors."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 line_number: Optional[int] = None, original_error: Optional[Exception] = None):
        """
        Initialize data load error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            line_number: Line number where the error occurred
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'line_number': line_number,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='DATA_LOAD_ERROR', context=context)
        self.file_path = file_path
        self.line_number = line_number
        self.original_error = original_error


class FileAccessError(LocationCascadeError):
    """Exception raised for file access and I/O errors."""

    def __init__(self, message: str, file_path: str, operation: str,
                 original_error: Optional[Exception] = None):
        """
        Initialize file access error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            operation: Type of operation that failed (read, parse, etc.)
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'operation': operation,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='FILE_ACCESS_ERROR', context=context)
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigurationError(LocationCascadeError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Any = None, valid_values: Optional[List[Any]] = None):
        """
        Initialize configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that has invalid value
            config_value: Invalid configuration value
            valid_values: List of valid values for the configuration key
        """
        context = {
            'config_key': config_key,
            'config_value': str(config_value) if config_value is not None else None,
            'valid_values': [str(v) for v in valid_values] if valid_values else None
        }
        super().__init__(message, error_code='CONFIGURATION_ERROR', context=context)
        self.config_key = config_key
        self.config_value = config_value
        self.valid_values = valid_values or []


class HierarchyLookupError(LocationCascadeError):
    """Exception raised when the hierarchy data source fails to answer a lookup."""

    def __init__(self, message: str, hierarchy_level: Optional[str] = None,
                 ancestor_path: Optional[List[str]] = None,
                 original_error: Optional[Exception] = None):
        """
        Initialize hierarchy lookup error.

        Args:
            message: Human-readable error message
            hierarchy_level: Level whose options were being fetched
            ancestor_path: Selected values above that level
            original_error: Original exception raised by the data source
        """
        context = {
            'hierarchy_level': hierarchy_level,
            'ancestor_path': list(ancestor_path or []),
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='HIERARCHY_LOOKUP_ERROR', context=context)
        self.hierarchy_level = hierarchy_level
        self.ancestor_path = list(ancestor_path or [])
        self.original_error = original_error


# Utility functions for exception handling

def create_incomplete_selection_error(missing_levels: List[str],
                                      field_errors: Dict[str, str]) -> IncompleteSelectionError:
    """
    Create a standardized incomplete selection error.

    Args:
        missing_levels: Field names of unselected levels, in hierarchical order
        field_errors: Mapping of field name to required message

    Returns:
        IncompleteSelectionError instance
    """
    message = f"Cannot submit location: missing {', '.join(missing_levels)}"

    return IncompleteSelectionError(
        message=message,
        missing_levels=missing_levels,
        field_errors=field_errors
    )


def create_lookup_error(hierarchy_level: str, ancestor_path: List[str],
                        original_error: Exception) -> HierarchyLookupError:
    """
    Create a standardized hierarchy lookup error.

    Args:
        hierarchy_level: Level whose options were being fetched
        ancestor_path: Selected values above that level
        original_error: Original exception

    Returns:
        HierarchyLookupError instance
    """
    path_desc = ' / '.join(ancestor_path) if ancestor_path else '<root>'
    message = f"Lookup of {hierarchy_level} options under {path_desc} failed: {str(original_error)}"

    return HierarchyLookupError(
        message=message,
        hierarchy_level=hierarchy_level,
        ancestor_path=ancestor_path,
        original_error=original_error
    )


def is_recoverable_error(error: Exception) -> bool:
    """
    Determine if an error is recoverable.

    Args:
        error: Exception to check

    Returns:
        True if the error is potentially recoverable, False otherwise
    """
    # Lookups degrade to an empty option list
    if isinstance(error, HierarchyLookupError):
        return True

    if isinstance(error, ValidationError):
        return True

    # Broken configuration or unreadable data leave nothing to fall back on
    if isinstance(error, (ConfigurationError, DataLoadError, FileAccessError)):
        return False

    return True


def get_error_severity(error: Exception) -> str:
    """
    Get the severity level of an error.

    Args:
        error: Exception to evaluate

    Returns:
        Severity level string (low, medium, high, critical)
    """
    if isinstance(error, ConfigurationError):
        return 'critical'
    elif isinstance(error, (DataLoadError, FileAccessError)):
        return 'high'
    elif isinstance(error, HierarchyLookupError):
        return 'medium'
    elif isinstance(error, ValidationError):
        return 'low'
    else:
        return 'medium'
