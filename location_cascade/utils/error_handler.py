"""
Error handling utilities for the location cascade application.

This module provides the error handler the controller routes failed
hierarchy lookups through, plus helpers for wrapping file operations and
logging error details.
"""

import time
import logging
from typing import Callable, Any, Optional, Dict, Union
from pathlib import Path

from ..exceptions import FileAccessError, is_recoverable_error, get_error_severity


class ErrorHandler:
    """
    Logs errors by severity and degrades recoverable ones.

    The only registered recovery is 'empty_options', which turns a failed
    lookup into an empty option list. Counts per error type are kept for the
    end-of-session report.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.error_counts: Dict[str, int] = {}
        self.recovery_strategies = {
            'empty_options': self._empty_options_strategy
        }

    def handle_error(self, error: Exception, context: Dict[str, Any],
                     recovery_strategy: str = 'empty_options') -> Any:
        """
        Log an error and recover from it.

        Args:
            error: Exception that occurred
            context: Context information about the error
            recovery_strategy: Name of a registered recovery strategy

        Returns:
            Result of the recovery strategy

        Raises:
            The error itself if it is not recoverable or the strategy is unknown
        """
        self._log_error(error, context)

        error_type = type(error).__name__
        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1

        if not is_recoverable_error(error):
            self.logger.error(f"Non-recoverable error: {error}")
            raise error

        strategy = self.recovery_strategies.get(recovery_strategy)
        if strategy is None:
            self.logger.error(f"No recovery strategy named '{recovery_strategy}'")
            raise error
        return strategy(error, context)

    def _log_error(self, error: Exception, context: Dict[str, Any]):
        severity = get_error_severity(error)
        error_info = {
            'error_type': type(error).__name__,
            'message': str(error),
            'severity': severity,
            'context': context
        }
        if hasattr(error, 'to_dict'):
            error_info.update(error.to_dict())

        if severity == 'critical':
            self.logger.critical(f"Critical error: {error_info}")
        elif severity == 'high':
            self.logger.error(f"High severity error: {error_info}")
        elif severity == 'medium':
            self.logger.warning(f"Medium severity error: {error_info}")
        else:
            self.logger.info(f"Low severity error: {error_info}")

    def _empty_options_strategy(self, error: Exception, context: Dict[str, Any]) -> list:
        level = context.get('hierarchy_level', 'unknown level')
        self.logger.warning(f"Showing no {level} options after lookup failure: {error}")
        return []

    def get_error_summary(self) -> Dict[str, Any]:
        """Total and per-type counts of the errors handled so far."""
        return {
            'total_errors': sum(self.error_counts.values()),
            'error_counts': dict(self.error_counts)
        }


def safe_file_operation(operation: Callable, file_path: Union[str, Path],
                        operation_name: str,
                        logger: Optional[logging.Logger] = None) -> Any:
    """
    Perform a file operation, converting IO failures into FileAccessError.

    Args:
        operation: Function to perform the file operation
        file_path: Path to the file
        operation_name: Name of the operation for logging
        logger: Optional logger instance

    Returns:
        Result of the file operation

    Raises:
        FileAccessError: If the operation fails
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    file_path = Path(file_path)
    logger.debug(f"Attempting {operation_name} on {file_path}")

    try:
        return operation()
    except PermissionError as e:
        logger.error(f"Permission denied during {operation_name} on {file_path}")
        raise FileAccessError(
            f"Permission denied during {operation_name}: {file_path}",
            file_path=str(file_path),
            operation=operation_name,
            original_error=e
        ) from e
    except OSError as e:
        logger.error(f"{operation_name} failed on {file_path}: {e}")
        raise FileAccessError(
            f"Failed to {operation_name} file: {file_path}",
            file_path=str(file_path),
            operation=operation_name,
            original_error=e
        ) from e


def create_error_context(operation: str, **kwargs) -> Dict[str, Any]:
    """
    Create standardized error context dictionary.

    Args:
        operation: Name of the operation being performed
        **kwargs: Additional context information

    Returns:
        Dictionary with error context information
    """
    context = {
        'operation': operation,
        'timestamp': time.time(),
    }
    context.update(kwargs)
    return context


def log_error_details(logger: logging.Logger, error: Exception,
                      context: Optional[Dict[str, Any]] = None):
    """
    Log detailed error information.

    Args:
        logger: Logger instance to use
        error: Exception to log
        context: Optional context information
    """
    error_details = {
        'error_type': type(error).__name__,
        'error_message': str(error),
        'severity': get_error_severity(error)
    }

    if hasattr(error, 'to_dict'):
        error_details.update(error.to_dict())

    if context:
        error_details['context'] = context

    severity = error_details.get('severity', 'medium')
    if severity == 'critical':
        logger.critical(f"Critical error occurred: {error_details}")
    elif severity == 'high':
        logger.error(f"High severity error: {error_details}")
    elif severity == 'medium':
        logger.warning(f"Medium severity error: {error_details}")
    else:
        logger.info(f"Low severity error: {error_details}")
