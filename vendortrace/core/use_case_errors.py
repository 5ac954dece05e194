"""Use case error handling utilities.

Use cases catch exceptions internally and return error responses, so
callers check response.success rather than catching every exception type.
KeyboardInterrupt and SystemExit are never caught.
"""

import logging

from vendortrace.domain.exceptions import VendorTraceError

logger = logging.getLogger(__name__)


def format_error_message(exception: Exception, operation_name: str) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation for error messages (e.g., "matching").

    Returns:
        User-friendly error message string.
    """
    if isinstance(exception, VendorTraceError):
        return exception.message
    elif isinstance(exception, OSError):
        return (
            f"I/O error: {exception}. "
            "Check file permissions, disk space, and filesystem access."
        )
    elif isinstance(exception, (ValueError, RuntimeError)):
        return f"{operation_name.capitalize()} error: {exception}"
    else:
        return f"Internal error during {operation_name}. Check logs for details."


def log_use_case_error(exception: Exception, operation_name: str) -> None:
    """Log an exception from a use case with appropriate severity.

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation for log messages.
    """
    if isinstance(exception, VendorTraceError):
        logger.error(str(exception))
    elif isinstance(exception, (OSError, ValueError, RuntimeError)):
        logger.error(f"Error during {operation_name}: {exception}")
    else:
        logger.exception(f"Unexpected error during {operation_name}")
