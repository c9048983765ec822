"""
Error types and error handling utilities.

This module defines the exceptions raised by repo-builder, the collector
used where independent operations must all be attempted, and reusable
logging helpers for reporting failures.
"""

import logging
import sys
import traceback
from functools import wraps
from typing import Any, Callable, List, Optional, TypeVar

import httpx


# Type variable for generic function decorators
F = TypeVar("F", bound=Callable[..., Any])


# ============================================================================
# Exceptions
# ============================================================================


class RepoBuilderError(Exception):
    """Base class for all repo-builder errors."""


class RepositoryBuildError(RepoBuilderError):
    """A step of the repository rebuild pipeline failed."""


class CommandError(RepoBuilderError):
    """
    An external command exited with a non-zero status.

    Attributes:
        returncode: Exit status of the command
        output: Captured output, kept for diagnostics
    """

    def __init__(self, message: str, returncode: int, output: str = "") -> None:
        super().__init__(f"{message}: [{output}]" if output else message)
        self.returncode = returncode
        self.output = output


class SigningError(RepoBuilderError):
    """Signing a file failed."""


class ConfigurationError(RepoBuilderError):
    """The configuration can't support the requested operation."""


class TemplateNotFoundError(ConfigurationError):
    """No Release template is defined for an edition."""


class ReleaseTemplateError(ConfigurationError):
    """A Release template could not be rendered."""


class AggregateError(RepoBuilderError):
    """
    Several independent operations failed.

    Attributes:
        errors: The collected errors, in the order they were added
    """

    def __init__(self, errors: List[BaseException]) -> None:
        self.errors = list(errors)
        if len(self.errors) == 1:
            message = str(self.errors[0])
        else:
            details = "; ".join(f"[{i}] {err}" for i, err in enumerate(self.errors, start=1))
            message = f"{len(self.errors)} errors occurred: {details}"
        super().__init__(message)


# ============================================================================
# Error Collection
# ============================================================================


class ErrorCollector:
    """
    Collect errors from independent operations and resolve them to one.

    Example:
        >>> collector = ErrorCollector()
        >>> collector.add(None)
        >>> collector.resolve() is None
        True
    """

    def __init__(self) -> None:
        self._errors: List[BaseException] = []

    def add(self, error: Optional[BaseException]) -> None:
        """Add an error; None is ignored."""
        if error is not None:
            self._errors.append(error)

    @property
    def has_errors(self) -> bool:
        """Whether any error was collected."""
        return bool(self._errors)

    @property
    def errors(self) -> List[BaseException]:
        """Copy of the collected errors."""
        return list(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def resolve(self) -> Optional[AggregateError]:
        """
        Combine the collected errors.

        Returns:
            None if nothing was collected, otherwise an AggregateError
            listing every error in the order it was added
        """
        if not self._errors:
            return None
        return AggregateError(self._errors)

    def check(self) -> None:
        """
        Raise the resolved error, if any.

        Raises:
            AggregateError: If at least one error was collected
        """
        error = self.resolve()
        if error is not None:
            raise error


# ============================================================================
# Logging Helpers
# ============================================================================


def handle_http_error(error: httpx.HTTPError, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle HTTP errors with standardized logging.

    Args:
        error: The HTTP error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    error_message = str(error)

    # Provide helpful messages based on status code
    if "403" in error_message:
        logging.error(
            "Authentication failed during %s: The signing key is not available for this token. "
            "Please check the notary settings in the configuration file.",
            operation,
        )
    elif "401" in error_message:
        logging.error(
            "Authentication failed during %s: Invalid credentials. "
            "Please check the notary auth_token_file in the configuration file.",
            operation,
        )
    elif "404" in error_message:
        logging.error("Resource not found during %s: %s", operation, error)
    elif "500" in error_message or "502" in error_message or "503" in error_message:
        logging.error("Server error during %s: %s", operation, error)
    else:
        logging.error("HTTP error during %s: %s", operation, error)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def handle_generic_error(error: Exception, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle generic errors with standardized logging.

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    if isinstance(error, RepoBuilderError):
        logging.error("Failed %s: %s", operation, error)
    else:
        logging.error("Unexpected error during %s: %s", operation, error)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def with_error_handling(
    operation: str, *, exit_on_error: bool = False, exit_code: int = 1, reraise: bool = True
) -> Callable[[F], F]:
    """
    Decorator to wrap functions with consistent error handling.

    Args:
        operation: Description of the operation for logging
        exit_on_error: If True, call sys.exit on error
        exit_code: Exit code to use if exit_on_error is True
        reraise: If True, reraise the exception after logging (unless exiting)

    Returns:
        Decorator function

    Example:
        @with_error_handling("rebuild repository", exit_on_error=True)
        def rebuild():
            # Implementation
            pass
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except httpx.HTTPError as e:
                handle_http_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise
            except Exception as e:
                handle_generic_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise

        return wrapper  # type: ignore[return-value]

    return decorator


def log_and_exit(message: str, exit_code: int = 1) -> None:
    """
    Log an error message and exit the program.

    Args:
        message: Error message to log
        exit_code: Exit code (default: 1)
    """
    logging.error(message)
    sys.exit(exit_code)


__all__ = [
    "RepoBuilderError",
    "RepositoryBuildError",
    "CommandError",
    "SigningError",
    "ConfigurationError",
    "TemplateNotFoundError",
    "ReleaseTemplateError",
    "AggregateError",
    "ErrorCollector",
    "handle_http_error",
    "handle_generic_error",
    "with_error_handling",
    "log_and_exit",
]
