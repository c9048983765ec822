"""
Logging utilities for consistent operation logging.

This module provides standardized logging functions used by repository
jobs and the CLI summary.
"""

import logging
from typing import List, Optional

from .constants import MAX_LOG_LINE_LENGTH


def log_operation_start(operation: str, **details) -> None:
    """
    Log the start of an operation with standardized format.

    Args:
        operation: Description of the operation
        **details: Additional details to log as key=value pairs
    """
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        logging.info("Starting %s (%s)", operation, detail_str)
    else:
        logging.info("Starting %s", operation)


def log_operation_complete(operation: str, **details) -> None:
    """
    Log the completion of an operation with standardized format.

    Args:
        operation: Description of the operation
        **details: Additional details to log as key=value pairs
    """
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        logging.info("Completed %s (%s)", operation, detail_str)
    else:
        logging.info("Completed %s", operation)


def format_count_with_unit(count: int, unit: str, *, plural: Optional[str] = None) -> str:
    """
    Format a count with proper pluralization.

    Examples:
        >>> format_count_with_unit(1, "job")
        '1 job'
        >>> format_count_with_unit(3, "job")
        '3 jobs'
        >>> format_count_with_unit(2, "repository", plural="repositories")
        '2 repositories'
    """
    if count == 1:
        return f"{count} {unit}"
    return f"{count} {plural or unit + 's'}"


def log_summary_separator(title: Optional[str] = None, width: int = 80, level: int = logging.WARNING) -> None:
    """
    Log a visual separator line with optional title.

    Args:
        title: Optional title to display in separator
        width: Width of separator line
        level: Logging level to use
    """
    logging.log(level, "=" * width)
    if title:
        logging.log(level, title)
        logging.log(level, "=" * width)


def log_list_items(items: List[str], prefix: str = "  - ", level: int = logging.INFO) -> None:
    """
    Log a list of items with consistent formatting.

    Args:
        items: List of items to log
        prefix: Prefix for each item
        level: Logging level to use
    """
    for item in items:
        logging.log(level, "%s%s", prefix, item)


def log_command_output(
    command: str, output: str, *, level: int = logging.DEBUG, max_line_length: int = MAX_LOG_LINE_LENGTH
) -> None:
    """
    Log the captured output of an external command line by line.

    Lines longer than ``max_line_length`` are cut and marked with "...".

    Args:
        command: Program name used as the line prefix
        output: Captured output
        level: Logging level to use
        max_line_length: Longest line logged unchanged
    """
    for line in output.splitlines():
        if len(line) > max_line_length:
            line = line[: max_line_length - 3] + "..."
        logging.log(level, "[%s] %s", command, line)


__all__ = [
    "log_operation_start",
    "log_operation_complete",
    "format_count_with_unit",
    "log_summary_separator",
    "log_list_items",
    "log_command_output",
]
