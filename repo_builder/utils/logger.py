"""
Logging configuration for repo-builder.

Repository jobs run in worker threads, so the default format includes the
thread name to keep the output of concurrent jobs apart.
"""

import logging
from typing import Optional, TextIO

# ============================================================================
# Logging Configuration Constants
# ============================================================================

# Default width for log message wrapping
DEFAULT_LOG_WIDTH = 120

DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(threadName)s] %(message)s"

# ============================================================================
# Custom Formatters
# ============================================================================


class WrappingFormatter(logging.Formatter):
    """
    Formatter that wraps long log messages at a fixed width.

    Command lines and repository paths easily exceed a terminal line, so
    messages longer than ``width`` are re-flowed on word boundaries.
    """

    def __init__(
        self, fmt: Optional[str] = None, datefmt: Optional[str] = None, width: int = DEFAULT_LOG_WIDTH
    ) -> None:
        super().__init__(fmt, datefmt)
        self.width = width

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if len(formatted) <= self.width:
            return formatted

        lines = []
        current_line = ""
        for word in formatted.split():
            if current_line and len(current_line) + 1 + len(word) > self.width:
                lines.append(current_line)
                current_line = word
            else:
                current_line = f"{current_line} {word}" if current_line else word

        if current_line:
            lines.append(current_line)

        return "\n".join(lines)


# ============================================================================
# Logging Setup Functions
# ============================================================================


def setup_logging(verbosity: int = 0, use_wrapping: bool = False, stream: Optional[TextIO] = None) -> None:
    """
    Setup logging configuration with multi-level verbosity.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        use_wrapping: If True, use wrapping formatter for long messages
        stream: Stream for the log handler (defaults to stderr)

    Verbosity Levels:
        0 (default): WARNING - Only warnings and errors
        1 (-d):      INFO - Commands run and files written
        2 (-dd):     DEBUG - Captured command output
        3+ (-ddd):   DEBUG - Also notary HTTP request logs
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    if use_wrapping:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(WrappingFormatter(fmt=DEFAULT_LOG_FORMAT, width=DEFAULT_LOG_WIDTH))

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
    else:
        logging.basicConfig(level=level, format=DEFAULT_LOG_FORMAT, stream=stream)

    # httpx logs every notary request at INFO level
    http_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    logging.getLogger("httpx").setLevel(http_level)
    logging.getLogger("httpcore").setLevel(http_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Repository rebuilt")
    """
    return logging.getLogger(name)


__all__ = [
    "WrappingFormatter",
    "setup_logging",
    "get_logger",
]
