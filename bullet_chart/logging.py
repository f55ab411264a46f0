"""
Logging configuration for bullet-chart.

Library modules log through ``logging.getLogger("bullet-chart")`` and never
install handlers themselves. Applications call ``setup_logging()`` once to get:

  - File: always DEBUG level, one file per session in <data_dir>/logs/
  - Console: DEBUG if verbose, WARNING+ otherwise
  - Format: "timestamp | level | name | message"
  - Config console_format options:
    - "simple" — (default) bare messages for DEBUG/INFO, [LEVEL] prefix for WARNING+
    - "full"   — same structured format as the file handler
    - "clean"  — no console output at all (file logging still active)
"""

import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional

import config

LOGGER_NAME = "bullet-chart"

# Module-level state (shared across re-inits)
_current_log_file: Optional[Path] = None


def get_log_dir() -> Path:
    """Return the log directory under the configured data directory."""
    return config.get_data_dir() / "logs"


class _ConsoleFormatter(logging.Formatter):
    """Console formatter: shows [LEVEL] prefix only for WARNING and above."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return f"  [{record.levelname}] {record.getMessage()}"
        return f"  {record.getMessage()}"


def setup_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure logging for bullet-chart.

    Args:
        verbose: If True, show DEBUG level on console; otherwise WARNING+ only
        log_dir: Directory for the session log file (default: <data_dir>/logs)

    Returns:
        Configured logger instance
    """
    global _current_log_file
    log_dir = Path(log_dir) if log_dir is not None else get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # Capture everything, filter at handler level

    # Clear existing handlers (in case of re-init)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    # File handler - one log file per session
    session_timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"chart_{session_timestamp}.log"
    _current_log_file = log_file
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)

    # Console handler - less verbose unless verbose flag
    console_format = config.get("console_format", "simple")

    if console_format != "clean":
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
        if console_format == "full":
            console_handler.setFormatter(file_format)  # identical to file handler
        else:
            console_handler.setFormatter(_ConsoleFormatter())
        logger.addHandler(console_handler)
    # "clean" — no console handler at all (file logging still active)

    logger.info("=" * 60)
    logger.info(f"Session started at {datetime.now().isoformat()}")
    logger.info(f"Log file: {log_file}")

    return logger


def get_logger() -> logging.Logger:
    """Get the bullet-chart logger instance.

    Returns:
        The bullet-chart logger (creates with defaults if not configured)
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        # Not configured yet, set up with defaults
        return setup_logging(verbose=False)
    return logger


def log_error(
    message: str,
    exc: Optional[Exception] = None,
    context: Optional[dict] = None,
) -> None:
    """Log an error with full details including stack trace.

    Args:
        message: Error description
        exc: Optional exception to include stack trace from
        context: Optional dict of additional context (property name, value, etc.)
    """
    logger = get_logger()

    lines = [message]

    if context:
        lines.append("Context:")
        for key, value in context.items():
            lines.append(f"  {key}: {value}")

    if exc:
        lines.append(f"Exception type: {type(exc).__name__}")
        identifier = getattr(exc, "identifier", None)
        if identifier:
            lines.append(f"Identifier: {identifier}")
        lines.append(f"Exception message: {exc}")
        lines.append("Stack trace:")
        lines.append("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))

    logger.error("\n".join(lines))


def get_current_log_path() -> Path:
    """Return the path to the current session's log file."""
    if _current_log_file is not None:
        return _current_log_file
    # Fallback: find most recent log file in the directory
    logs = sorted(get_log_dir().glob("chart_*.log"))
    if logs:
        return logs[-1]
    return get_log_dir() / f"chart_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
