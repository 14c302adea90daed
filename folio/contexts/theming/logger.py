"""
Theming context logger.

Provides logging interface for theming context with automatic [theme] prefix.
All theming modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[theme]"


def setup_theming_logger(log_dir: Path, store_path: Path = None) -> Path:
    """
    Setup logger for theming context.

    Theme commands print their own one-line result, so only warnings and
    errors reach the console; everything else goes to the session log file.

    Args:
        log_dir: Directory for this theming session
        store_path: Preference file, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="theme",
        log_dir=log_dir,
        extra_provenance={"Preference store": store_path},
        console_level="WARNING",
    )


def _log_info(message: str) -> None:
    """Log info message with [theme] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [theme] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [theme] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
