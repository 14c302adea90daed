"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, content_source: str = None) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        content_source: Content document URL or path, recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from folio.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, "data/data.json")
        _log_info("Starting render...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Content source": content_source},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(source: str, num_sections: int, refresh: bool) -> None:
    """Log start of a render pass."""
    pass_name = "refresh" if refresh else "initial render"
    _log_info(f"Starting {pass_name}: {num_sections} sections")
    _log_debug(f"  Source: {source}")


def log_step_failure(step: str, error: Exception) -> None:
    """Log a build step (or single section) that failed and was skipped."""
    _log_error(f"Build step '{step}' failed: {type(error).__name__}: {error}")
    logger.opt(exception=error).debug(f"{CONTEXT_PREFIX} Traceback for '{step}'")


def log_render_result(report) -> None:  # RenderReport
    """
    Log render result with per-step failures.

    Args:
        report: RenderReport from Portfolio.initialize() or Portfolio.refresh()
    """
    if report.success:
        _log_success(
            f"Rendered {len(report.sections_rendered)} sections, "
            f"{report.nav_entries} nav entries ({report.elapsed_s:.2f}s)"
        )
    else:
        _log_warning(
            f"Rendered with {len(report.failures)} failed steps ({report.elapsed_s:.2f}s)"
        )
        for i, failure in enumerate(report.failures, 1):
            _log_warning(f"  Failure {i}: {failure}")
