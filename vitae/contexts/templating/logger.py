"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, source: Path = None) -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this export session
        source: Input file being exported, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Source": source} if source else None,
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_export_start(source: Path, log_file: Path) -> None:
    """Log start of an export with context."""
    _log_info(f"Starting export of {source.name}")
    _log_info(f"Log file: {log_file}")
    _log_debug(f"Source: {source}")


def log_export_result(source: Path, output_path: Path, elapsed_time: float) -> None:
    """Log a finished export."""
    _log_success(f"{source.name}: export succeeded ({elapsed_time:.2f}s)")
    _log_info(f"  Output: {output_path}")
