"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import List

from loguru import logger

from resumecraft.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, presets: List[str] = None) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        presets: Layout presets in use (logged in the provenance header)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Layout presets": ", ".join(presets) if presets else "none"},
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


def log_export_start(resume_name: str, output_dir: Path) -> None:
    """Log start of an export with context."""
    _log_info(f"Starting export: {resume_name}")
    _log_debug(f"  Output directory: {output_dir}")


def log_export_result(
    resume_name: str,
    result,  # ExportResult
    elapsed_time: float,
) -> None:
    """
    Log export result.

    The underlying engine error (if any) is logged at debug level only; the
    result itself carries just the generic message.
    """
    if result.success:
        _log_success(f"{resume_name}: {result.page_count} page(s) ({elapsed_time:.2f}s)")
        _log_debug(f"  PDF: {result.pdf_path}")
    else:
        _log_error(f"{resume_name}: export failed ({elapsed_time:.2f}s)")
        for err in result.errors:
            _log_error(f"  {err}")
