"""
Authoring context logger.

Provides logging interface for the authoring context with automatic [author] prefix.
All authoring modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resumecraft.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[author]"


def setup_authoring_logger(log_dir: Path, store_path: Path = None) -> Path:
    """
    Setup logger for the authoring context.

    Args:
        log_dir: Directory for this session
        store_path: Record store in use (logged in the provenance header)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="author",
        log_dir=log_dir,
        extra_provenance={"Record store": store_path} if store_path else None,
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_record_change(action: str, resume_id: str, owner_id: str = None) -> None:
    """Log a create/update/delete on the record store."""
    owner = f" (owner {owner_id})" if owner_id else ""
    _log_info(f"Resume {action}: {resume_id}{owner}")


def log_import_result(source: Path, document) -> None:
    """Log a summary of a parsed resume import."""
    _log_success(f"Imported resume from {source.name}")
    _log_debug(
        f"  {len(document.experience)} experience, {len(document.education)} education, "
        f"{len(document.skills)} skills, {len(document.projects)} projects"
    )


def log_assistant_failure(operation: str, message: str, error: Exception) -> None:
    """Log a failed AI-assisted operation with the underlying error at debug level."""
    _log_error(f"{operation} failed: {message}")
    _log_debug(f"  Underlying error: {type(error).__name__}: {error}")
