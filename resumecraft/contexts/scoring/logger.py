"""
Scoring context logger.

Provides logging interface for scoring context with automatic [score] prefix.
All scoring modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from resumecraft.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[score]"


def setup_scoring_logger(log_dir: Path) -> Path:
    """
    Setup logger for scoring context.

    Args:
        log_dir: Directory for this scoring session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="score",
        log_dir=log_dir,
        extra_provenance={
            "LLM provider": os.getenv("LLM_PROVIDER", "openai"),
            "LLM model": os.getenv("LLM_MODEL", "provider default"),
        },
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


def log_judgment_failure(message: str, error: Exception = None) -> None:
    """Log a failed remote judgment; the underlying error goes to debug level."""
    _log_error(f"Remote judgment failed: {message}")
    if error is not None:
        _log_debug(f"  Underlying error: {type(error).__name__}: {error}")


def log_score_result(score, local_average: float, factor: float) -> None:
    """
    Log a computed ATS score with its blending inputs.

    Args:
        score: ATSScore from analyze_ats()
        local_average: Weighted local heuristic average before adjustment
        factor: Adjustment factor applied to the local sub-scores
    """
    _log_success(f"ATS score: {score.overall}/100")
    _log_debug(f"  Local weighted average: {local_average:.1f} (factor {factor:.3f})")
    for name, value in score.breakdown.as_dict().items():
        _log_debug(f"  {name}: {value}")
    if score.missing_keywords:
        _log_info(f"Missing keywords: {', '.join(score.missing_keywords)}")
