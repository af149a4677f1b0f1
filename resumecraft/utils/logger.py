"""
Shared loguru setup for CLI sessions.

Each script gets one session directory under LOGS_PATH holding a detailed
<context>.log file, while the console shows INFO and above. Context-specific
wrappers ([author], [render], [score]) live in contexts/{context}/logger.py.
"""

import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from resumecraft.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def session_log_dir(prefix: str) -> Path:
    """
    Timestamped log directory for one CLI session, e.g. outs/logs/export_20251114_123456.

    The directory is created by setup_logger, not here.
    """
    return LOGS_PATH / f"{prefix}_{now()}"


def setup_logger(context_name: str, log_dir: Path, extra_provenance: dict = None) -> Path:
    """
    Route loguru output to <log_dir>/<context_name>.log (DEBUG) and stdout (INFO).

    Any handlers from an earlier session are removed first, then a provenance
    header (command line, working directory, package version, plus
    extra_provenance) is written.

    Args:
        context_name: "author", "render" or "score"
        log_dir: Session directory, usually from session_log_dir()
        extra_provenance: Context settings worth recording, e.g. {"Layout presets": "fonts_times"}

    Returns:
        Path to the log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=LOG_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    provenance = {
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "resumecraft": _package_version(),
        **(extra_provenance or {}),
    }
    logger.info("=" * 80)
    for key, value in provenance.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)

    return log_file


def _package_version() -> str:
    try:
        return version("resumecraft")
    except PackageNotFoundError:
        return "not installed"
