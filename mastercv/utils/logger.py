"""
Shared loguru configuration.

Each context (templating, rendering, correspondence, intake) owns a thin
logger.py that calls setup_logger() once per CLI run and wraps loguru with its
own message prefix. Library code never configures handlers itself.
"""

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

import mastercv

load_dotenv()

# Console verbosity; the session log file always records DEBUG
CONSOLE_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Mapping[str, object]] = None,
) -> Path:
    """
    Route loguru output to a session log file and the console.

    Args:
        context_name: Log file stem (e.g., "render", "template", "letter")
        log_dir: Directory for this session; created if missing
        extra_provenance: Context-specific header lines (e.g., {"Backend": "remote"})

    Returns:
        Path to the session log file

    Example:
        log_file = setup_logger(
            "render",
            Path("outs/logs/render_20261019_123456"),
            extra_provenance={"Backend": "local"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=CONSOLE_LOG_LEVEL, colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_provenance: Optional[Mapping[str, object]] = None) -> None:
    """Write a header identifying the command, package version and environment."""
    logger.info("=" * 72)
    logger.info(f"mastercv {mastercv.__version__} [{context_name}]")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_provenance or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 72)
