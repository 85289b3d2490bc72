"""
Templating context logger ([template] prefix).

Templating modules log through these wrappers rather than loguru directly.
"""

from pathlib import Path

from loguru import logger

from mastercv.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, phase: str = "latex") -> Path:
    """Start a templating log session under log_dir; returns the log file."""
    return _setup_logger("template", log_dir, extra_provenance={"Phase": phase})


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_generation_start(cv_name: str, source: Path) -> None:
    _log_info(f"Generating LaTeX for {cv_name or '(unnamed CV)'}")
    _log_debug(f"Source: {source}")


def log_generation_result(cv_name: str, output_path: Path, elapsed_time: float) -> None:
    _log_success(f"{cv_name or '(unnamed CV)'}: LaTeX generated ({elapsed_time:.2f}s)")
    _log_info(f"  Output: {output_path}")
