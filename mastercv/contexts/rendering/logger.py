"""
Rendering context logger ([render] prefix).

Compilation modules log through these wrappers rather than loguru directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from mastercv.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"

# Diagnostics shown per compilation; the rest stay in the session log
MAX_LOGGED_ERRORS = 5
MAX_LOGGED_WARNINGS = 3


def setup_rendering_logger(log_dir: Path, backend: str = "local") -> Path:
    """
    Start a rendering log session.

    Args:
        log_dir: Directory for this session
        backend: "local" (pdflatex on PATH) or "remote" (LaTeX server)

    Returns:
        Path to log file
    """
    provenance = {"Backend": backend}
    if backend == "remote":
        provenance["LaTeX server"] = os.getenv("LATEX_SERVER_URL")
    else:
        provenance["LaTeX compiler"] = os.getenv("LATEX_COMPILER", "pdflatex")

    return _setup_logger("render", log_dir, extra_provenance=provenance)


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_compilation_start(document_name: str, tex_file: Path, num_passes: int) -> None:
    _log_info(f"Compiling {document_name} ({num_passes} passes)")
    _log_debug(f"  Source: {tex_file}")


def log_compilation_result(document_name: str, result, elapsed_time: float) -> None:
    """
    Summarize a CompilationResult.

    Errors go to the console (first MAX_LOGGED_ERRORS); warnings and, on
    failure, the full compiler stdout go to the session log only.
    """
    if result.success:
        _log_success(f"{document_name}: compiled in {elapsed_time:.2f}s")
        if result.page_count is not None and result.page_count > 1:
            _log_warning(f"{document_name}: {result.page_count} pages (a resume should fit on one)")
    else:
        _log_error(f"{document_name}: {len(result.errors)} errors ({elapsed_time:.2f}s)")
        for error in result.errors[:MAX_LOGGED_ERRORS]:
            _log_error(f"  {error}")
        if len(result.errors) > MAX_LOGGED_ERRORS:
            _log_error(f"  ... and {len(result.errors) - MAX_LOGGED_ERRORS} more")

    for warning in result.warnings[:MAX_LOGGED_WARNINGS]:
        _log_debug(f"  Warning: {warning}")

    # raw=True keeps multi-line compiler output free of per-line prefixes
    if not result.success and result.stdout:
        logger.opt(raw=True).debug(f"\n{'=' * 72}\nCOMPILER STDOUT\n{'=' * 72}\n{result.stdout}\n")
