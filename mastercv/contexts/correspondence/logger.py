"""
Correspondence context logger ([letter] prefix).

Cover letter modules log through these wrappers rather than loguru directly.
"""

from pathlib import Path

from loguru import logger

from mastercv.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[letter]"


def setup_correspondence_logger(log_dir: Path, phase: str = "render") -> Path:
    """
    Start a correspondence log session.

    Args:
        log_dir: Directory for this session
        phase: Recorded in the provenance header (e.g., "render-docx")

    Returns:
        Path to log file
    """
    return _setup_logger("letter", log_dir, extra_provenance={"Phase": phase})


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


def log_parse_summary(parsed) -> None:
    """Log which zones were recognized in a cover letter."""
    _log_debug(
        f"Parsed letter: name={'yes' if parsed.name else 'no'}, "
        f"{len(parsed.contact_lines)} contact, {len(parsed.pre_date_lines)} pre-date, "
        f"{len(parsed.paragraphs)} paragraphs, {len(parsed.footer_lines)} footer"
    )
    if not parsed.has_salutation:
        _log_warning("No salutation found; content after the header was treated as body")


def log_export_result(output_path: Path, fmt: str) -> None:
    _log_success(f"Cover letter exported as {fmt.upper()}")
    _log_info(f"  Output: {output_path}")
