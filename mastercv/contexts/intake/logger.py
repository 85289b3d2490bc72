"""
Intake context logger ([intake] prefix).

Intake modules log through these wrappers rather than loguru directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from mastercv.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path) -> Path:
    """Start an intake log session, recording the configured provider."""
    return _setup_logger(
        "intake", log_dir, extra_provenance={"LLM provider": os.getenv("LLM_PROVIDER", "gemini")}
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_llm_call(operation: str, provider_name: str, response) -> None:
    """Log a completed model call with token usage."""
    _log_info(f"{operation}: {provider_name}")
    _log_debug(f"  Tokens: {response.input_tokens} in / {response.output_tokens} out")
