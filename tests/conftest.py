"""Shared pytest fixtures."""

from pathlib import Path

import pytest
from omegaconf import OmegaConf

from mastercv.contexts.templating import CVRecord

FIXTURES_PATH = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def sample_cv_dict() -> dict:
    """Sample CV record in its persisted dict shape."""
    return OmegaConf.to_container(OmegaConf.load(FIXTURES_PATH / "sample_cv.yaml"), resolve=True)


@pytest.fixture
def sample_cv(sample_cv_dict) -> CVRecord:
    return CVRecord.from_dict(sample_cv_dict)


@pytest.fixture
def edited_letter() -> str:
    """Hand-edited cover letter with HTML-sensitive characters."""
    return (FIXTURES_PATH / "edited_letter.txt").read_text(encoding="utf-8")
