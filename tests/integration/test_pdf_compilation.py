"""End-to-end compilation with a real pdflatex (skipped when TeX Live is absent)."""

import shutil
import subprocess

import pytest

from mastercv.contexts.rendering import compile_latex_source
from mastercv.contexts.templating import generate_latex


def _has_resume_packages() -> bool:
    if shutil.which("pdflatex") is None or shutil.which("kpsewhich") is None:
        return False
    result = subprocess.run(["kpsewhich", "titlesec.sty"], capture_output=True, text=True)
    return bool(result.stdout.strip())


pytestmark = pytest.mark.skipif(
    not _has_resume_packages(), reason="pdflatex with titlesec not installed"
)


@pytest.mark.integration
@pytest.mark.slow
def test_sample_cv_compiles_to_one_page(sample_cv):
    result = compile_latex_source(generate_latex(sample_cv))

    assert result.success, result.errors
    assert result.pdf_bytes.startswith(b"%PDF")
    assert result.page_count == 1
