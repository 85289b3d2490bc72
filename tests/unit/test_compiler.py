"""Unit tests for local LaTeX compilation (pdflatex is faked)."""

import subprocess
from io import BytesIO
from pathlib import Path

import pytest
from PyPDF2 import PdfWriter

from mastercv.contexts.rendering import CompilerConfigurationError, compile_latex, compile_latex_source
from mastercv.contexts.rendering.compiler import _parse_latex_log
from mastercv.utils.pdf_processing import page_count

SAMPLE_LOG = """\
This is pdfTeX, Version 3.141592653
! Undefined control sequence.
l.12 \\resumeItm
LaTeX Warning: Reference `sec:x' on page 1 undefined on input line 20.
Package hyperref Warning: Token not allowed in a PDF string.
Overfull \\hbox (12.3pt too wide) in paragraph at lines 40--41
"""


def _blank_pdf(pages: int = 1) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def fake_compiler(monkeypatch):
    monkeypatch.setattr(
        "mastercv.contexts.rendering.compiler.shutil.which", lambda name: f"/usr/bin/{name}"
    )


def _install_fake_run(monkeypatch, pdf: bytes = None, log: str = "", returncode: int = 0):
    calls = []

    def fake_run(cmd, cwd, **kwargs):
        calls.append(cmd)
        stem = Path(cmd[-1]).stem
        (Path(cwd) / f"{stem}.log").write_text(log, encoding="latin-1")
        (Path(cwd) / f"{stem}.aux").write_text("", encoding="utf-8")
        if pdf is not None:
            (Path(cwd) / f"{stem}.pdf").write_bytes(pdf)
        return subprocess.CompletedProcess(cmd, returncode, stdout="pdflatex output", stderr="")

    monkeypatch.setattr("mastercv.contexts.rendering.compiler.subprocess.run", fake_run)
    return calls


@pytest.mark.unit
def test_parse_latex_log():
    errors, warnings = _parse_latex_log(SAMPLE_LOG)

    assert errors == ["Undefined control sequence."]
    assert "Reference `sec:x' on page 1 undefined on input line 20." in warnings
    assert "Token not allowed in a PDF string." in warnings
    assert "12.3pt too wide" in warnings


@pytest.mark.unit
def test_page_count_from_bytes_and_path(tmp_path):
    pdf = _blank_pdf(pages=2)
    pdf_path = tmp_path / "doc.pdf"
    pdf_path.write_bytes(pdf)

    assert page_count(pdf) == 2
    assert page_count(pdf_path) == 2


@pytest.mark.unit
def test_page_count_unreadable():
    assert page_count(b"not a pdf") is None


@pytest.mark.unit
def test_missing_tex_file(tmp_path):
    result = compile_latex(tmp_path / "missing.tex")

    assert not result.success
    assert "TeX file not found" in result.errors[0]


@pytest.mark.unit
def test_missing_compiler_raises(tmp_path, monkeypatch):
    monkeypatch.setattr("mastercv.contexts.rendering.compiler.shutil.which", lambda name: None)
    tex_file = tmp_path / "doc.tex"
    tex_file.write_text("x", encoding="utf-8")

    with pytest.raises(CompilerConfigurationError):
        compile_latex(tex_file)


@pytest.mark.unit
def test_compile_source_success(monkeypatch, fake_compiler):
    pdf = _blank_pdf()
    calls = _install_fake_run(monkeypatch, pdf=pdf, log="LaTeX Warning: Label(s) may have changed.\n")

    result = compile_latex_source(r"\documentclass{article}\begin{document}x\end{document}")

    assert result.success
    assert result.pdf_bytes == pdf
    assert result.pdf_path is None
    assert result.page_count == 1
    assert result.errors == []
    assert result.warnings == ["Label(s) may have changed."]

    assert len(calls) == 2
    assert "-interaction=nonstopmode" in calls[0]
    assert "-halt-on-error" in calls[0]
    assert calls[0][-1] == "document.tex"


@pytest.mark.unit
def test_compile_failure_stops_early(monkeypatch, fake_compiler):
    calls = _install_fake_run(monkeypatch, log="! Undefined control sequence.\n", returncode=1)

    result = compile_latex_source(r"\badmacro")

    assert not result.success
    assert result.pdf_bytes is None
    assert result.errors == ["Undefined control sequence."]
    assert len(calls) == 1


@pytest.mark.unit
def test_compile_into_separate_dir_cleans_up(tmp_path, monkeypatch, fake_compiler):
    _install_fake_run(monkeypatch, pdf=_blank_pdf())
    source_dir = tmp_path / "src"
    source_dir.mkdir()
    tex_file = source_dir / "resume.tex"
    tex_file.write_text("x", encoding="utf-8")
    out_dir = tmp_path / "out"

    result = compile_latex(tex_file, compile_dir=out_dir)

    assert result.success
    assert result.pdf_path == out_dir.resolve() / "resume.pdf"
    assert not (out_dir / "resume.tex").exists()
    assert not (out_dir / "resume.aux").exists()
    assert not (out_dir / "resume.log").exists()
    assert tex_file.exists()


@pytest.mark.unit
def test_compiler_crash_still_cleans_up(tmp_path, monkeypatch, fake_compiler):
    def crashing_run(cmd, cwd, **kwargs):
        stem = Path(cmd[-1]).stem
        (Path(cwd) / f"{stem}.aux").write_text("", encoding="utf-8")
        (Path(cwd) / f"{stem}.log").write_text("", encoding="latin-1")
        raise OSError("exec format error")

    monkeypatch.setattr("mastercv.contexts.rendering.compiler.subprocess.run", crashing_run)
    source_dir = tmp_path / "src"
    source_dir.mkdir()
    tex_file = source_dir / "resume.tex"
    tex_file.write_text("x", encoding="utf-8")
    out_dir = tmp_path / "out"

    with pytest.raises(OSError, match="exec format error"):
        compile_latex(tex_file, compile_dir=out_dir)

    assert not (out_dir / "resume.tex").exists()
    assert not (out_dir / "resume.aux").exists()
    assert not (out_dir / "resume.log").exists()
    assert tex_file.exists()


@pytest.mark.unit
def test_keep_artifacts(tmp_path, monkeypatch, fake_compiler):
    _install_fake_run(monkeypatch, pdf=_blank_pdf())
    tex_file = tmp_path / "resume.tex"
    tex_file.write_text("x", encoding="utf-8")

    compile_latex(tex_file, keep_artifacts=True)

    assert (tmp_path / "resume.log").exists()
    assert (tmp_path / "resume.aux").exists()


@pytest.mark.unit
def test_empty_source_rejected():
    with pytest.raises(ValueError):
        compile_latex_source("")
