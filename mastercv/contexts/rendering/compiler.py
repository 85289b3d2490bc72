"""
Local LaTeX Compilation

Runs pdflatex (or LATEX_COMPILER) over a .tex file or in-memory source and
reports the PDF together with the errors and warnings found in the .log.
"""

import os
import re
import shutil
import subprocess
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple

from dotenv import load_dotenv

from mastercv.contexts.rendering.exceptions import CompilerConfigurationError
from mastercv.contexts.rendering.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
)
from mastercv.utils.pdf_processing import page_count

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")

# Intermediate files removed after compilation unless keep_artifacts is set
LATEX_ARTIFACTS = (".aux", ".log", ".out", ".toc")

# Stem used when compiling in-memory source
SOURCE_STEM = "document"

COMPILER_FLAGS = ("-interaction=nonstopmode", "-halt-on-error", "-file-line-error")


@dataclass(frozen=True)
class LatexLogPatterns:
    """Regexes for diagnostics in a pdflatex .log file."""

    ERROR: re.Pattern = re.compile(r"^! (.+)$", re.MULTILINE)
    WARNINGS: Tuple[re.Pattern, ...] = (
        re.compile(r"LaTeX Warning: (.+)"),
        re.compile(r"Package \w+ Warning: (.+)"),
        re.compile(r"Overfull \\hbox \((.+)\)"),
        re.compile(r"Underfull \\hbox \((.+)\)"),
    )


class LogDiagnostics(NamedTuple):
    errors: List[str]
    warnings: List[str]


@dataclass
class CompilationResult:
    """
    Outcome of a local compilation.

    Attributes:
        success: PDF produced and no "!" errors in the log
        pdf_path: Generated PDF (None on failure or for in-memory source)
        pdf_bytes: PDF content (None on failure)
        stdout: Compiler stdout across passes
        stderr: Compiler stderr across passes
        errors: "!" lines from the log
        warnings: LaTeX, package and box warnings from the log
        page_count: Pages in the PDF (None if unavailable)
    """

    success: bool
    pdf_path: Optional[Path] = None
    pdf_bytes: Optional[bytes] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def _parse_latex_log(log_content: str) -> LogDiagnostics:
    errors = [match.group(1).strip() for match in LatexLogPatterns.ERROR.finditer(log_content)]
    warnings = [
        match.group(1).strip()
        for pattern in LatexLogPatterns.WARNINGS
        for match in pattern.finditer(log_content)
    ]
    return LogDiagnostics(errors, warnings)


def _require_compiler(compiler: str) -> str:
    resolved = shutil.which(compiler)
    if resolved is None:
        raise CompilerConfigurationError(
            f"LaTeX compiler '{compiler}' not found on PATH", "LATEX_COMPILER"
        )
    return resolved


def _stage_source(tex_file: Path, compile_dir: Optional[Path]) -> Path:
    """Return the .tex path to compile, copying the source into compile_dir if needed."""
    if compile_dir is None:
        return tex_file

    compile_dir = Path(compile_dir).resolve()
    compile_dir.mkdir(parents=True, exist_ok=True)
    if compile_dir == tex_file.parent:
        return tex_file

    staged = compile_dir / tex_file.name
    shutil.copy2(tex_file, staged)
    return staged


def _output_path(tex_file: Path, suffix: str) -> Path:
    return tex_file.with_suffix(suffix)


def _clear_outputs(tex_file: Path, suffixes) -> None:
    for suffix in suffixes:
        path = _output_path(tex_file, suffix)
        if path.exists():
            path.unlink()


def _run_passes(executable: str, tex_file: Path, num_passes: int) -> Tuple[List[str], List[str]]:
    """Run the compiler up to num_passes times, stopping at the first failing pass."""
    stdout, stderr = [], []
    cmd = [executable, *COMPILER_FLAGS, tex_file.name]

    for pass_number in range(1, num_passes + 1):
        completed = subprocess.run(
            cmd,
            cwd=tex_file.parent,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        stdout.append(completed.stdout)
        stderr.append(completed.stderr)

        if completed.returncode != 0:
            _log_debug(f"Pass {pass_number} exited with {completed.returncode}; not re-running")
            break

    return stdout, stderr


def compile_latex(
    tex_file: Path,
    compile_dir: Optional[Path] = None,
    num_passes: int = 2,
    keep_artifacts: bool = False,
    compiler: str = None,
) -> CompilationResult:
    """
    Compile a .tex file to PDF.

    Args:
        tex_file: Source file
        compile_dir: Output directory (default: the source's directory); the
            source is copied there and the copy removed afterwards
        num_passes: Compiler passes (default: 2, for cross-references)
        keep_artifacts: Keep .aux/.log/.out/.toc
        compiler: Executable (default: LATEX_COMPILER, or pdflatex)

    Returns:
        CompilationResult; a missing source is reported as a failed result

    Raises:
        CompilerConfigurationError: If the compiler is not on PATH
        OSError: If the compiler cannot be started; staged files are still removed
    """
    source = Path(tex_file).resolve()
    if not source.exists():
        return CompilationResult(success=False, errors=[f"TeX file not found: {source}"])

    executable = _require_compiler(compiler or LATEX_COMPILER)
    staged = _stage_source(source, compile_dir)

    # Stale outputs would make success detection ambiguous
    _clear_outputs(staged, (".pdf",) + LATEX_ARTIFACTS)

    log_compilation_start(staged.stem, source, num_passes)
    start_time = time.time()

    try:
        stdout, stderr = _run_passes(executable, staged, num_passes)

        log_file = _output_path(staged, ".log")
        diagnostics = LogDiagnostics([], [])
        if log_file.exists():
            # pdflatex writes its log in latin-1
            diagnostics = _parse_latex_log(log_file.read_text(encoding="latin-1"))

        pdf_path = _output_path(staged, ".pdf")
        pdf_bytes = pdf_path.read_bytes() if pdf_path.exists() else None
    finally:
        if not keep_artifacts:
            _clear_outputs(staged, LATEX_ARTIFACTS)
        if staged != source:
            staged.unlink(missing_ok=True)

    errors = list(diagnostics.errors)
    if pdf_bytes is None and not errors:
        errors.append("PDF file was not generated")

    result = CompilationResult(
        success=pdf_bytes is not None and not diagnostics.errors,
        pdf_path=pdf_path if pdf_bytes is not None else None,
        pdf_bytes=pdf_bytes,
        stdout="\n".join(stdout),
        stderr="\n".join(stderr),
        errors=errors,
        warnings=list(diagnostics.warnings),
        page_count=page_count(pdf_bytes) if pdf_bytes else None,
    )
    log_compilation_result(staged.stem, result, time.time() - start_time)
    return result


def compile_latex_source(latex: str, num_passes: int = 2, compiler: str = None) -> CompilationResult:
    """
    Compile in-memory LaTeX in a throwaway directory.

    The result carries the PDF bytes; pdf_path is None because the directory
    is removed.

    Raises:
        ValueError: If latex is empty
        CompilerConfigurationError: If the compiler is not on PATH
    """
    if not latex:
        raise ValueError("LaTeX content is required")

    with tempfile.TemporaryDirectory(prefix="mastercv-latex-") as work_dir:
        tex_file = Path(work_dir) / f"{SOURCE_STEM}.tex"
        tex_file.write_text(latex, encoding="utf-8")
        result = compile_latex(tex_file, num_passes=num_passes, compiler=compiler)

    result.pdf_path = None
    return result
