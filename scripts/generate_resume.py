#!/usr/bin/env python3
"""
Resume Generation CLI

Generates Jake's Resume LaTeX from a CV record (YAML or JSON) and compiles it
to PDF locally or through the remote LaTeX server.

Commands:
    latex - Write the LaTeX source for a CV record
    pdf   - Generate and compile a CV record to PDF

Examples:\n

    generate_resume.py latex data/master_cv.yaml                  # Write outs/results/<date>/master_cv.tex

    generate_resume.py latex data/master_cv.json -o resume.tex    # Explicit output path

    generate_resume.py pdf data/master_cv.yaml                    # Compile with local pdflatex

    generate_resume.py pdf data/master_cv.yaml --remote           # Compile with the LaTeX server
"""

import os
import time
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from mastercv.contexts.rendering import (
    CompilationServiceError,
    CompilerConfigurationError,
    LatexServerClient,
    compile_latex_source,
)
from mastercv.contexts.rendering.logger import setup_rendering_logger
from mastercv.contexts.templating import CVRecord, InvalidCVStructureError, generate_latex
from mastercv.contexts.templating.logger import (
    log_generation_result,
    log_generation_start,
    setup_templating_logger,
)
from mastercv.utils.pdf_processing import page_count
from mastercv.utils.timestamp import now, today

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


app = typer.Typer(
    help="Generate LaTeX resumes from a CV record and compile them to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_cv(cv_file: Path) -> CVRecord:
    if not cv_file.exists():
        typer.secho(f"Error: CV file not found: {cv_file}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    try:
        return CVRecord.from_file(cv_file)
    except InvalidCVStructureError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _default_output(cv_file: Path, suffix: str) -> Path:
    return RESULTS_PATH / today() / f"{cv_file.stem}{suffix}"


@app.command("latex")
def latex_command(
    cv_file: Annotated[Path, typer.Argument(help="CV record (.yaml or .json)")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output .tex path (default: RESULTS_PATH/<date>/)"),
    ] = None,
):
    """
    Write the LaTeX source for a CV record.

    Examples:\n

        $ generate_resume.py latex data/master_cv.yaml

        $ generate_resume.py latex data/master_cv.yaml -o resume.tex
    """
    setup_templating_logger(LOGS_PATH / f"template_{now()}", phase="latex")

    cv = _load_cv(cv_file)
    log_generation_start(cv.name, cv_file)
    start_time = time.time()

    latex = generate_latex(cv)

    output = output or _default_output(cv_file, ".tex")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(latex, encoding="utf-8")

    log_generation_result(cv.name, output, time.time() - start_time)
    typer.secho(f"\n✓ LaTeX written to {output}\n", fg=typer.colors.GREEN, bold=True)


@app.command("pdf")
def pdf_command(
    cv_file: Annotated[Path, typer.Argument(help="CV record (.yaml or .json)")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output .pdf path (default: RESULTS_PATH/<date>/)"),
    ] = None,
    remote: Annotated[
        bool,
        typer.Option("--remote", "-r", help="Compile with the LaTeX server (LATEX_SERVER_URL)"),
    ] = False,
    num_passes: Annotated[
        int,
        typer.Option(
            "--passes",
            "-p",
            help="Number of local compiler passes (default: 2)",
            min=1,
            max=5,
        ),
    ] = 2,
):
    """
    Generate a CV record's LaTeX and compile it to PDF.

    Examples:\n

        $ generate_resume.py pdf data/master_cv.yaml

        $ generate_resume.py pdf data/master_cv.yaml --remote -o resume.pdf
    """
    setup_rendering_logger(LOGS_PATH / f"render_{now()}", backend="remote" if remote else "local")

    cv = _load_cv(cv_file)
    latex = generate_latex(cv)

    typer.secho(f"\nCompiling: {cv.name or cv_file.stem}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Backend: {'remote' if remote else 'local'}")
    typer.echo("")

    try:
        if remote:
            pdf_bytes = LatexServerClient().compile(latex)
        else:
            result = compile_latex_source(latex, num_passes=num_passes)
            if not result.success:
                typer.secho(
                    f"✗ Compilation failed with {len(result.errors)} errors",
                    fg=typer.colors.RED,
                    bold=True,
                )
                for error in result.errors[:10]:
                    typer.secho(f"  - {error}", fg=typer.colors.RED)
                raise typer.Exit(code=1)
            pdf_bytes = result.pdf_bytes
    except (CompilerConfigurationError, CompilationServiceError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output = output or _default_output(cv_file, ".pdf")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(pdf_bytes)

    pages = page_count(pdf_bytes)
    typer.secho("✓ Compilation succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {pages if pages is not None else 'unknown'}")
    if pages is not None and pages > 1:
        typer.secho("  Resume runs over one page", fg=typer.colors.YELLOW)
    typer.echo(f"  PDF: {output}")
    typer.echo("")


if __name__ == "__main__":
    app()
