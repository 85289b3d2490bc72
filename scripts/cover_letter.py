#!/usr/bin/env python3
"""
Cover Letter CLI

Assembles the canonical plain-text cover letter and renders (possibly
hand-edited) letters to HTML or DOCX.

Commands:
    assemble - Build a letter from identity fields and a body text file
    render   - Render a letter text file to HTML or DOCX

Examples:\n

    cover_letter.py assemble body.txt --name "Jane Doe" --email j@x.com --company Acme

    cover_letter.py render letter.txt --format html --dark

    cover_letter.py render letter.txt --format docx -o letter.docx
"""

import os
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from mastercv.contexts.correspondence import (
    CoverLetterExportError,
    assemble_cover_letter,
    render_cover_letter_html,
    save_cover_letter_docx,
)
from mastercv.contexts.correspondence.logger import log_export_result, setup_correspondence_logger
from mastercv.utils.timestamp import now, today

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


class ExportFormat(str, Enum):
    html = "html"
    docx = "docx"


app = typer.Typer(
    help="Assemble cover letters and render them to HTML or DOCX",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _read_text(path: Path) -> str:
    if not path.exists():
        typer.secho(f"Error: file not found: {path}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")


@app.command("assemble")
def assemble_command(
    body_file: Annotated[Path, typer.Argument(help="Plain-text body (paragraphs separated by blank lines)")],
    name: Annotated[str, typer.Option("--name", "-n", help="Applicant name")] = "",
    email: Annotated[str, typer.Option("--email", "-e", help="Applicant email")] = "",
    phone: Annotated[str, typer.Option("--phone", help="Applicant phone")] = "",
    company: Annotated[str, typer.Option("--company", "-c", help="Target company")] = "",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output .txt path (default: print to stdout)"),
    ] = None,
):
    """
    Assemble a cover letter; the date line is always today's date.

    Examples:\n

        $ cover_letter.py assemble body.txt --name "Jane Doe" --company Acme -o letter.txt
    """
    letter = assemble_cover_letter(
        name=name, email=email, phone=phone, company=company, body=_read_text(body_file)
    )

    if output is None:
        typer.echo(letter)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(letter, encoding="utf-8")
    typer.secho(f"\n✓ Letter written to {output}\n", fg=typer.colors.GREEN, bold=True)


@app.command("render")
def render_command(
    letter_file: Annotated[Path, typer.Argument(help="Cover letter text file")],
    fmt: Annotated[
        ExportFormat,
        typer.Option("--format", "-f", help="Output format", case_sensitive=False),
    ] = ExportFormat.html,
    dark: Annotated[bool, typer.Option("--dark", help="Dark color scheme (HTML only)")] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output path (default: RESULTS_PATH/<date>/)"),
    ] = None,
):
    """
    Render a cover letter to HTML or DOCX.

    Examples:\n

        $ cover_letter.py render letter.txt

        $ cover_letter.py render letter.txt --format docx -o letter.docx
    """
    setup_correspondence_logger(LOGS_PATH / f"letter_{now()}", phase=f"render-{fmt.value}")

    text = _read_text(letter_file)
    output = output or RESULTS_PATH / today() / f"{letter_file.stem}.{fmt.value}"

    if fmt is ExportFormat.html:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(render_cover_letter_html(text, dark=dark), encoding="utf-8")
        log_export_result(output, fmt.value)
    else:
        try:
            save_cover_letter_docx(text, output)
        except CoverLetterExportError as e:
            typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.secho(f"\n✓ {fmt.value.upper()} written to {output}\n", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
