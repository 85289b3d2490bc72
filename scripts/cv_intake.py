#!/usr/bin/env python3
"""
CV Intake CLI

Uses the configured LLM provider (LLM_PROVIDER) to build and adapt CV records.

Commands:
    parse       - Parse a raw resume text dump into a CV record
    add         - Merge new experience/project text into an existing record
    tailor      - Tailor a record to a job description
    letter-body - Write cover letter body prose for a job

Examples:\n

    cv_intake.py parse resume_dump.txt -o data/master_cv.yaml

    cv_intake.py tailor data/master_cv.yaml job.txt -o data/tailored.yaml

    cv_intake.py letter-body data/master_cv.yaml job.txt --company Acme -o body.txt
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from mastercv.contexts.intake import (
    add_to_existing_cv,
    generate_cover_letter_body,
    parse_raw_text_to_cv,
    tailor_cv_for_job,
)
from mastercv.contexts.intake.logger import setup_intake_logger
from mastercv.contexts.templating import CVRecord
from mastercv.utils.llm import LLMResponseError, get_provider
from mastercv.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

ProviderOption = Annotated[
    Optional[str],
    typer.Option("--provider", help="gemini, anthropic or openai (default: LLM_PROVIDER)"),
]
ModelOption = Annotated[Optional[str], typer.Option("--model", "-m", help="Model name override")]


app = typer.Typer(
    help="Build and adapt CV records with an LLM",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _write_record(cv: CVRecord, output: Optional[Path]) -> None:
    config = OmegaConf.create(cv.to_dict())
    if output is None:
        typer.echo(OmegaConf.to_yaml(config))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(config, output)
    typer.secho(f"\n✓ CV record written to {output}\n", fg=typer.colors.GREEN, bold=True)


def _run(operation):
    """Run an LLM-backed operation, turning provider errors into a clean exit."""
    try:
        return operation()
    except (LLMResponseError, ValueError, ImportError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("parse")
def parse_command(
    raw_file: Annotated[Path, typer.Argument(help="Raw resume text")],
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output YAML")] = None,
    provider: ProviderOption = None,
    model: ModelOption = None,
):
    """Parse a raw resume text dump into a CV record."""
    setup_intake_logger(LOGS_PATH / f"intake_{now()}")
    raw_text = raw_file.read_text(encoding="utf-8")
    cv = _run(lambda: parse_raw_text_to_cv(raw_text, llm=get_provider(provider, model)))
    _write_record(cv, output)


@app.command("add")
def add_command(
    cv_file: Annotated[Path, typer.Argument(help="Existing CV record (.yaml or .json)")],
    content_file: Annotated[Path, typer.Argument(help="Text describing the new role or project")],
    content_type: Annotated[
        str, typer.Option("--type", "-t", help="auto, experience or projects")
    ] = "auto",
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output YAML")] = None,
    provider: ProviderOption = None,
    model: ModelOption = None,
):
    """Merge new experience or project text into an existing CV record."""
    setup_intake_logger(LOGS_PATH / f"intake_{now()}")
    existing = CVRecord.from_file(cv_file)
    new_content = content_file.read_text(encoding="utf-8")
    cv = _run(
        lambda: add_to_existing_cv(
            existing, new_content, content_type=content_type, llm=get_provider(provider, model)
        )
    )
    _write_record(cv, output)


@app.command("tailor")
def tailor_command(
    cv_file: Annotated[Path, typer.Argument(help="Master CV record (.yaml or .json)")],
    job_file: Annotated[Path, typer.Argument(help="Job description text")],
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output YAML")] = None,
    provider: ProviderOption = None,
    model: ModelOption = None,
):
    """Tailor a Master CV to a job description."""
    setup_intake_logger(LOGS_PATH / f"intake_{now()}")
    master = CVRecord.from_file(cv_file)
    job_description = job_file.read_text(encoding="utf-8")
    cv = _run(lambda: tailor_cv_for_job(master, job_description, llm=get_provider(provider, model)))
    _write_record(cv, output)


@app.command("letter-body")
def letter_body_command(
    cv_file: Annotated[Path, typer.Argument(help="Master CV record (.yaml or .json)")],
    job_file: Annotated[Path, typer.Argument(help="Job description text")],
    company: Annotated[str, typer.Option("--company", "-c", help="Target company")] = "",
    position: Annotated[str, typer.Option("--position", help="Position title")] = "",
    word_count: Annotated[int, typer.Option("--words", "-w", help="Approximate length", min=50)] = 250,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output text file")] = None,
    provider: ProviderOption = None,
    model: ModelOption = None,
):
    """Write cover letter body prose (feed the result to cover_letter.py assemble)."""
    setup_intake_logger(LOGS_PATH / f"intake_{now()}")
    master = CVRecord.from_file(cv_file)
    job_description = job_file.read_text(encoding="utf-8")
    body = _run(
        lambda: generate_cover_letter_body(
            master,
            job_description,
            company=company,
            position=position,
            word_count=word_count,
            llm=get_provider(provider, model),
        )
    )

    if output is None:
        typer.echo(body)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(body + "\n", encoding="utf-8")
    typer.secho(f"\n✓ Body written to {output}\n", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
