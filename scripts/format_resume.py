#!/usr/bin/env python3
"""
Reformat a resume through the LLM.

Usage:
    python scripts/format_resume.py resume.pdf
    python scripts/format_resume.py resume.docx -o formatted.md
    python scripts/format_resume.py formatted.md --force
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from resume_tailor.contexts.formatting.formatter import ResumeFormatter
from resume_tailor.contexts.intake.document_loader import load_resume_file
from resume_tailor.utils.llm import get_provider
from resume_tailor.utils.logger import setup_logger
from resume_tailor.utils.settings import load_settings

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH")) if os.getenv("LOGS_PATH") else None

app = typer.Typer(help="Reformat a resume through the LLM.")


@app.command()
def main(
    resume: Path = typer.Argument(..., help="Resume file (.pdf, .docx, .txt, .md)"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the result here instead of stdout"
    ),
    force: bool = typer.Option(
        False, "--force", help="Reformat even if the file carries the formatted marker"
    ),
    model: Optional[str] = typer.Option(None, "--model", help="Model override (default: LLM_MODEL)"),
):
    """Load a resume, reformat it and print or save the result."""
    settings = load_settings()
    setup_logger(
        "format_resume",
        log_dir=LOGS_PATH,
        extra_provenance={"Resume": resume, "Model": settings.model},
    )

    upload = load_resume_file(resume)
    if not upload.success:
        typer.secho(f"ERROR: {upload.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    formatter = ResumeFormatter(get_provider(model=model, settings=settings), settings=settings)
    document = asyncio.run(formatter.format(upload.content, force=force))

    if document.fallback_reason:
        typer.secho(f"Warning: {document.fallback_reason}", fg=typer.colors.YELLOW, err=True)

    if output is None:
        typer.echo(document.body)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document.body, encoding="utf-8")
    typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
