#!/usr/bin/env python3
"""
Generate a cover letter from a resume and a job description.

Usage:
    python scripts/generate_cover_letter.py resume.pdf job_posting.txt
    python scripts/generate_cover_letter.py resume.docx job.txt --company "Acme" --name "Jane Doe"
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from resume_tailor.contexts.cover_letter.generator import CoverLetterRequest, generate_cover_letter
from resume_tailor.contexts.intake.document_loader import load_resume_file
from resume_tailor.utils.llm import get_provider
from resume_tailor.utils.logger import setup_logger
from resume_tailor.utils.settings import load_settings
from resume_tailor.utils.text_processing import strip_html_tags

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH")) if os.getenv("LOGS_PATH") else None

app = typer.Typer(help="Generate a cover letter.")


@app.command()
def main(
    resume: Path = typer.Argument(..., help="Resume file (.pdf, .docx, .txt, .md)"),
    job_description: Path = typer.Argument(..., help="Job description text file"),
    name: Optional[str] = typer.Option(None, "--name", help="Your name"),
    email: Optional[str] = typer.Option(None, "--email", help="Your email"),
    phone: Optional[str] = typer.Option(None, "--phone", help="Your phone number"),
    company: Optional[str] = typer.Option(None, "--company", help="Target company"),
    notes: Optional[str] = typer.Option(None, "--notes", help="Additional customization notes"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
):
    """Generate a cover letter and print or save it."""
    settings = load_settings()
    setup_logger("cover_letter", log_dir=LOGS_PATH, extra_provenance={"Model": settings.model})

    upload = load_resume_file(resume)
    if not upload.success:
        typer.secho(f"ERROR: {upload.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    if not job_description.exists():
        typer.secho(f"ERROR: File not found: {job_description}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    request = CoverLetterRequest(
        resume_content=strip_html_tags(upload.content),
        job_description=job_description.read_text(encoding="utf-8"),
        user_name=name,
        user_email=email,
        user_phone=phone,
        target_company=company,
        additional_notes=notes,
    )
    result = asyncio.run(generate_cover_letter(get_provider(settings=settings), request))

    if not result.success:
        typer.secho(f"ERROR: {result.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if output is None:
        typer.echo(result.content)
    else:
        output.write_text(result.content, encoding="utf-8")
        typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
