#!/usr/bin/env python3
"""
Extract keywords from a job description.

Usage:
    python scripts/extract_keywords.py job_posting.txt
    cat job_posting.txt | python scripts/extract_keywords.py -
    python scripts/extract_keywords.py job_posting.txt --resume resume.docx
    python scripts/extract_keywords.py job_posting.txt --local
"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from resume_tailor.contexts.extraction.extractor import KeywordExtractor
from resume_tailor.contexts.extraction.local_extractor import extract_keywords_locally
from resume_tailor.contexts.extraction.matching import match_keywords
from resume_tailor.contexts.intake.document_loader import load_resume_file
from resume_tailor.utils.llm import get_provider
from resume_tailor.utils.logger import setup_logger
from resume_tailor.utils.settings import load_settings

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH")) if os.getenv("LOGS_PATH") else None

app = typer.Typer(help="Extract keywords from a job description.")


def read_source(source: str) -> str:
    """Read text from a file path, or from stdin when source is '-'."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        typer.secho(f"ERROR: File not found: {source}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


@app.command()
def main(
    source: str = typer.Argument(..., help="Job description file, or '-' for stdin"),
    resume: Optional[Path] = typer.Option(
        None, "--resume", "-r", help="Resume file to score against the keywords"
    ),
    local: bool = typer.Option(False, "--local", help="Skip the API, use local extraction only"),
    model: Optional[str] = typer.Option(None, "--model", help="Model override (default: LLM_MODEL)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Extract keywords and optionally report how well a resume matches them."""
    settings = load_settings()
    setup_logger(
        "extract_keywords",
        log_dir=LOGS_PATH,
        extra_provenance={"Provider": settings.provider, "Model": model or settings.model},
        console_level="DEBUG" if verbose else "INFO",
    )

    job_description = read_source(source)

    if local:
        keywords = extract_keywords_locally(job_description, settings.local_keyword_limit)
        source_label = "local"
    else:
        extractor = KeywordExtractor(get_provider(model=model, settings=settings), settings=settings)
        result = asyncio.run(extractor.extract(job_description))
        if result.warning:
            typer.secho(f"Warning: {result.warning}", fg=typer.colors.YELLOW, err=True)
        keywords = result.keywords
        source_label = result.source

    typer.echo(f"\n=== Keywords ({len(keywords)}, source: {source_label}) ===")
    for keyword in keywords:
        typer.echo(f"  {keyword}")

    if resume is not None:
        upload = load_resume_file(resume)
        if not upload.success:
            typer.secho(f"ERROR: {upload.message}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        match = match_keywords(keywords, upload.content)
        typer.echo(f"\n=== Match: {match.ratio:.0f}% ===")
        typer.echo(f"  Matched: {', '.join(match.matched) or '-'}")
        typer.echo(f"  Missing: {', '.join(match.unmatched) or '-'}")


if __name__ == "__main__":
    app()
