#!/usr/bin/env python3
"""
Check that the configured API key and endpoint work.

Usage:
    python scripts/check_api.py
    LLM_PROVIDER=openai python scripts/check_api.py
"""

import asyncio
from typing import Optional

import typer
from dotenv import load_dotenv

from resume_tailor.contexts.extraction.extractor import KeywordExtractor
from resume_tailor.utils.llm import get_provider
from resume_tailor.utils.logger import setup_logger
from resume_tailor.utils.settings import load_settings

load_dotenv()

app = typer.Typer(help="Validate API access.")


@app.command()
def main(
    model: Optional[str] = typer.Option(None, "--model", help="Model override (default: LLM_MODEL)"),
):
    """Send the validation probe and report the outcome."""
    settings = load_settings()
    setup_logger("check_api", console_level="DEBUG")

    llm = get_provider(model=model, settings=settings)
    typer.echo(f"Provider: {llm.name}")
    if not llm.api_key:
        typer.secho("✗ No API key configured", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    extractor = KeywordExtractor(llm, settings=settings)
    if asyncio.run(extractor.validate_api()):
        keywords = extractor.context.validation_keywords or []
        typer.secho(f"✓ API working ({', '.join(keywords)})", fg=typer.colors.GREEN)
    else:
        typer.secho("✗ API validation failed (see log above)", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
