"""
Cover letter context logger.

Provides logging interface for the cover letter context with automatic [cover] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[cover]"


def _log_info(message: str) -> None:
    """Log info message with [cover] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [cover] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [cover] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def log_generation_start(company: str = None) -> None:
    target = f" for {company}" if company else ""
    _log_info(f"Generating cover letter{target}")


def log_generation_success(content_length: int) -> None:
    _log_success(f"Generated cover letter ({content_length} chars)")


def log_generation_failure(error: str) -> None:
    _log_error(f"Error generating cover letter: {error}")
