"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def log_file_loaded(file_name: str, content_length: int) -> None:
    _log_info(f"Loaded {file_name} ({content_length} chars)")


def log_file_rejected(file_name: str, reason: str) -> None:
    _log_error(f"Error uploading file {file_name}: {reason}")
