"""
Formatting context logger.

Provides logging interface for the formatting context with automatic [format] prefix.
All formatting modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[format]"


# Wrapper functions with automatic [format] prefix


def _log_info(message: str) -> None:
    """Log info message with [format] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [format] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [format] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [format] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level formatting-specific logging helpers


def log_format_start(content_length: int, is_html: bool) -> None:
    kind = "HTML" if is_html else "plain text"
    _log_info(f"Formatting {kind} resume ({content_length} chars)")


def log_already_formatted() -> None:
    _log_debug("Document already formatted, skipping API call")


def log_truncation(original_length: int, max_chars: int) -> None:
    _log_info(f"Resume truncated from {original_length} to {max_chars} characters for API request")


def log_format_result(formatted_length: int, merged_remainder: int) -> None:
    """Log a successful formatting call."""
    _log_success(f"Formatted resume ({formatted_length} chars)")
    if merged_remainder:
        _log_debug(f"  Merged {merged_remainder} unsent characters back onto the result")


def log_format_fallback(reason: str) -> None:
    _log_warning(f"{reason}; keeping original content")
