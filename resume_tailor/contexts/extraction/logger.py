"""
Extraction context logger.

Provides logging interface for the extraction context with automatic [extract] prefix.
All extraction modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[extract]"


# Wrapper functions with automatic [extract] prefix


def _log_info(message: str) -> None:
    """Log info message with [extract] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [extract] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [extract] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [extract] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level extraction-specific logging helpers


def log_request_start(cache_key: str, text_length: int) -> None:
    """Log start of an upstream keyword request."""
    _log_info(f"Requesting keywords ({text_length} chars)")
    _log_debug(f"  Cache key: {cache_key!r}")


def log_cache_hit(cache_key: str) -> None:
    _log_debug(f"Cache hit for {cache_key!r}")


def log_joined_inflight(cache_key: str) -> None:
    _log_debug(f"Joining in-flight request for {cache_key!r}")


def log_api_keywords(keywords: list, added_terms: list) -> None:
    """Log keywords returned by the API and the known terms enrichment added."""
    _log_success(f"API returned {len(keywords)} keywords")
    if added_terms:
        _log_info(f"  Added {len(added_terms)} missing known terms: {', '.join(added_terms)}")


def log_fallback(reason: str, keyword_count: int) -> None:
    """Log a fall back to local keyword extraction."""
    _log_warning(f"{reason}; using local extraction ({keyword_count} keywords)")


def log_validation(validated: bool) -> None:
    if validated:
        _log_success("API validation succeeded")
    else:
        _log_warning("API validation failed")
