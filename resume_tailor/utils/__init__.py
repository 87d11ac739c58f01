"""
Shared utilities for resume_tailor.

Common functionality used across contexts:
- LLM transport and response parsing
- Settings and exceptions
- Logging setup
- Text helpers
"""

from resume_tailor.utils.exceptions import (
    LLMError,
    LLMRequestError,
    LLMTimeoutError,
    MissingAPIKeyError,
)
from resume_tailor.utils.settings import Settings, load_settings

__all__ = [
    "LLMError",
    "LLMRequestError",
    "LLMTimeoutError",
    "MissingAPIKeyError",
    "Settings",
    "load_settings",
]
