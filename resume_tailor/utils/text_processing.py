"""Text processing utilities shared across contexts."""

import re

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_html_tags(text: str) -> str:
    """
    Remove HTML tags, leaving the text content in place.

    Example:
        >>> strip_html_tags("<p>Python <strong>developer</strong></p>")
        'Python developer'
    """
    return HTML_TAG_PATTERN.sub("", text or "")


def looks_like_html(text: str) -> bool:
    """Treat text containing both angle brackets as HTML."""
    return "<" in text and ">" in text


def collapse_whitespace(text: str) -> str:
    """Replace every whitespace run with a single space."""
    return re.sub(r"\s+", " ", text)

