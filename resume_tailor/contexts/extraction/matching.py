"""Keyword match scoring of a resume against an extracted keyword list."""

from dataclasses import dataclass, field
from typing import Iterable, List

from resume_tailor.utils.text_processing import strip_html_tags


@dataclass
class KeywordMatch:
    """Which active keywords appear in the resume, and the match ratio in percent."""

    matched: List[str] = field(default_factory=list)
    unmatched: List[str] = field(default_factory=list)
    ratio: float = 0.0


def match_keywords(
    keywords: Iterable[str], resume_text: str, removed: Iterable[str] = ()
) -> KeywordMatch:
    """
    Check which keywords occur in the resume.

    Matching is a case-insensitive substring test against the resume with HTML
    tags stripped. Keywords the user removed are excluded from both the
    matched list and the ratio denominator.

    Args:
        keywords: Keyword list, in display order
        resume_text: Resume editor content (plain text or HTML)
        removed: Keywords the user dismissed

    Returns:
        KeywordMatch; ratio is 0.0 when no keywords are active
    """
    removed = set(removed)
    plain_resume = strip_html_tags(resume_text or "").lower()
    active = [keyword for keyword in keywords if keyword not in removed]

    matched = [keyword for keyword in active if keyword.lower() in plain_resume]
    unmatched = [keyword for keyword in active if keyword.lower() not in plain_resume]
    ratio = len(matched) / len(active) * 100 if active else 0.0

    return KeywordMatch(matched=matched, unmatched=unmatched, ratio=ratio)
