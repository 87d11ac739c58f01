"""
Deterministic correction of LLM keyword lists.

Models sometimes omit or mangle well-known terms (e.g. "C++" collapsed to "C").
Enrichment re-adds known terms that appear in the job description or in the
raw model response but are missing from the parsed keyword list.
"""

from typing import Any, Iterable, List, Optional, Sequence

from resume_tailor.contexts.extraction.known_terms import (
    DEFAULT_KNOWN_TERMS,
    SUBSTRING_SAFETY_CHECKS,
    KnownTerm,
)
from resume_tailor.utils.llm import coerce_terms


def dedupe_case_insensitive(keywords: Iterable[str]) -> List[str]:
    """Drop later duplicates under case-insensitive comparison, keeping first-seen order."""
    seen = set()
    unique = []
    for keyword in keywords:
        key = keyword.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(keyword)
    return unique


def find_missing_terms(
    keywords: Sequence[str],
    raw_response: str,
    source_text: str,
    terms: Optional[Sequence[KnownTerm]] = None,
) -> List[str]:
    """
    Find known terms present in the source or response but absent from keywords.

    Args:
        keywords: Parsed keyword list
        raw_response: Unparsed model output
        source_text: The job description the keywords were extracted from
        terms: Known-term table (default: DEFAULT_KNOWN_TERMS)

    Returns:
        Canonical spellings to append, in table order
    """
    terms = DEFAULT_KNOWN_TERMS if terms is None else terms
    present = {keyword.lower() for keyword in keywords}
    missing = []

    for term in terms:
        key = term.canonical.lower()
        if key in present:
            continue
        regex = term.compile()
        if regex.search(source_text) or regex.search(raw_response):
            missing.append(term.canonical)
            present.add(key)

    lowered_source = source_text.lower()
    for canonical, needle in SUBSTRING_SAFETY_CHECKS:
        if canonical.lower() not in present and needle in lowered_source:
            missing.append(canonical)
            present.add(canonical.lower())

    return missing


def enrich_keywords(
    keywords: Iterable[Any],
    raw_response: str,
    source_text: str,
    terms: Optional[Sequence[KnownTerm]] = None,
) -> List[str]:
    """
    Validate keywords and re-inject known terms the model dropped.

    Args:
        keywords: Parsed keywords (non-string entries are discarded)
        raw_response: Unparsed model output
        source_text: The job description
        terms: Known-term table (default: DEFAULT_KNOWN_TERMS)

    Returns:
        Non-empty strings, unique under case-insensitive comparison

    Example:
        >>> enrich_keywords(["Python"], '["Python"]', "Python and C++ required")
        ['Python', 'C++']
    """
    valid = coerce_terms(keywords or [])
    missing = find_missing_terms(valid, raw_response or "", source_text or "", terms)
    return dedupe_case_insensitive(valid + missing)
