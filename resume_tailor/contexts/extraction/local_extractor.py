"""Local (non-AI) keyword extraction used when the API is unavailable."""

import re
from typing import List

from resume_tailor.utils.text_processing import strip_html_tags

COMMON_WORDS = {
    "the", "and", "to", "of", "a", "in", "for", "is", "on", "that", "by",
    "this", "with", "i", "you", "it", "not", "or", "be", "are", "from", "at",
    "as", "your", "have", "more", "an", "was", "we", "will", "can", "all", "has",
}

MIN_WORD_LENGTH = 4
DEFAULT_LIMIT = 20


def extract_keywords_locally(text: str, limit: int = DEFAULT_LIMIT) -> List[str]:
    """
    Pick candidate keywords from raw text without calling the API.

    Strips HTML, lowercases, splits on whitespace, removes punctuation, then
    keeps unique words of at least 4 characters that are not common words.

    Args:
        text: Job description (plain text or HTML)
        limit: Maximum number of keywords returned

    Returns:
        Lowercase keywords in first-seen order
    """
    words = strip_html_tags(text or "").lower().split()
    keywords = []
    seen = set()
    for word in words:
        word = re.sub(r"[^\w]", "", word)
        if len(word) < MIN_WORD_LENGTH or word in COMMON_WORDS or word in seen:
            continue
        seen.add(word)
        keywords.append(word)
    return keywords[: max(limit, 0)]
