"""
Clean-up rules for formatting responses.

Every rule here is deterministic and idempotent: running
clean_formatted_response() on its own output returns the same text.
"""

import re
from typing import Callable, Dict

from resume_tailor.utils.llm import strip_code_fences

# =============================================================================
# PATTERNS
# =============================================================================

# Model commentary that starts after the document; everything from the marker on is dropped
PREAMBLE_MARKERS = (
    "### Changes Made:",
    "Changes Made:",
    "Here's the formatted",
    "Here is the formatted",
    "I've formatted",
)

BULLET_GLYPHS = "•●○◆◇▪▫■□◦‣"
BULLET_GLYPH_PATTERN = re.compile(rf"[{BULLET_GLYPHS}][ \t]*")
# Whole run of line-leading markers ("- - - x"); a bare "---" rule has no trailing space and is kept
DOUBLED_BULLET_PATTERN = re.compile(r"^([ \t]*)-(?:[ \t]*-)+[ \t]+", re.MULTILINE)

BOLD_LEADER_PATTERN = re.compile(r"^[ \t]*\*\*([\w \-&:,.()/|']+?)\*\*", re.MULTILINE)
INDENTED_BULLET_PATTERN = re.compile(r"^[ \t]+- ", re.MULTILINE)
# "*Jan 2020 - May 2020* Built a thing" -> italic line, then a bullet
INLINE_AFTER_ITALIC_PATTERN = re.compile(r"^([ \t]*\*[^*\n]+\*)[ \t]+([^\s\-|*].*)$", re.MULTILINE)

# Section title regex fragments, matched against level 1-2 headings
SECTION_TITLES = {
    "projects": r"PROJECTS",
    "experience": r"(?:WORK |PROFESSIONAL )?EXPERIENCE",
    "education": r"EDUCATION",
}


def _section_pattern(title: str) -> re.Pattern:
    # Section runs until the next level 1-2 heading ("### " subsections stay inside)
    return re.compile(
        rf"^#{{1,2}}[ \t]+{title}\b[^\n]*(?:\n|\Z).*?(?=^#{{1,2}}[ \t]|\Z)",
        re.MULTILINE | re.DOTALL | re.IGNORECASE,
    )


SECTION_PATTERNS = {name: _section_pattern(title) for name, title in SECTION_TITLES.items()}


# =============================================================================
# RULES
# =============================================================================


def truncate_at_preamble(text: str) -> str:
    """Cut text at the first explanatory marker (ignored when the marker opens the text)."""
    for marker in PREAMBLE_MARKERS:
        index = text.find(marker)
        if index > 0:
            text = text[:index].strip()
    return text


def normalize_bullets(text: str) -> str:
    """
    Replace bullet glyphs with "- " and collapse doubled line-leading markers.

    Example:
        >>> normalize_bullets("• Led team\\n- • Shipped")
        '- Led team\\n- Shipped'
    """
    text = BULLET_GLYPH_PATTERN.sub("- ", text)
    return DOUBLED_BULLET_PATTERN.sub(r"\1- ", text)


def _promote_subsections(section: str) -> str:
    section = BOLD_LEADER_PATTERN.sub(r"### \1", section)
    return INDENTED_BULLET_PATTERN.sub("- ", section)


def _touch_up_projects(section: str) -> str:
    section = _promote_subsections(section)
    return INLINE_AFTER_ITALIC_PATTERN.sub(r"\1\n- \2", section)


SECTION_RULES: Dict[str, Callable[[str], str]] = {
    "projects": _touch_up_projects,
    "experience": _promote_subsections,
    "education": _promote_subsections,
}


def touch_up_sections(text: str) -> str:
    """
    Apply section-scoped fixes to Projects, Experience and Education.

    Within each section, bold line leaders become "### " subsection headings
    and indented bullets move to the start of the line. In Projects, text that
    follows an italic date on the same line becomes its own bullet.
    """
    for name, pattern in SECTION_PATTERNS.items():
        rule = SECTION_RULES[name]
        text = pattern.sub(lambda match: rule(match.group(0)), text)
    return text


def clean_formatted_response(text: str) -> str:
    """
    Turn a model's reformatted resume into final document text.

    Steps: strip code fences, cut explanatory commentary, normalize bullets,
    apply section touch-ups.

    Args:
        text: Raw model response

    Returns:
        Cleaned text; empty string if nothing usable remains
    """
    text = strip_code_fences(text or "").strip()
    text = truncate_at_preamble(text)
    text = normalize_bullets(text)
    text = touch_up_sections(text)
    return text.strip()
