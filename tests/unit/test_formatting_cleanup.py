"""Unit tests for formatting response clean-up rules."""

import pytest

from resume_tailor.contexts.formatting.cleanup import (
    clean_formatted_response,
    normalize_bullets,
    touch_up_sections,
    truncate_at_preamble,
)

RESUME_RESPONSE = """```markdown
# JANE DOE
jane@example.com | (555) 010-0000

## PROJECTS
**Widget Tracker**
*Jan 2020 - May 2020* Built a tracking service
  - Cut latency by 40%

## SKILLS
**Languages**: Python, Go
```

### Changes Made:
- Converted bullets"""


@pytest.mark.unit
def test_clean_full_response():
    result = clean_formatted_response(RESUME_RESPONSE)

    assert result == (
        "# JANE DOE\n"
        "jane@example.com | (555) 010-0000\n"
        "\n"
        "## PROJECTS\n"
        "### Widget Tracker\n"
        "*Jan 2020 - May 2020*\n"
        "- Built a tracking service\n"
        "- Cut latency by 40%\n"
        "\n"
        "## SKILLS\n"
        "**Languages**: Python, Go"
    )


@pytest.mark.unit
def test_clean_is_idempotent():
    once = clean_formatted_response(RESUME_RESPONSE)
    assert clean_formatted_response(once) == once


@pytest.mark.unit
def test_clean_empty_and_none():
    assert clean_formatted_response("") == ""
    assert clean_formatted_response(None) == ""
    assert clean_formatted_response("```\n```") == ""


@pytest.mark.unit
def test_preamble_cut_only_after_content():
    assert truncate_at_preamble("# Jane\n\nHere's the formatted resume:") == "# Jane"
    assert truncate_at_preamble("Changes Made: none") == "Changes Made: none"


@pytest.mark.unit
def test_normalize_bullet_glyphs():
    assert normalize_bullets("• Led team\n- • Shipped\n▪ Tested") == "- Led team\n- Shipped\n- Tested"


@pytest.mark.unit
def test_subsections_stay_inside_their_section():
    text = (
        "## EXPERIENCE\n"
        "### Acme\n"
        "**Engineer**\n"
        "    - Built things\n"
        "## SKILLS\n"
        "**Tools**\n"
        "    - Docker"
    )

    result = touch_up_sections(text)

    assert result == (
        "## EXPERIENCE\n"
        "### Acme\n"
        "### Engineer\n"
        "- Built things\n"
        "## SKILLS\n"
        "**Tools**\n"
        "    - Docker"
    )


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    ["# A\n- - - Led team", "# A\n• • • Led team", "# A\n  - -- - Led team", "# A\n---\n- x"],
)
def test_marker_runs_collapse_in_one_pass(text):
    once = clean_formatted_response(text)

    assert clean_formatted_response(once) == once
    assert "- -" not in once


@pytest.mark.unit
def test_marker_run_collapses_to_single_bullet():
    assert normalize_bullets("- - - Led team\n• • • Shipped") == "- Led team\n- Shipped"
    assert normalize_bullets("---\n- x") == "---\n- x"
