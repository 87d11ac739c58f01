"""Integration tests for ResumeFormatter: status handling, truncation and fallback."""

import asyncio
from dataclasses import replace

import pytest

from resume_tailor.contexts.formatting.document import (
    LEGACY_FORMATTED_MARKER,
    DocumentStatus,
    ResumeDocument,
)
from resume_tailor.contexts.formatting.formatter import ResumeFormatter
from resume_tailor.contexts.formatting.prompts import FORMAT_TEMPERATURE
from resume_tailor.utils.exceptions import LLMRequestError, LLMTimeoutError

PLAIN_RESUME = "JANE DOE\njane@example.com\nEXPERIENCE\nAcme Corp\n• Built services"


@pytest.mark.integration
def test_formats_plain_text(make_provider, settings):
    provider = make_provider(["```markdown\n# JANE DOE\n• Built services\n```"])

    result = asyncio.run(ResumeFormatter(provider).format(PLAIN_RESUME))

    assert result.body == "# JANE DOE\n- Built services"
    assert result.status == DocumentStatus.FORMATTED
    assert result.fallback_reason is None

    request = provider.requests[0]
    assert "Convert this plain text resume to markdown" in request.user_prompt
    assert PLAIN_RESUME in request.user_prompt
    assert request.max_tokens == settings.format_max_tokens
    assert request.timeout_s == settings.format_timeout_s
    assert request.temperature == FORMAT_TEMPERATURE


@pytest.mark.integration
def test_html_content_uses_html_prompt(make_provider):
    provider = make_provider(["```html\n<h1>Jane</h1>\n```"])

    result = asyncio.run(ResumeFormatter(provider).format("<p>Jane</p>"))

    assert result.body == "<h1>Jane</h1>"
    assert "Format this HTML resume" in provider.requests[0].user_prompt


@pytest.mark.integration
def test_formatted_document_is_returned_unchanged(make_provider):
    provider = make_provider(["# NEW"])
    document = ResumeDocument("# JANE DOE", DocumentStatus.FORMATTED)

    result = asyncio.run(ResumeFormatter(provider).format(document))

    assert result is document
    assert provider.calls == 0


@pytest.mark.integration
def test_legacy_marker_skips_formatting(make_provider):
    provider = make_provider(["# NEW"])

    result = asyncio.run(ResumeFormatter(provider).format("# JANE" + LEGACY_FORMATTED_MARKER))

    assert result.body == "# JANE"
    assert result.is_formatted
    assert provider.calls == 0


@pytest.mark.integration
def test_force_reformats(make_provider):
    provider = make_provider(["# NEW"])
    document = ResumeDocument("# OLD", DocumentStatus.FORMATTED)

    result = asyncio.run(ResumeFormatter(provider).format(document, force=True))

    assert result.body == "# NEW"
    assert provider.calls == 1


@pytest.mark.integration
def test_formatting_twice_calls_api_once(make_provider):
    provider = make_provider(["# JANE DOE"])
    formatter = ResumeFormatter(provider)

    first = asyncio.run(formatter.format(PLAIN_RESUME))
    second = asyncio.run(formatter.format(first))

    assert second is first
    assert provider.calls == 1


@pytest.mark.integration
def test_empty_input_returned_as_is(make_provider):
    provider = make_provider()

    result = asyncio.run(ResumeFormatter(provider).format("  "))

    assert result.body == "  "
    assert provider.calls == 0


@pytest.mark.integration
def test_truncated_remainder_is_merged(make_provider, settings):
    text = "".join(str(i % 10) for i in range(50))
    provider = make_provider(["FORMATTED"])
    formatter = ResumeFormatter(provider, settings=replace(settings, format_max_chars=20))

    result = asyncio.run(formatter.format(text))

    assert result.body == "FORMATTED" + text[20:]
    assert len(result.body) == len("FORMATTED") + len(text) - 20
    prompt = provider.requests[0].user_prompt
    assert text[:20] + "..." in prompt
    assert text not in prompt


@pytest.mark.integration
@pytest.mark.parametrize(
    "reply, reason",
    [
        (LLMRequestError("server error", status_code=500), "Formatting request failed"),
        (LLMTimeoutError("timed out"), "Formatting request failed"),
        ("```markdown\n```", "Empty response from API"),
    ],
)
def test_failures_keep_original_content(make_provider, reply, reason):
    provider = make_provider([reply])

    result = asyncio.run(ResumeFormatter(provider).format(PLAIN_RESUME))

    assert result.body == PLAIN_RESUME
    assert result.status == DocumentStatus.FORMATTED
    assert result.fallback_reason.startswith(reason)


@pytest.mark.integration
def test_missing_key_keeps_original_content(make_provider):
    provider = make_provider(api_key=None)

    result = asyncio.run(ResumeFormatter(provider).format_text(PLAIN_RESUME))

    assert result == PLAIN_RESUME
    assert provider.calls == 0
