"""Unit tests for ResumeDocument status handling and FormattingJob truncation."""

import pytest

from resume_tailor.contexts.formatting.document import (
    LEGACY_FORMATTED_MARKER,
    DocumentStatus,
    FormattingJob,
    ResumeDocument,
)


@pytest.mark.unit
def test_plain_text_is_raw():
    doc = ResumeDocument.from_text("Jane Doe")
    assert doc.status == DocumentStatus.RAW
    assert not doc.is_formatted


@pytest.mark.unit
def test_legacy_marker_becomes_status():
    doc = ResumeDocument.from_text("Jane Doe" + LEGACY_FORMATTED_MARKER)

    assert doc.body == "Jane Doe"
    assert doc.is_formatted


@pytest.mark.unit
def test_coerce_keeps_documents():
    doc = ResumeDocument("x", DocumentStatus.FORMATTED)
    assert ResumeDocument.coerce(doc) is doc


@pytest.mark.unit
def test_as_raw_clears_status_and_reason():
    doc = ResumeDocument("x", DocumentStatus.FORMATTED, fallback_reason="timeout")
    raw = doc.as_raw()

    assert raw.body == "x"
    assert raw.status == DocumentStatus.RAW
    assert raw.fallback_reason is None


@pytest.mark.unit
def test_html_detection():
    assert ResumeDocument("<p>Jane</p>").is_html
    assert not ResumeDocument("a < b").is_html


@pytest.mark.unit
def test_short_content_not_truncated():
    job = FormattingJob.build("Jane Doe", max_chars=100)

    assert not job.was_truncated
    assert job.truncated_text == "Jane Doe"
    assert job.remainder == ""
    assert job.merge("# JANE DOE") == "# JANE DOE"


@pytest.mark.unit
def test_plain_text_truncation_and_merge():
    text = "0123456789" * 5
    job = FormattingJob.build(text, max_chars=20)

    assert job.was_truncated
    assert job.truncated_text == text[:20] + "..."
    assert job.remainder == text[20:]

    merged = job.merge("FORMATTED")
    assert merged == "FORMATTED" + text[20:]
    assert len(merged) == len("FORMATTED") + len(text) - 20


@pytest.mark.unit
def test_html_truncation_uses_spaced_ellipsis():
    text = "<p>" + "x" * 30 + "</p>"
    job = FormattingJob.build(text, max_chars=10)

    assert job.is_html
    assert job.truncated_text == text[:10] + " ..."


@pytest.mark.unit
def test_job_strips_legacy_marker():
    job = FormattingJob.build("Jane" + LEGACY_FORMATTED_MARKER, max_chars=100)

    assert job.cleaned_text == "Jane"
    assert job.original_text.endswith(LEGACY_FORMATTED_MARKER)
