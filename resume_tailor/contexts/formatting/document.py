"""
Document status model for formatting.

Whether content has already been formatted is carried in ResumeDocument.status,
never inside the text. Text coming from older sessions may still end with the
legacy "___FORMATTED___" sentinel; from_text() converts it to the status field.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from resume_tailor.utils.text_processing import looks_like_html

LEGACY_FORMATTED_MARKER = "___FORMATTED___"


class DocumentStatus(str, Enum):
    RAW = "raw"
    FORMATTED = "formatted"


@dataclass(frozen=True)
class ResumeDocument:
    """
    Resume content plus its processing status.

    Attributes:
        body: Editor content (plain text, markdown or HTML)
        status: RAW until the document has been through formatting
        fallback_reason: Set when formatting failed and body is the original content
    """

    body: str
    status: DocumentStatus = DocumentStatus.RAW
    fallback_reason: Optional[str] = None

    @classmethod
    def from_text(cls, text: str) -> "ResumeDocument":
        """Wrap editor text, translating a trailing legacy marker into FORMATTED status."""
        text = text or ""
        if text.endswith(LEGACY_FORMATTED_MARKER):
            return cls(body=text[: -len(LEGACY_FORMATTED_MARKER)], status=DocumentStatus.FORMATTED)
        return cls(body=text)

    @classmethod
    def coerce(cls, value: Union[str, "ResumeDocument"]) -> "ResumeDocument":
        if isinstance(value, ResumeDocument):
            return value
        return cls.from_text(value)

    @property
    def is_formatted(self) -> bool:
        return self.status == DocumentStatus.FORMATTED

    @property
    def is_html(self) -> bool:
        return looks_like_html(self.body)

    def as_raw(self) -> "ResumeDocument":
        """Same body marked RAW, so the formatter processes it again."""
        return replace(self, status=DocumentStatus.RAW, fallback_reason=None)


@dataclass(frozen=True)
class FormattingJob:
    """
    One formatting request.

    Attributes:
        original_text: Content as received
        cleaned_text: Content with any legacy marker removed
        truncated_text: What is sent upstream (cleaned_text capped at max_chars,
            with an ellipsis when cut)
        is_html: Whether the HTML prompt is used
        max_chars: Request size cap
    """

    original_text: str
    cleaned_text: str
    truncated_text: str
    is_html: bool
    max_chars: int

    @classmethod
    def build(cls, original_text: str, max_chars: int) -> "FormattingJob":
        cleaned = original_text
        if cleaned.endswith(LEGACY_FORMATTED_MARKER):
            cleaned = cleaned[: -len(LEGACY_FORMATTED_MARKER)]
        is_html = looks_like_html(cleaned)

        truncated = cleaned
        if len(cleaned) > max_chars:
            truncated = cleaned[:max_chars] + (" ..." if is_html else "...")

        return cls(
            original_text=original_text,
            cleaned_text=cleaned,
            truncated_text=truncated,
            is_html=is_html,
            max_chars=max_chars,
        )

    @property
    def was_truncated(self) -> bool:
        return len(self.cleaned_text) > self.max_chars

    @property
    def remainder(self) -> str:
        """Content beyond the cap, never seen by the model."""
        return self.cleaned_text[self.max_chars :] if self.was_truncated else ""

    def merge(self, formatted_prefix: str) -> str:
        """Append the untouched remainder to the model's cleaned output."""
        return formatted_prefix + self.remainder
