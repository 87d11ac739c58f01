"""
Resume formatting orchestrator.

ResumeFormatter.format() is best-effort: it never raises, and every failure
(missing credential, timeout, HTTP error, empty response) yields the original
content marked FORMATTED with a fallback_reason, so the editor never reprocesses
it in a loop and never receives an empty document.
"""

import asyncio
from typing import Optional, Union

from resume_tailor.contexts.formatting.cleanup import clean_formatted_response
from resume_tailor.contexts.formatting.document import (
    DocumentStatus,
    FormattingJob,
    ResumeDocument,
)
from resume_tailor.contexts.formatting.logger import (
    log_already_formatted,
    log_format_fallback,
    log_format_result,
    log_format_start,
    log_truncation,
)
from resume_tailor.contexts.formatting.prompts import (
    FORMAT_TEMPERATURE,
    SYSTEM_PROMPT,
    build_format_prompt,
)
from resume_tailor.utils.exceptions import MissingAPIKeyError
from resume_tailor.utils.llm import LLMProvider
from resume_tailor.utils.settings import Settings, load_settings


class ResumeFormatter:
    """
    Facade for resume reformatting.

    Args:
        provider: Transport used for chat completions
        settings: Settings (default: the provider's settings)
    """

    def __init__(self, provider: LLMProvider, settings: Optional[Settings] = None):
        self.provider = provider
        self.settings = settings or getattr(provider, "settings", None) or load_settings()

    async def format(
        self, document: Union[str, ResumeDocument], force: bool = False
    ) -> ResumeDocument:
        """
        Reformat a resume.

        Args:
            document: ResumeDocument or raw editor text (a trailing legacy
                marker is read as FORMATTED status)
            force: Reprocess even if the document is already FORMATTED

        Returns:
            FORMATTED ResumeDocument. Already-formatted input is returned
            unchanged (the same object) unless force is set; empty input is
            returned as is.
        """
        doc = ResumeDocument.coerce(document)
        if not doc.body.strip():
            return doc
        if doc.is_formatted and not force:
            log_already_formatted()
            return doc

        job = FormattingJob.build(doc.body, self.settings.format_max_chars)
        log_format_start(len(job.cleaned_text), job.is_html)
        if job.was_truncated:
            log_truncation(len(job.cleaned_text), job.max_chars)

        try:
            response = await asyncio.wait_for(
                self.provider.generate(
                    SYSTEM_PROMPT,
                    build_format_prompt(job.truncated_text, job.is_html),
                    max_tokens=self.settings.format_max_tokens,
                    temperature=FORMAT_TEMPERATURE,
                    timeout_s=self.settings.format_timeout_s,
                ),
                timeout=self.settings.request_deadline_s,
            )
        except MissingAPIKeyError:
            return self._fallback(job, "API key not found")
        except asyncio.TimeoutError:
            return self._fallback(job, "Formatting request exceeded its deadline")
        except Exception as exc:  # noqa: BLE001 - formatting must never block editing
            return self._fallback(job, f"Formatting request failed ({type(exc).__name__}: {exc})")

        cleaned = clean_formatted_response(response.content)
        if not cleaned:
            return self._fallback(job, "Empty response from API")

        log_format_result(len(cleaned), len(job.remainder))
        return ResumeDocument(body=job.merge(cleaned), status=DocumentStatus.FORMATTED)

    async def format_text(self, text: str, force: bool = False) -> str:
        """Convenience wrapper returning only the document body."""
        result = await self.format(text, force=force)
        return result.body

    def _fallback(self, job: FormattingJob, reason: str) -> ResumeDocument:
        log_format_fallback(reason)
        return ResumeDocument(
            body=job.cleaned_text,
            status=DocumentStatus.FORMATTED,
            fallback_reason=reason,
        )
