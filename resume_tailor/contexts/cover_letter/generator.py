"""
Cover letter generation.

Uses the same transport as keyword extraction and formatting with its own
prompt. Failures are reported in the result, never raised.
"""

from dataclasses import dataclass
from typing import Optional

from resume_tailor.contexts.cover_letter.logger import (
    log_generation_failure,
    log_generation_start,
    log_generation_success,
)
from resume_tailor.utils.llm import LLMProvider, strip_code_fences

COVER_LETTER_MAX_TOKENS = 1500
COVER_LETTER_TEMPERATURE = 0.2

MISSING_INPUT_ERROR = "Resume and job description are required to generate a cover letter."

SYSTEM_PROMPT = (
    "You are a professional cover letter writer with expertise in creating personalized, "
    "compelling cover letters that highlight relevant skills and experiences."
)

USER_PROMPT_TEMPLATE = """\
Generate a professional, personalized cover letter based on the following resume and job description.
The cover letter should highlight the most relevant skills and experiences from my resume that align \
with the job requirements.
Structure the cover letter with a proper greeting, introduction, 2-3 paragraphs showcasing relevant \
experience, and a conclusion with call to action.
Make the tone professional but conversational. Avoid generic statements and cliches.
{personal_details}
RESUME:
{resume_content}

JOB DESCRIPTION:
{job_description}

Format the cover letter in a professional business format with proper spacing."""


@dataclass
class CoverLetterRequest:
    """Inputs for one cover letter. Only resume_content and job_description are required."""

    resume_content: str
    job_description: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_phone: Optional[str] = None
    target_company: Optional[str] = None
    additional_notes: Optional[str] = None


@dataclass
class CoverLetterResult:
    success: bool
    content: str
    error: Optional[str] = None


def _personal_details(request: CoverLetterRequest) -> str:
    lines = []
    if request.user_name:
        lines.append(f"My name is {request.user_name}.")
    contact = " ".join(value for value in (request.user_email, request.user_phone) if value)
    if contact:
        lines.append(f"My contact information is {contact}.")
    if request.target_company:
        lines.append(f"The company I'm applying to is {request.target_company}.")
    if request.additional_notes:
        lines.append(f"Additional customization notes: {request.additional_notes}")
    if not lines:
        return ""
    return "\n" + "\n".join(lines) + "\n"


def build_cover_letter_prompt(request: CoverLetterRequest) -> str:
    """
    Build the user prompt for a cover letter.

    Optional details (name, contact, company, notes) are included only when set.
    """
    return USER_PROMPT_TEMPLATE.format(
        personal_details=_personal_details(request),
        resume_content=request.resume_content,
        job_description=request.job_description,
    )


async def generate_cover_letter(
    provider: LLMProvider, request: CoverLetterRequest
) -> CoverLetterResult:
    """
    Generate a cover letter for a resume and job description.

    Args:
        provider: Transport used for chat completions
        request: Resume, job description and optional personal details

    Returns:
        CoverLetterResult; success=False with an error message when inputs are
        missing (no API call is made) or the request failed
    """
    if not (request.resume_content or "").strip() or not (request.job_description or "").strip():
        return CoverLetterResult(success=False, content="", error=MISSING_INPUT_ERROR)

    log_generation_start(request.target_company)
    try:
        response = await provider.generate(
            SYSTEM_PROMPT,
            build_cover_letter_prompt(request),
            max_tokens=COVER_LETTER_MAX_TOKENS,
            temperature=COVER_LETTER_TEMPERATURE,
        )
    except Exception as exc:  # noqa: BLE001 - surfaced to the user as an error message
        log_generation_failure(str(exc))
        return CoverLetterResult(success=False, content="", error=str(exc) or type(exc).__name__)

    content = strip_code_fences(response.content).strip()
    if not content:
        log_generation_failure("Empty response from API")
        return CoverLetterResult(success=False, content="", error="Empty response from API")

    log_generation_success(len(content))
    return CoverLetterResult(success=True, content=content)
