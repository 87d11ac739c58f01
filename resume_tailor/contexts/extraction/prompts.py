"""Prompt templates for keyword extraction."""

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

SYSTEM_PROMPT = """\
You are a meticulous technical skills extractor. Identify every technical skill, tool, \
framework, programming language, methodology and domain-specific keyword in a job \
description. Technical postings usually warrant 15-30 keywords. Keep every term exactly \
as written: never simplify programming language names ("C++" stays "C++", not "C"), \
never change capitalization, never expand abbreviations. \
Respond with ONLY a JSON array of strings and no explanation."""

USER_PROMPT_TEMPLATE = """\
Extract every keyword from this job description that is worth including in a resume:

1. Programming languages, with their exact names (Python, C++, Java, ...)
2. Frameworks and libraries, even ones mentioned in passing
3. Tools and platforms
4. Methodologies and processes
5. Domain-specific terms
6. Abbreviations such as "K8s", "CI/CD", "ML/AI", "E2E", exactly as written
7. Soft skills the posting explicitly emphasizes

Preserve exact terminology and capitalization. "Node.js" must not become "Node".

Return ONLY a JSON array of strings, with no additional text.

Job description: {job_description}"""

# Generic query used to check that the credential and endpoint work
VALIDATION_QUERY = "Software Engineer React"

# Generation settings for keyword requests
KEYWORD_MAX_TOKENS = 800
KEYWORD_TEMPERATURE = 0.05


def build_keyword_prompt(job_description: str) -> str:
    """Build the user prompt for a (cleaned) job description."""
    return USER_PROMPT_TEMPLATE.format(job_description=job_description)
