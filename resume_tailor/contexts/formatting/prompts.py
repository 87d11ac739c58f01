"""Prompt templates for resume formatting."""

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

SYSTEM_PROMPT = """\
You are a resume formatter specializing in clean, professional markdown. Format resumes \
with this structure exactly:

1. Identify every main section header (EDUCATION, WORK EXPERIENCE, TECHNICAL SKILLS, PROJECTS, ...)
2. Name as a level 1 heading (# NAME)
3. Contact details on one line below the name
4. Main section headers as level 2 headings (## SECTION)
5. Company and project names as level 3 headings (### Name)
6. Locations and dates in italics (*Location*)
7. Convert every bullet character (•) to a hyphen: each bullet line starts with "- "
8. Blank lines between positions and projects

Return ONLY the formatted resume: no code fences, no explanations, no "Changes Made" section."""

# =============================================================================
# USER PROMPTS
# =============================================================================

HTML_PROMPT_TEMPLATE = """\
Format this HTML resume. Fix spacing and alignment only. Preserve all content.

IMPORTANT: Return ONLY the formatted HTML resume. Do not include explanations, markdown \
code blocks, or "Changes Made" sections.

{content}"""

MARKDOWN_PROMPT_TEMPLATE = """\
Convert this plain text resume to markdown.

First, identify the main section headers (EDUCATION, WORK EXPERIENCE, TECHNICAL SKILLS, \
PROJECTS, ...) and the entries under each one.

Then format it following these rules:
- Name as a level 1 heading (# NAME)
- Contact details on a single line below the name
- Main section headers as level 2 headings (## SECTION)
- Company names and project names as level 3 headings (### Name)
- Job titles in bold (**Title**)
- Locations and dates in italics (*Location* / *Dates*)
- Every bullet point starts with a hyphen and a space ("- "), never with "•"
- Several positions at the same company each get their own level 3 heading
- Blank lines between positions

Example of the expected format:
# JANE DOE
jane@example.com | (555) 010-0000 | linkedin.com/in/janedoe

## PROFESSIONAL EXPERIENCE
### Company Name
*City, State*
**Job Title**
*Start Date - End Date*
- Accomplishment
- Another accomplishment

## PROJECTS
### Project Name
*Start Date - End Date*
- Accomplishment

## SKILLS
Skill 1, Skill 2, Skill 3

Do not wrap the response in code fences. Return the raw markdown, preserving ALL content:

{content}"""

FORMAT_TEMPERATURE = 0.1


def build_format_prompt(content: str, is_html: bool) -> str:
    """Pick the HTML or markdown prompt for the (truncated) content."""
    template = HTML_PROMPT_TEMPLATE if is_html else MARKDOWN_PROMPT_TEMPLATE
    return template.format(content=content)
