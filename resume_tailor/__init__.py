"""
resume_tailor - request orchestration for an LLM-assisted resume tailoring tool

Wraps one chat-completion endpoint so a single-process UI can extract job
keywords, reformat a resume, and draft a cover letter without ever receiving
an exception from normal operation.

Architecture:
- Intake Context: Resume file loading (PDF, DOCX, text) into editor content
- Extraction Context: Keyword parsing, enrichment, caching and local fallback
- Formatting Context: Resume reformatting with response cleanup
- Cover Letter Context: Cover letter generation
"""

__version__ = "0.1.0"
