"""
Cover Letter Context

Responsibilities:
- Builds the cover-letter prompt from a resume, a job description and
  optional personal details
- Sends it through the shared LLM transport

Owns: Cover-letter prompt
Never: Raises to its caller for upstream failures
"""
