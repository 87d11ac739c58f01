"""
Formatting Context

Responsibilities:
- Sends resume content to the LLM for reformatting (HTML or markdown)
- Bounds the request size and merges the unsent remainder back
- Strips code fences and model commentary from responses
- Applies deterministic bullet and heading clean-up
- Tracks whether a document has been formatted, outside the document text

Owns: Document status, formatting prompts, response clean-up rules
Never: Blocks the editing workflow; failures return the original content
"""
