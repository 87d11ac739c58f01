"""
Extraction Context

Responsibilities:
- Requests keyword lists for job descriptions from the LLM
- Repairs free-form model output into keyword lists
- Re-injects well-known technical terms the model dropped
- Caches results and collapses concurrent identical requests
- Falls back to a local heuristic whenever the API is unusable
- Scores a resume against a keyword list

Owns: Keyword cache, in-flight request tracking, known-term dictionary
Never: Raises to its caller during normal operation
"""
