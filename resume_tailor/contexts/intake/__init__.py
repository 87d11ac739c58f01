"""
Intake Context

Responsibilities:
- Loads resume files (PDF, DOCX, plain text) into editor content
- Converts extracted text into simple HTML the editor understands

Owns: Nothing (parsing is delegated to pdfplumber and python-docx)
Never: Raises for unreadable or unsupported files
"""
