"""
Resume file loading.

Turns an uploaded resume into editor content:
- PDF: text extracted with pdfplumber, converted to HTML (newlines become
  <br>, runs of spaces become &nbsp; so column alignment survives)
- DOCX: paragraphs read with python-docx, converted to HTML (Heading 1-3
  styles become h1-h3, bold/italic/underline runs become strong/em/u)
- TXT / MD: read as-is

Byte-level parsing is left entirely to the libraries.
"""

import html
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import pdfplumber
from docx import Document

from resume_tailor.contexts.intake.logger import log_file_loaded, log_file_rejected

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt", ".md")

HEADING_STYLES = {"Heading 1": "h1", "Heading 2": "h2", "Heading 3": "h3"}

MULTI_SPACE_PATTERN = re.compile(r" {2,}")


@dataclass
class UploadResult:
    """
    Outcome of loading a resume file.

    Attributes:
        success: Whether content was produced
        content: Editor content (HTML for PDF/DOCX, raw text otherwise)
        file_name: Base name of the loaded file
        message: Error description when success is False
    """

    success: bool
    content: str = ""
    file_name: Optional[str] = None
    message: Optional[str] = None


def pdf_text_to_html(text: str) -> str:
    """
    Convert extracted PDF text to editor HTML.

    Example:
        >>> pdf_text_to_html("Jane  Doe\\nEngineer")
        'Jane&nbsp;&nbsp;Doe<br>Engineer'
    """
    escaped = html.escape(text, quote=False)
    escaped = MULTI_SPACE_PATTERN.sub(lambda match: "&nbsp;" * len(match.group(0)), escaped)
    return escaped.replace("\n", "<br>")


def extract_pdf_text(pdf_path: Path) -> str:
    """Extract text from every page of a PDF, pages joined by newlines."""
    pages_text = []
    with pdfplumber.open(pdf_path) as pdf:
        for page in pdf.pages:
            page_text = page.extract_text()
            if page_text:
                pages_text.append(page_text)
    return "\n".join(pages_text)


def _run_to_html(run) -> str:
    text = html.escape(run.text, quote=False)
    if not text:
        return ""
    if run.underline:
        text = f"<u>{text}</u>"
    if run.italic:
        text = f"<em>{text}</em>"
    if run.bold:
        text = f"<strong>{text}</strong>"
    return text


def docx_to_html(docx_path: Path) -> str:
    """
    Convert a DOCX file to editor HTML.

    Empty paragraphs are dropped.
    """
    document = Document(str(docx_path))
    blocks: List[str] = []
    for paragraph in document.paragraphs:
        inner = "".join(_run_to_html(run) for run in paragraph.runs)
        if not inner.strip():
            continue
        style_name = paragraph.style.name if paragraph.style is not None else ""
        tag = HEADING_STYLES.get(style_name, "p")
        blocks.append(f"<{tag}>{inner}</{tag}>")
    return "".join(blocks)


def load_resume_file(path: Union[str, Path]) -> UploadResult:
    """
    Load a resume file into editor content.

    Args:
        path: Path to a .pdf, .docx, .txt or .md file

    Returns:
        UploadResult; success=False with a message for missing, unsupported
        or unreadable files
    """
    path = Path(path)
    extension = path.suffix.lower()

    if extension not in SUPPORTED_EXTENSIONS:
        return UploadResult(
            success=False,
            file_name=path.name,
            message=f"Unsupported file type: {extension or path.name}. "
            f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}",
        )

    try:
        if extension == ".pdf":
            content = pdf_text_to_html(extract_pdf_text(path))
        elif extension == ".docx":
            content = docx_to_html(path)
        else:
            content = path.read_text(encoding="utf-8")
    except Exception as exc:  # noqa: BLE001 - reported to the user instead of raised
        log_file_rejected(path.name, str(exc))
        return UploadResult(
            success=False, file_name=path.name, message=f"Error uploading file: {exc}"
        )

    log_file_loaded(path.name, len(content))
    return UploadResult(success=True, content=content, file_name=path.name)
