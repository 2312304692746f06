"""Turn heterogeneous resume input into a single plain-text string."""

from resumatch.errors import InvalidInput
from resumatch.resume.extractor import extract_pdf_pages
from resumatch.schemas.resume import ResumeDocument, ResumeInput

PDF_MEDIA_TYPE = "application/pdf"
SECTION_SEPARATOR = "\n\n"


def is_pdf_document(document: ResumeDocument) -> bool:
    """Check the declared media type or the filename suffix."""
    if document.content_type and document.content_type.lower() == PDF_MEDIA_TYPE:
        return True
    return bool(document.filename) and document.filename.lower().endswith(".pdf")


def document_text(document: ResumeDocument) -> str:
    """Get the text of an uploaded document.

    PDFs go through the page extractor; anything else is decoded as
    UTF-8, replacing malformed byte sequences instead of rejecting them.
    """
    if is_pdf_document(document):
        return SECTION_SEPARATOR.join(extract_pdf_pages(document.content))
    return document.content.decode("utf-8", errors="replace")


def normalize_resume(resume: ResumeInput) -> str:
    """Combine pasted text and document text into one resume string.

    Args:
        resume: Resume sources for the request.

    Returns:
        Trimmed resume text, pasted text first.

    Raises:
        InvalidInput: If no source yields any non-whitespace text.
    """
    parts = []
    if resume.text and resume.text.strip():
        parts.append(resume.text)
    if resume.document is not None and resume.document.content:
        parts.append(document_text(resume.document))

    combined = SECTION_SEPARATOR.join(parts).strip()
    if not combined:
        raise InvalidInput("No resume text or file provided.")
    return combined
