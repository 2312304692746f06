import logging

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


def extract_pdf_pages(data: bytes) -> list[str]:
    """Extract text from an in-memory PDF, one string per page.

    Args:
        data: Raw PDF bytes.

    Returns:
        Page texts in document order, or an empty list if the bytes
        could not be read as a PDF.
    """
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            return [page.get_text() for page in doc]
    except (RuntimeError, ValueError) as e:
        logger.warning(f"PDF text extraction failed: {e}")
        return []
