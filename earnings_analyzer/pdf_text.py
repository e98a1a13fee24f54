"""Plain text extraction from uploaded PDF bytes."""

import fitz  # PyMuPDF


def extract_text(pdf_bytes: bytes) -> str:
    """Return the text of every page, in page order, separated by blank lines."""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        return "\n\n".join(page.get_text() for page in doc)
