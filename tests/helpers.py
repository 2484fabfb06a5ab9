"""
Certifica Test Helper Utilities

Utilities for inspecting generated certificate PDFs.

Example usage:
    text = extract_pdf_text(pdf_bytes)
    assert "CERT-ABC123" in text
"""

from io import BytesIO

from PyPDF2 import PdfReader

SCENARIO_C_TEMPLATE = (
    "CERTIFICADO\n\n{{studentName}}\n\ncurso {{courseTitle}}\n\n"
    "_______________\n{{instructorName}}"
)


def read_pdf(pdf_bytes: bytes) -> PdfReader:
    return PdfReader(BytesIO(pdf_bytes))


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Extract the text of every page of a PDF.

    Args:
        pdf_bytes: PDF content as bytes

    Returns:
        Concatenated page text
    """
    reader = read_pdf(pdf_bytes)
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def footer_texts(layout):
    """Footer text instructions (drawn without a line role)."""
    return [t for t in layout.texts if t.role is None]


def texts_with_role(layout, role):
    return [t for t in layout.texts if t.role is role]
