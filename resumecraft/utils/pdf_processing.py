"""
PDF reading utilities.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_page_texts: Per-page text extraction.
"""

from io import BytesIO
from pathlib import Path
from typing import List, Optional, Union

import pdfplumber
from PyPDF2 import PdfReader

PDFSource = Union[Path, bytes]


def _as_stream(source: PDFSource):
    if isinstance(source, bytes):
        return BytesIO(source)
    return str(source)


def page_count(source: PDFSource) -> Optional[int]:
    """Get page count from a PDF path or PDF bytes, or None if unreadable."""
    try:
        reader = PdfReader(_as_stream(source))
        return len(reader.pages)
    except Exception:
        return None


def extract_page_texts(source: PDFSource, max_pages: int = 100) -> List[str]:
    """
    Extract the text of each page, top-to-bottom.

    Args:
        source: Path to a PDF file, or PDF bytes
        max_pages: Stop after this many pages

    Returns:
        One string per page (empty string for pages without a text layer)
    """
    texts = []
    with pdfplumber.open(_as_stream(source)) as pdf:
        for page in pdf.pages[:max_pages]:
            texts.append(page.extract_text() or "")
    return texts
