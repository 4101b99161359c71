"""
PDF inspection utilities for compiled artifacts.

Helper functions:
    page_count: Quick page count without full extraction.
    describe_pdf: One-line summary of an artifact for display.
"""

from pathlib import Path
from typing import Optional

from PyPDF2 import PdfReader


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def describe_pdf(pdf_path: Path, pages: Optional[int] = None) -> str:
    """
    Summarize a PDF artifact as "name (N pages, X KB)".

    Args:
        pdf_path: Path to the PDF file
        pages: Known page count (computed when omitted)

    Returns:
        Human-readable summary; page count is reported as "?" when unreadable
    """
    if pages is None:
        pages = page_count(pdf_path)
    size_kb = pdf_path.stat().st_size / 1024 if pdf_path.exists() else 0.0
    pages_str = "?" if pages is None else str(pages)
    noun = "page" if pages == 1 else "pages"
    return f"{pdf_path.name} ({pages_str} {noun}, {size_kb:.1f} KB)"
