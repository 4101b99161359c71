"""
Shared utilities for TEXPANE.

Common functionality used across contexts:
- Logger setup with provenance
- PDF inspection
"""

from texpane.utils.pdf_processing import page_count

__all__ = ["page_count"]
