"""
Documents Context

Responsibilities:
- Resolves the document a compile cycle targets (active file, master file, prompt)
- Normalizes document paths to .tex and derives artifact paths

Owns: Document reference resolution, multifile handling
Never: Invokes the compiler or touches the layout
"""

from texpane.contexts.documents.exceptions import DocumentResolutionError
from texpane.contexts.documents.resolver import (
    DocumentResolver,
    MultifileMode,
    ProjectAwareness,
    artifact_path,
    ensure_tex_suffix,
)

__all__ = [
    "DocumentResolutionError",
    "DocumentResolver",
    "MultifileMode",
    "ProjectAwareness",
    "artifact_path",
    "ensure_tex_suffix",
]
