"""
Rendering Context

Responsibilities:
- Compiles LaTeX documents to PDF with the configured compiler
- Scrapes compiler output for error line numbers and messages
- Loads or refreshes the PDF in the preview pane, or shows the error log
- Highlights error lines in the source surface
- Opens the compiled PDF in an external viewer

Owns: Compiler invocation, log parsing, result resolution
Never: Decides which document to compile or where the preview pane goes
"""

from texpane.contexts.rendering.compiler import (
    FAILURE_EXIT_STATUS,
    OUTPUT_BUFFER_NAME,
    CompilationResult,
    build_compile_command,
    compile_document,
)
from texpane.contexts.rendering.log_parser import (
    extract_error_line_tokens,
    extract_error_lines,
    parse_latex_diagnostics,
)
from texpane.contexts.rendering.resolver import (
    ERROR_BUFFER_NAME,
    Outcome,
    Resolution,
    apply_error_overlays,
    resolve,
)
from texpane.contexts.rendering.viewer import open_externally

__all__ = [
    "FAILURE_EXIT_STATUS",
    "OUTPUT_BUFFER_NAME",
    "CompilationResult",
    "build_compile_command",
    "compile_document",
    "extract_error_line_tokens",
    "extract_error_lines",
    "parse_latex_diagnostics",
    "ERROR_BUFFER_NAME",
    "Outcome",
    "Resolution",
    "apply_error_overlays",
    "resolve",
    "open_externally",
]
