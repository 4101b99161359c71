"""
LaTeX Compilation Module

Runs the configured compiler synchronously on a document and captures its
combined output into the scratch output surface.
"""

import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from texpane.config import PreviewConfig
from texpane.contexts.layout.workspace import Surface
from texpane.contexts.rendering.log_parser import parse_latex_diagnostics
from texpane.contexts.rendering.logger import (
    _log_error,
    log_compilation_result,
    log_compilation_start,
)

# Exit status the host treats as "process failed"; any other status is success
FAILURE_EXIT_STATUS = 1

OUTPUT_BUFFER_NAME = "*pdflatex-buffer*"


@dataclass
class CompilationResult:
    """
    Result of one compiler invocation.

    Attributes:
        document: Absolute path of the compiled .tex file
        exit_status: Raw exit status of the compiler process
        output: Combined stdout and stderr
        elapsed_time: Wall-clock duration in seconds
        errors: "! ..." error messages parsed from the output
        warnings: LaTeX/package/box warnings parsed from the output
    """

    document: Path
    exit_status: int
    output: str = ""
    elapsed_time: float = 0.0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.exit_status != FAILURE_EXIT_STATUS


def build_compile_command(config: PreviewConfig, document: Path) -> List[str]:
    """Compiler argv: binary, optional shell-escape flag, absolute document path."""
    return [config.compiler, *config.compile_flags(), str(Path(document).resolve())]


def compile_document(
    document: Path,
    config: PreviewConfig,
    output_surface: Optional[Surface] = None,
    verbose: bool = False,
) -> CompilationResult:
    """
    Compile a LaTeX document with the configured compiler.

    Blocks until the compiler exits; there is no timeout. The compiler runs in
    the document's directory with stdin closed so an error prompt cannot hang it.

    Args:
        document: Path to the .tex file
        config: Supplies the compiler binary and shell-escape setting
        output_surface: Scratch surface whose contents are replaced by the output
        verbose: Log full compiler output even on success

    Returns:
        CompilationResult with the raw exit status and captured output

    Raises:
        OSError: If the compiler cannot be started (e.g. binary not found)
    """
    document = Path(document).resolve()
    cmd = build_compile_command(config, document)

    if output_surface is not None:
        output_surface.erase()

    log_compilation_start(document, cmd)
    start_time = time.time()

    try:
        completed = subprocess.run(
            cmd,
            cwd=document.parent,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
            check=False,
        )
    except OSError as e:
        _log_error(f"Could not start {config.compiler}: {e}")
        raise

    output = completed.stdout or ""
    if output_surface is not None:
        output_surface.insert(output)
        output_surface.modified = False

    errors, warnings = parse_latex_diagnostics(output)
    result = CompilationResult(
        document=document,
        exit_status=completed.returncode,
        output=output,
        elapsed_time=time.time() - start_time,
        errors=errors,
        warnings=warnings,
    )
    log_compilation_result(result, verbose=verbose)
    return result
