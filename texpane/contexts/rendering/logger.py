"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from texpane.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Optional[Path], compiler: str, verbose: bool = False
) -> Optional[Path]:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this preview session (None for console only)
        compiler: LaTeX compiler recorded in the provenance header
        verbose: Show DEBUG messages on the console

    Returns:
        Path to log file, or None

    Example:
        from texpane.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, compiler="pdflatex")
        _log_info("Starting compilation...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"LaTeX compiler": compiler},
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_compilation_start(document: Path, command: list) -> None:
    """Log start of compilation with context."""
    _log_info(f"Compiling {document.name}")
    _log_debug(f"  Directory: {document.parent}")
    _log_debug(f"  Command: {' '.join(command)}")


def log_compilation_result(result, verbose: bool = False) -> None:
    """
    Log compilation result with diagnostics.

    Args:
        result: CompilationResult from compile_document()
        verbose: Show detailed warnings/errors (default: False)
    """
    name = result.document.name
    if result.succeeded:
        _log_success(
            f"{name}: compiled with {len(result.warnings)} warnings ({result.elapsed_time:.2f}s)"
        )
    else:
        _log_error(
            f"{name}: compilation failed with exit status {result.exit_status} "
            f"({result.elapsed_time:.2f}s)"
        )
        error_limit = 10 if verbose else 5
        for i, err in enumerate(result.errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > error_limit:
            _log_error(f"  ... and {len(result.errors) - error_limit} more errors")

    if result.warnings:
        warning_limit = 10 if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more warnings")

    # Full compiler output, raw so loguru does not prefix every line
    if (verbose or not result.succeeded) and result.output:
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nCOMPILER OUTPUT:\n{'=' * 80}\n{result.output}\n"
        )
