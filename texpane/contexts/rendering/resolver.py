"""
Compile result resolution.

Turns a CompilationResult into visible state: on success the PDF artifact is
loaded into (or refreshed in) the preview pane; on failure the compiler log
replaces the pane contents and the offending source lines are highlighted.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List

from texpane.contexts.documents.resolver import artifact_path
from texpane.contexts.layout.workspace import BAD_STYLE, Region, Surface, Workspace
from texpane.contexts.rendering.compiler import CompilationResult
from texpane.contexts.rendering.log_parser import extract_error_lines
from texpane.contexts.rendering.logger import _log_debug, _log_error, _log_info, _log_warning
from texpane.utils.pdf_processing import page_count

ERROR_BUFFER_NAME = "*Latex Preview Pane Errors*"


class Outcome(str, Enum):
    LOADED = "loaded"
    REFRESHED = "refreshed"
    MISSING_ARTIFACT = "missing_artifact"
    FAILED = "failed"


@dataclass
class Resolution:
    """
    What a resolve step did.

    Attributes:
        outcome: Branch taken
        artifact: PDF path derived from the document
        error_lines: Source lines highlighted (failure branch only)
    """

    outcome: Outcome
    artifact: Path
    error_lines: List[int] = field(default_factory=list)


def apply_error_overlays(surface: Surface, lines: List[int]) -> List[int]:
    """
    Replace the surface's overlays with one BAD_STYLE overlay per error line.

    Lines past the end of the surface are skipped.

    Returns:
        Line numbers actually highlighted
    """
    surface.clear_overlays()

    applied = []
    for line_number in lines:
        span = surface.line_span(line_number)
        if span is None:
            _log_warning(f"Line {line_number} is outside {surface.name}; not highlighted")
            continue
        surface.add_overlay(span[0], span[1], BAD_STYLE)
        applied.append(line_number)
    return applied


def _show_artifact(workspace: Workspace, pane: Region, artifact: Path) -> Outcome:
    surface = workspace.surface_visiting(artifact)

    if surface is None:
        surface = workspace.find_file(artifact, binary=True)
        surface.undo_enabled = False
        outcome = Outcome.LOADED
    else:
        surface.revert()
        outcome = Outcome.REFRESHED

    surface.page_count = page_count(artifact)
    pane.show(surface)
    _log_debug(f"Preview pane shows {surface.name} ({outcome.value})")
    return outcome


def _show_errors(workspace: Workspace, pane: Region, output: str) -> Surface:
    errors_surface = workspace.get_surface(ERROR_BUFFER_NAME)
    errors_surface.erase()
    errors_surface.insert(output)
    errors_surface.modified = False
    pane.show(errors_surface)
    return errors_surface


def resolve(
    workspace: Workspace,
    pane: Region,
    result: CompilationResult,
    source: Surface,
) -> Resolution:
    """
    Apply a compilation result to the preview pane and the source surface.

    Args:
        workspace: Host state
        pane: Preview pane region
        result: Outcome of compile_document()
        source: Editing surface of the compiled document (receives overlays)

    Returns:
        Resolution describing the branch taken
    """
    artifact = artifact_path(result.document)

    if result.succeeded:
        source.clear_overlays()

        if not artifact.exists():
            _log_error(f"Compiler reported success but {artifact.name} was not produced")
            workspace.message(
                f"Compilation finished but {artifact.name} does not exist; check the compiler log"
            )
            return Resolution(outcome=Outcome.MISSING_ARTIFACT, artifact=artifact)

        outcome = _show_artifact(workspace, pane, artifact)
        _log_info(f"Preview {outcome.value}: {artifact.name}")
        return Resolution(outcome=outcome, artifact=artifact)

    _show_errors(workspace, pane, result.output)
    highlighted = apply_error_overlays(source, extract_error_lines(result.output))

    if highlighted:
        _log_info(f"Highlighted error lines in {source.name}: {highlighted}")
    workspace.message(f"LaTeX compilation of {result.document.name} failed; see {ERROR_BUFFER_NAME}")
    return Resolution(outcome=Outcome.FAILED, artifact=artifact, error_lines=highlighted)
