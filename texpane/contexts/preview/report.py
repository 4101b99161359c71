"""
Terminal rendition of a preview session after a compile cycle.

Shows what the preview pane displays and, after a failed compile, the
highlighted source lines with their line numbers.
"""

from typing import List

from texpane.contexts.layout.workspace import BAD_STYLE
from texpane.contexts.rendering.resolver import Outcome
from texpane.utils.pdf_processing import describe_pdf


def format_highlighted_lines(text: str, lines: List[int], width: int = 100) -> List[str]:
    """Render source lines as "  12 | content", truncated to width."""
    source_lines = text.splitlines()
    rendered = []
    for number in lines:
        if 1 <= number <= len(source_lines):
            content = source_lines[number - 1]
            rendered.append(f"{number:>5} | {content}"[:width])
    return rendered


def format_cycle_report(session, max_log_lines: int = 15) -> str:
    """
    Summarize the latest cycle of a PreviewSession.

    Args:
        session: PreviewSession after update()
        max_log_lines: Tail of the compiler log to include on failure

    Returns:
        Multi-line report (empty if no cycle has run)
    """
    resolution = session.last_resolution
    if resolution is None:
        return ""

    lines = []
    pane_surface = session.pane.surface if session.pane else None

    if resolution.outcome in (Outcome.LOADED, Outcome.REFRESHED):
        summary = describe_pdf(resolution.artifact, pane_surface.page_count)
        lines.append(f"Preview ({resolution.outcome.value}): {summary}")
    elif resolution.outcome == Outcome.MISSING_ARTIFACT:
        lines.append(f"Preview unchanged: {resolution.artifact.name} was not produced")
    else:
        log_lines = pane_surface.text.rstrip("\n").splitlines() if pane_surface else []
        lines.append(f"Preview shows compiler log ({len(log_lines)} lines)")
        if len(log_lines) > max_log_lines:
            lines.append(f"  ... {len(log_lines) - max_log_lines} earlier lines omitted")
        lines.extend(f"  {line}" for line in log_lines[-max_log_lines:])

        target = session.workspace.surface_visiting(session.document) or session.source
        highlighted = target.highlighted_lines(BAD_STYLE)
        if highlighted:
            lines.append("")
            lines.append(f"Highlighted lines in {target.name}:")
            lines.extend(format_highlighted_lines(target.text, highlighted))

    return "\n".join(lines)
