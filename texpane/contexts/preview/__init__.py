"""
Preview Context

Responsibilities:
- Binds the preview to a source file (activate/deactivate)
- Runs the compile-and-refresh cycle on every save
- Detects saves on disk for the command-line front end
- Formats cycle results for the terminal

Owns: Session lifecycle, save triggering
Never: Parses compiler output or manipulates regions directly
"""

from texpane.contexts.preview.report import format_cycle_report
from texpane.contexts.preview.session import PreviewSession
from texpane.contexts.preview.watcher import SaveWatcher

__all__ = ["PreviewSession", "SaveWatcher", "format_cycle_report"]
