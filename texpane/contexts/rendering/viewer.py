"""
External PDF viewer launch.

Opens the compiled artifact with the operating system's default file opener,
independently of the preview pane refresh cycle.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional

from texpane.contexts.documents.resolver import artifact_path
from texpane.contexts.rendering.logger import _log_info, _log_warning

# Opener processes still running; finished ones are reaped on the next launch
_launched: List[subprocess.Popen] = []


def reap_launched() -> int:
    """Wait on opener processes that have exited. Returns how many are still running."""
    _launched[:] = [process for process in _launched if process.poll() is None]
    return len(_launched)


def opener_command(platform: str) -> Optional[str]:
    """File-opener binary for a platform, or None where os.startfile is used."""
    if platform.startswith("win"):
        return None
    if platform.startswith("darwin"):
        return "open"
    return "xdg-open"


def open_externally(
    document: Path,
    platform: Optional[str] = None,
    notify: Optional[Callable[[str], None]] = None,
) -> bool:
    """
    Open a document's compiled PDF in the system viewer.

    Args:
        document: The .tex document (its .pdf sibling is opened)
        platform: sys.platform-style identifier (defaults to the running platform)
        notify: Receives the user-facing message when the PDF is missing

    Returns:
        True if a viewer was launched, False if the PDF does not exist yet
    """
    platform = platform or sys.platform
    pdf = artifact_path(Path(document))

    if not pdf.exists():
        message = f"PDF file {pdf.name} does not exist yet; save the document to compile it"
        _log_warning(message)
        if notify is not None:
            notify(message)
        return False

    command = opener_command(platform)
    if command is None:
        os.startfile(str(pdf))  # type: ignore[attr-defined]
    else:
        reap_launched()
        process = subprocess.Popen(
            [command, str(pdf)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
        _launched.append(process)

    _log_info(f"Opened {pdf.name} in external viewer")
    return True
