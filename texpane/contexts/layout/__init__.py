"""
Layout Context

Responsibilities:
- Models the host's surfaces, regions and window groups in memory
- Locates or creates the preview pane and tags it for later lookup
- Registers and removes the save hook tied to the source surface

Owns: Region/group layout, preview pane marker
Never: Runs the compiler or reads its output
"""

from texpane.contexts.layout.locator import (
    PREVIEW_MARKER,
    find_preview_region,
    locate_or_create_pane,
    remove_preview_pane,
)
from texpane.contexts.layout.workspace import (
    BAD_STYLE,
    Overlay,
    OverlayStyle,
    Region,
    Surface,
    WindowGroup,
    Workspace,
)

__all__ = [
    "PREVIEW_MARKER",
    "find_preview_region",
    "locate_or_create_pane",
    "remove_preview_pane",
    "BAD_STYLE",
    "Overlay",
    "OverlayStyle",
    "Region",
    "Surface",
    "WindowGroup",
    "Workspace",
]
