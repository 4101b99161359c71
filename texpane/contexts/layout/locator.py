"""
Preview pane location.

Finds the region tagged as the preview pane anywhere in the workspace, or
creates one by splitting the selected region (or opening a new window group).
At most one preview pane exists per window group.
"""

from typing import Callable, Optional

from texpane.config import PreviewConfig
from texpane.contexts.layout.logger import _log_debug, _log_info
from texpane.contexts.layout.workspace import Region, Surface, Workspace

PREVIEW_MARKER = "is-latex-preview-pane"
WELCOME_BUFFER_NAME = "*Latex Preview Pane Welcome*"
WELCOME_MESSAGE = (
    "LaTeX Preview Pane\n"
    "\n"
    "The compiled PDF of your document will be shown here.\n"
    "Save the LaTeX source to compile it and refresh this pane.\n"
    "Compilation errors replace this pane with the compiler log and\n"
    "highlight the offending lines in the source.\n"
)


def is_preview_region(region: Region) -> bool:
    return bool(region.get_parameter(PREVIEW_MARKER, False))


def find_preview_region(workspace: Workspace) -> Optional[Region]:
    """Scan every region of every window group for the preview marker."""
    for region in workspace.all_regions():
        if is_preview_region(region):
            return region
    return None


def _create_preview_region(workspace: Workspace, config: PreviewConfig) -> Region:
    if config.use_separate_group:
        region = workspace.new_group().first_region()
        _log_info(f"Opened preview pane in new window group (region {region.id})")
    else:
        region = workspace.current_group.split(workspace.selected_region, config.orientation)
        _log_info(f"Opened preview pane {config.orientation} of the source (region {region.id})")

    region.set_parameter(PREVIEW_MARKER, True)

    welcome = workspace.get_surface(WELCOME_BUFFER_NAME)
    welcome.erase()
    welcome.insert(WELCOME_MESSAGE)
    welcome.modified = False
    region.show(welcome)
    return region


def locate_or_create_pane(
    workspace: Workspace,
    config: PreviewConfig,
    source: Optional[Surface] = None,
    on_save: Optional[Callable[[], None]] = None,
) -> Region:
    """
    Return the preview pane, creating it on first use.

    Args:
        workspace: Host state to search and modify
        config: Supplies orientation and the separate-group toggle
        source: Source surface whose saves should refresh the preview
        on_save: Callback registered as a save hook local to source

    Returns:
        Region carrying the preview marker
    """
    region = find_preview_region(workspace)
    if region is None:
        region = _create_preview_region(workspace, config)
    else:
        _log_debug(f"Found existing preview pane (region {region.id})")

    if source is not None and on_save is not None:
        source.add_save_hook(on_save)

    return region


def remove_preview_pane(
    workspace: Workspace,
    source: Optional[Surface] = None,
    on_save: Optional[Callable[[], None]] = None,
) -> bool:
    """
    Tear down the preview pane owned by the current window group.

    A separate window group that only holds the pane is closed as a whole.
    The sole region of a group is never deleted; its marker is cleared instead.

    Returns:
        True if a preview pane was removed
    """
    if source is not None and on_save is not None:
        source.remove_save_hook(on_save)

    candidates = [
        (group, region)
        for group in workspace.groups
        for region in group.regions
        if is_preview_region(region)
        and (group is workspace.current_group or len(group.regions) == 1)
    ]
    if not candidates:
        return False

    for group, region in candidates:
        region.parameters.pop(PREVIEW_MARKER, None)
        if len(group.regions) > 1:
            group.delete_region(region)
        elif group is not workspace.current_group:
            workspace.delete_group(group)
        _log_info(f"Removed preview pane (region {region.id})")

    return True
