"""
In-memory host model: surfaces, regions and window groups.

Stands in for the editor's buffers, windows and frames so that the preview
procedures receive all host state as explicit parameters.

Main classes:
    Surface: Named text surface (a buffer), optionally visiting a file.
    Region: Display slot (a window) showing one surface.
    WindowGroup: Top-level group of regions (a frame).
    Workspace: All groups, the surface registry and the echo area.
"""

from dataclasses import dataclass
from itertools import count
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from texpane.contexts.layout.logger import _log_debug

SaveHook = Callable[[], None]


@dataclass(frozen=True)
class OverlayStyle:
    """Foreground/background pair used to paint an overlay."""

    foreground: str
    background: str


# Style applied to lines the compiler reports errors on
BAD_STYLE = OverlayStyle(foreground="white", background="red")


@dataclass
class Overlay:
    """Highlight over the character span [start, end) of a surface."""

    start: int
    end: int
    style: OverlayStyle


class Surface:
    """
    Named text surface, the unit a region displays.

    Attributes:
        name: Unique name within the workspace
        path: File the surface visits (None for scratch surfaces)
        text: Current text contents
        data: Raw bytes for binary artifacts (e.g. PDFs)
        undo_enabled: Whether edits are undo-tracked
        overlays: Highlights currently applied
        save_hooks: Callbacks run after this surface is saved
        page_count: Page count for PDF artifacts (None if unknown)
    """

    def __init__(self, name: str, path: Optional[Path] = None, text: str = ""):
        self.name = name
        self.path = path
        self.text = text
        self.data: Optional[bytes] = None
        self.undo_enabled = True
        self.overlays: List[Overlay] = []
        self.save_hooks: List[SaveHook] = []
        self.page_count: Optional[int] = None
        self.modified = False
        self.revert_count = 0

    def __repr__(self) -> str:
        return f"Surface({self.name!r})"

    # Text contents

    def set_text(self, text: str) -> None:
        """Replace the whole contents (marks the surface modified)."""
        self.text = text
        self.modified = True

    def insert(self, text: str) -> None:
        """Append text at the end of the surface."""
        self.text += text
        self.modified = True

    def erase(self) -> None:
        """Remove all contents and overlays."""
        self.text = ""
        self.overlays.clear()
        self.modified = True

    @property
    def line_count(self) -> int:
        if not self.text:
            return 0
        return self.text.count("\n") + (0 if self.text.endswith("\n") else 1)

    def line_span(self, line_number: int) -> Optional[Tuple[int, int]]:
        """
        Span from the start of a 1-indexed line to one character past its end.

        The extra character covers the line's newline; on the last line
        without a trailing newline the span is clamped to the end of text.

        Returns:
            (start, end) offsets, or None if the line does not exist
        """
        if line_number < 1 or line_number > self.line_count:
            return None

        start = 0
        for _ in range(line_number - 1):
            start = self.text.index("\n", start) + 1

        newline = self.text.find("\n", start)
        line_end = len(self.text) if newline == -1 else newline
        return start, min(line_end + 1, len(self.text))

    def line_at(self, offset: int) -> int:
        """1-indexed line number containing a character offset."""
        return self.text.count("\n", 0, offset) + 1

    # Overlays

    def add_overlay(self, start: int, end: int, style: OverlayStyle) -> Overlay:
        overlay = Overlay(start=start, end=end, style=style)
        self.overlays.append(overlay)
        return overlay

    def clear_overlays(self) -> None:
        self.overlays.clear()

    def highlighted_lines(self, style: OverlayStyle = BAD_STYLE) -> List[int]:
        """Line numbers covered by overlays of the given style, in overlay order."""
        return [self.line_at(o.start) for o in self.overlays if o.style == style]

    # File association

    def load_file(self, path: Path, binary: bool = False) -> None:
        """Read a file into the surface, replacing its contents."""
        self.path = path
        if binary:
            self.data = path.read_bytes()
            self.text = ""
        else:
            self.text = path.read_text(encoding="utf-8", errors="replace")
        self.modified = False

    def revert(self) -> None:
        """
        Re-read the visited file from disk, discarding in-memory contents.

        Raises:
            ValueError: If the surface does not visit a file
        """
        if self.path is None:
            raise ValueError(f"Surface {self.name} is not visiting a file")
        self.load_file(self.path, binary=self.data is not None)
        self.revert_count += 1
        _log_debug(f"Reverted {self.name} from {self.path}")

    def save(self) -> None:
        """Write modified contents back to the visited file, then run save hooks."""
        if self.path is not None and self.modified:
            self.path.write_text(self.text, encoding="utf-8")
            self.modified = False
        self.run_save_hooks()

    def run_save_hooks(self) -> None:
        for hook in list(self.save_hooks):
            hook()

    def add_save_hook(self, hook: SaveHook) -> None:
        """Register a save hook local to this surface (no duplicates)."""
        if hook not in self.save_hooks:
            self.save_hooks.append(hook)

    def remove_save_hook(self, hook: SaveHook) -> None:
        if hook in self.save_hooks:
            self.save_hooks.remove(hook)


class Region:
    """
    Display slot showing one surface.

    Parameters are free-form markers the host keeps per region (the preview
    pane is recognized by one of them).
    """

    _ids = count(1)

    def __init__(self, surface: Optional[Surface] = None):
        self.id = next(Region._ids)
        self.surface = surface
        self.parameters: Dict[str, object] = {}
        self.group: Optional["WindowGroup"] = None

    def __repr__(self) -> str:
        shown = self.surface.name if self.surface else None
        return f"Region(id={self.id}, surface={shown!r})"

    def show(self, surface: Surface) -> None:
        self.surface = surface

    def get_parameter(self, name: str, default=None):
        return self.parameters.get(name, default)

    def set_parameter(self, name: str, value) -> None:
        self.parameters[name] = value


class WindowGroup:
    """
    Top-level group of regions laid out in order.

    Regions are kept in visual order; splitting inserts the new region before
    ("left"/"above") or after ("right"/"below") the region being split.
    """

    _ids = count(1)

    def __init__(self, surface: Optional[Surface] = None):
        self.id = next(WindowGroup._ids)
        self.regions: List[Region] = []
        first = Region(surface)
        self._attach(first, 0)
        self.selected = first

    def __repr__(self) -> str:
        return f"WindowGroup(id={self.id}, regions={self.regions})"

    def _attach(self, region: Region, index: int) -> None:
        region.group = self
        self.regions.insert(index, region)

    def split(self, region: Region, orientation: str) -> Region:
        """
        Split a region, returning the newly created one.

        Args:
            region: Region to split (must belong to this group)
            orientation: Side of the new region ("left", "right", "above", "below")

        Raises:
            ValueError: If the region is not in this group or orientation is unknown
        """
        if region not in self.regions:
            raise ValueError(f"{region} does not belong to {self}")
        if orientation not in ("left", "right", "above", "below"):
            raise ValueError(f"Unknown split orientation: {orientation}")

        new_region = Region(region.surface)
        index = self.regions.index(region)
        if orientation in ("right", "below"):
            index += 1
        self._attach(new_region, index)
        _log_debug(f"Split region {region.id} {orientation} -> region {new_region.id}")
        return new_region

    def delete_region(self, region: Region) -> None:
        """
        Remove a region from the group.

        Raises:
            ValueError: If it is the last region of the group
        """
        if len(self.regions) == 1:
            raise ValueError("Cannot delete the sole region of a window group")
        self.regions.remove(region)
        region.group = None
        if self.selected is region:
            self.selected = self.regions[0]

    def first_region(self) -> Region:
        return self.regions[0]


class Workspace:
    """
    All host state the preview procedures operate on.

    Attributes:
        groups: Window groups in creation order
        current_group: Group that receives new splits
        surfaces: Surface registry by name
        messages: Echo-area history, most recent last
        prompt: Optional callable asking the user for a string (None if non-interactive)
    """

    def __init__(self, prompt: Optional[Callable[[str], Optional[str]]] = None):
        self.surfaces: Dict[str, Surface] = {}
        self.groups: List[WindowGroup] = [WindowGroup()]
        self.current_group = self.groups[0]
        self.messages: List[str] = []
        self.prompt = prompt

    # Regions and groups

    @property
    def selected_region(self) -> Region:
        return self.current_group.selected

    def all_regions(self) -> List[Region]:
        return [region for group in self.groups for region in group.regions]

    def new_group(self) -> WindowGroup:
        """Create a new top-level group (the current group is left unchanged)."""
        group = WindowGroup()
        self.groups.append(group)
        _log_debug(f"Created window group {group.id}")
        return group

    def delete_group(self, group: WindowGroup) -> None:
        if len(self.groups) == 1:
            raise ValueError("Cannot delete the sole window group")
        self.groups.remove(group)
        if self.current_group is group:
            self.current_group = self.groups[0]

    def regions_showing(self, surface: Surface) -> List[Region]:
        return [region for region in self.all_regions() if region.surface is surface]

    # Surfaces

    def get_surface(self, name: str, create: bool = True) -> Optional[Surface]:
        """Return the surface with this name, creating an empty one if asked."""
        surface = self.surfaces.get(name)
        if surface is None and create:
            surface = Surface(name)
            self.surfaces[name] = surface
        return surface

    def surface_visiting(self, path: Path) -> Optional[Surface]:
        """Surface currently visiting a file, if any."""
        target = Path(path).resolve()
        for surface in self.surfaces.values():
            if surface.path is not None and surface.path.resolve() == target:
                return surface
        return None

    def find_file(self, path: Path, binary: bool = False) -> Surface:
        """Return the surface visiting a file, loading it into a new one if needed."""
        path = Path(path).resolve()
        surface = self.surface_visiting(path)
        if surface is not None:
            return surface

        name = path.name
        suffix = 2
        while name in self.surfaces:
            name = f"{path.name}<{suffix}>"
            suffix += 1

        surface = Surface(name)
        surface.load_file(path, binary=binary)
        self.surfaces[name] = surface
        return surface

    def kill_surface(self, surface: Surface) -> None:
        """Drop a surface from the registry and blank any region showing it."""
        self.surfaces.pop(surface.name, None)
        for region in self.regions_showing(surface):
            region.surface = None

    # Echo area

    def message(self, text: str) -> None:
        self.messages.append(text)

    @property
    def last_message(self) -> Optional[str]:
        return self.messages[-1] if self.messages else None
