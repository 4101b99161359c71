"""
Preview session: the save-triggered compile-and-refresh loop.

A session is bound to one source surface. Activation locates or creates the
preview pane and registers a save hook on the source; every save then runs
one synchronous cycle: resolve document, compile, resolve result.
"""

from pathlib import Path
from typing import Optional

from texpane.config import PreviewConfig
from texpane.contexts.documents import (
    DocumentResolutionError,
    DocumentResolver,
    MultifileMode,
    ProjectAwareness,
)
from texpane.contexts.layout import Region, Surface, Workspace, locate_or_create_pane
from texpane.contexts.layout.locator import remove_preview_pane
from texpane.contexts.preview.logger import _log_debug, _log_error, _log_info, _log_warning
from texpane.contexts.rendering import (
    OUTPUT_BUFFER_NAME,
    CompilationResult,
    Resolution,
    compile_document,
    open_externally,
    resolve,
)


class PreviewSession:
    """
    Preview extension state for one source file.

    Attributes:
        workspace: Host state the session operates on
        config: Preview configuration
        resolver: Document resolver (built from config when not given)
        source: Source surface, set by activate()
        pane: Preview pane region, set by activate()
        document: Document compiled by the latest cycle
        last_result: Most recent CompilationResult
        last_resolution: Most recent Resolution
    """

    def __init__(
        self,
        workspace: Workspace,
        config: PreviewConfig,
        resolver: Optional[DocumentResolver] = None,
        verbose: bool = False,
    ):
        self.workspace = workspace
        self.config = config
        self.resolver = resolver
        self._resolver_given = resolver is not None
        self.verbose = verbose
        self.source: Optional[Surface] = None
        self.pane: Optional[Region] = None
        self.document: Optional[Path] = None
        self.last_result: Optional[CompilationResult] = None
        self.last_resolution: Optional[Resolution] = None

    @property
    def active(self) -> bool:
        return self.source is not None

    def _build_resolver(self, source_path: Path) -> DocumentResolver:
        project = None
        if self.config.multifile_mode == MultifileMode.AUCTEX:
            # Capability presence is decided once, at activation
            project = ProjectAwareness.from_local_variables(source_path)
            if project is None:
                _log_warning(f"No TeX-master declared in {source_path.name}")
                project = ProjectAwareness(master=None)
        return DocumentResolver(
            mode=self.config.multifile_mode, project=project, prompt=self.workspace.prompt
        )

    def activate(self, source_path: Path, refresh: bool = True) -> Region:
        """
        Turn the preview on for a source file.

        Args:
            source_path: LaTeX source being edited
            refresh: Run one compile cycle right away

        Returns:
            Preview pane region
        """
        source_path = Path(source_path).resolve()
        source = self.workspace.find_file(source_path)
        if self.active and self.source is not source:
            # Rebinding: the old hook and the resolver built for the old file go
            self.deactivate()
            if not self._resolver_given:
                self.resolver = None
        self.source = source
        self.workspace.selected_region.show(self.source)

        if self.resolver is None:
            self.resolver = self._build_resolver(source_path)

        self.pane = locate_or_create_pane(
            self.workspace, self.config, source=self.source, on_save=self.on_save
        )
        _log_info(f"Preview activated for {source_path.name}")

        if refresh:
            self.update()
        return self.pane

    def deactivate(self) -> None:
        """Remove the preview pane and the save hook."""
        if not self.active:
            return
        remove_preview_pane(self.workspace, source=self.source, on_save=self.on_save)
        _log_info(f"Preview deactivated for {self.source.name}")
        self.source = None
        self.pane = None
        self.document = None

    def on_save(self) -> None:
        """Save hook registered on the source surface."""
        self.update()

    def update(self) -> Optional[Resolution]:
        """
        Run one compile-and-refresh cycle.

        Returns:
            Resolution, or None when no document could be resolved

        Raises:
            RuntimeError: If the session is not active
            OSError: If the compiler cannot be started
        """
        if not self.active or self.resolver is None:
            raise RuntimeError("Preview session is not active")

        try:
            document = self.resolver.resolve(self.source.path)
        except DocumentResolutionError as e:
            self.workspace.message(e.message)
            _log_warning(e.message)
            return None
        self.document = document

        # Pane is looked up fresh every cycle; the layout may have changed
        self.pane = locate_or_create_pane(self.workspace, self.config)
        output_surface = self.workspace.get_surface(OUTPUT_BUFFER_NAME)

        try:
            result = compile_document(document, self.config, output_surface, verbose=self.verbose)
        except OSError as e:
            _log_error(f"Compile cycle aborted: {e}")
            raise

        if document == self.source.path:
            target = self.source
        elif document.exists():
            target = self.workspace.find_file(document)
        else:
            target = self.source
        if target is not self.source and not target.modified:
            # The compiler read the master from disk; overlays must match that text
            target.revert()
        _log_debug(f"Error overlays target {target.name}")

        self.last_result = result
        self.last_resolution = resolve(self.workspace, self.pane, result, target)
        return self.last_resolution

    def open_in_viewer(self) -> bool:
        """Open the compiled PDF externally; posts a message if it does not exist."""
        if not self.active or self.resolver is None:
            raise RuntimeError("Preview session is not active")
        try:
            document = self.document or self.resolver.resolve(self.source.path)
        except DocumentResolutionError as e:
            self.workspace.message(e.message)
            return False
        return open_externally(document, notify=self.workspace.message)
