"""
Document reference resolution.

Decides which .tex file a compile cycle targets: the active file, the master
file reported by a project-awareness capability, or a path the user was
prompted for (cached per session).
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from texpane.contexts.documents.exceptions import DocumentResolutionError
from texpane.contexts.documents.logger import _log_debug, _log_info, _log_warning

TEX_SUFFIX = ".tex"
ARTIFACT_SUFFIX = ".pdf"

# Only the tail of a file is searched for a local-variables block
LOCAL_VARIABLES_WINDOW = 3000

TEX_MASTER_PATTERN = re.compile(r"^\s*%+\s*TeX-master:\s*(.+?)\s*$", re.MULTILINE)


class MultifileMode:
    """How the master document of a multi-file project is found."""

    OFF = "off"
    AUCTEX = "auctex"
    PROMPT = "prompt"


def ensure_tex_suffix(path: Union[str, Path]) -> Path:
    """Append .tex unless the path already ends with it."""
    path = Path(path)
    if path.name.endswith(TEX_SUFFIX):
        return path
    return path.with_name(path.name + TEX_SUFFIX)


def artifact_path(document: Path) -> Path:
    """Compiled PDF location for a document (same directory and basename)."""
    return Path(document).with_suffix(ARTIFACT_SUFFIX)


@dataclass
class ProjectAwareness:
    """
    Project-awareness capability reporting the master document.

    Attributes:
        master: True to use the active file, a path to the master document,
            or None when the project has not defined one
    """

    master: Union[bool, str, None] = None

    @classmethod
    def from_local_variables(cls, source_path: Path) -> Optional["ProjectAwareness"]:
        """
        Read an AUCTeX-style ``TeX-master`` local variable from a source file.

        Recognizes lines such as ``%%% TeX-master: "main"``, ``%%% TeX-master: t``
        and ``%%% TeX-master: nil`` near the end of the file.

        Returns:
            ProjectAwareness, or None if the file declares no TeX-master
        """
        try:
            tail = Path(source_path).read_text(encoding="utf-8", errors="replace")[
                -LOCAL_VARIABLES_WINDOW:
            ]
        except OSError:
            return None

        match = TEX_MASTER_PATTERN.search(tail)
        if match is None:
            return None

        value = match.group(1)
        if value == "t":
            return cls(master=True)
        if value == "nil":
            return cls(master=None)
        return cls(master=value.strip('"'))


class DocumentResolver:
    """
    Resolves the document reference for each compile cycle.

    Prompt answers are cached per resolver, which lives as long as the
    editing session, keyed by the active file.
    """

    def __init__(
        self,
        mode: str = MultifileMode.OFF,
        project: Optional[ProjectAwareness] = None,
        prompt: Optional[Callable[[str], Optional[str]]] = None,
    ):
        """
        Args:
            mode: One of the MultifileMode values
            project: Project-awareness capability (None if absent)
            prompt: Callable asking the user for the master file path
        """
        if mode not in (MultifileMode.OFF, MultifileMode.AUCTEX, MultifileMode.PROMPT):
            raise ValueError(f"Unknown multifile mode: {mode}")
        self.mode = mode
        self.project = project
        self.prompt = prompt
        self._prompted: Dict[Path, Path] = {}

    def resolve(self, source_path: Optional[Path]) -> Path:
        """
        Determine the .tex file to compile.

        Args:
            source_path: File visited by the active surface (None if unsaved)

        Returns:
            Absolute path ending in .tex

        Raises:
            DocumentResolutionError: If no document can be determined
        """
        if source_path is None:
            raise DocumentResolutionError("Buffer is not visiting a file; nothing to compile")
        source_path = Path(source_path).resolve()

        if self.mode == MultifileMode.AUCTEX:
            document = self._from_project(source_path)
        elif self.mode == MultifileMode.PROMPT:
            document = self._from_prompt(source_path)
        else:
            document = source_path

        document = ensure_tex_suffix(document)
        _log_debug(f"Resolved document: {document}")
        return document

    def _from_project(self, source_path: Path) -> Path:
        if self.project is None:
            raise DocumentResolutionError(
                "Multifile mode is 'auctex' but no project master is available", source_path
            )

        master = self.project.master
        if master is True:
            return source_path
        if not master:
            _log_warning(f"TeX-master variable not defined for {source_path.name}")
            raise DocumentResolutionError(
                "TeX-master variable not defined; set it or change the multifile mode",
                source_path,
            )
        return (source_path.parent / master).resolve()

    def _from_prompt(self, source_path: Path) -> Path:
        cached = self._prompted.get(source_path)
        if cached is not None:
            return cached

        if self.prompt is None:
            raise DocumentResolutionError(
                "Multifile mode is 'prompt' but no prompt is available", source_path
            )

        answer = self.prompt("Master file for this document: ")
        if not answer or not answer.strip():
            raise DocumentResolutionError("No master file given; compilation skipped", source_path)

        master = (source_path.parent / answer.strip()).resolve()
        self._prompted[source_path] = master
        _log_info(f"Using master file {master} for {source_path.name}")
        return master

    def forget(self) -> None:
        """Drop cached prompt answers."""
        self._prompted.clear()
