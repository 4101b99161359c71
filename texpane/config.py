"""
Preview configuration.

Defaults come from environment variables (loaded from .env when present),
an optional YAML file is merged on top, and explicit overrides win last.

Examples:
    >>> config = load_config()
    >>> config = load_config(Path("texpane.yaml"), orientation="below")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

ORIENTATIONS = ("left", "right", "above", "below")
MULTIFILE_MODES = ("off", "auctex", "prompt")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in ("1", "true", "yes")


@dataclass
class PreviewConfig:
    """
    Configuration surface for the preview pane.

    Attributes:
        compiler: Compiler binary identifier
        shell_escape: Pass the shell-escape flag before the document path
        shell_escape_flag: Flag used when shell_escape is on
        orientation: Side on which the preview pane is split off
        multifile_mode: How the master document is found ("off", "auctex", "prompt")
        use_separate_group: Open the preview in a new window group instead of splitting
        logs_path: Directory for session log files (None for console only)
    """

    compiler: str = "pdflatex"
    shell_escape: bool = False
    shell_escape_flag: str = "-shell-escape"
    orientation: str = "right"
    multifile_mode: str = "off"
    use_separate_group: bool = False
    logs_path: Optional[str] = None

    def compile_flags(self) -> List[str]:
        """Extra compiler arguments placed before the document path."""
        return [self.shell_escape_flag] if self.shell_escape else []


def _env_defaults() -> PreviewConfig:
    return PreviewConfig(
        compiler=os.getenv("LATEX_COMPILER", "pdflatex"),
        shell_escape=_env_flag("TEXPANE_SHELL_ESCAPE"),
        orientation=os.getenv("TEXPANE_ORIENTATION", "right"),
        multifile_mode=os.getenv("TEXPANE_MULTIFILE_MODE", "off"),
        use_separate_group=_env_flag("TEXPANE_SEPARATE_GROUP"),
        logs_path=os.getenv("TEXPANE_LOGS_PATH"),
    )


def validate_config(config: PreviewConfig) -> PreviewConfig:
    """
    Check enumerated settings.

    Raises:
        ValueError: If orientation or multifile mode is not a known value
    """
    if config.orientation not in ORIENTATIONS:
        raise ValueError(
            f"Unknown orientation '{config.orientation}'. Available: {list(ORIENTATIONS)}"
        )
    if config.multifile_mode not in MULTIFILE_MODES:
        raise ValueError(
            f"Unknown multifile mode '{config.multifile_mode}'. Available: {list(MULTIFILE_MODES)}"
        )
    return config


def load_config(config_path: Path = None, **overrides) -> PreviewConfig:
    """
    Build the preview configuration.

    Args:
        config_path: Optional YAML file whose keys mirror PreviewConfig fields
        **overrides: Field values that take precedence (None values are ignored)

    Returns:
        Validated PreviewConfig

    Raises:
        ValueError: If an enumerated setting has an unknown value
        omegaconf.errors.ConfigKeyError: If the YAML file has an unknown key
    """
    merged = OmegaConf.structured(_env_defaults())

    if config_path is not None:
        merged = OmegaConf.merge(merged, OmegaConf.load(config_path))

    explicit = {key: value for key, value in overrides.items() if value is not None}
    if explicit:
        merged = OmegaConf.merge(merged, explicit)

    return validate_config(OmegaConf.to_object(merged))
