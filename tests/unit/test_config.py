"""Unit tests for preview configuration loading."""

import pytest
from omegaconf.errors import ConfigKeyError

from texpane.config import PreviewConfig, load_config


@pytest.mark.unit
def test_defaults(clean_env):
    config = load_config()

    assert config.compiler == "pdflatex"
    assert config.shell_escape is False
    assert config.orientation == "right"
    assert config.multifile_mode == "off"
    assert config.use_separate_group is False
    assert config.logs_path is None


@pytest.mark.unit
def test_environment_defaults(clean_env, monkeypatch):
    monkeypatch.setenv("LATEX_COMPILER", "xelatex")
    monkeypatch.setenv("TEXPANE_SHELL_ESCAPE", "true")
    monkeypatch.setenv("TEXPANE_ORIENTATION", "below")

    config = load_config()

    assert config.compiler == "xelatex"
    assert config.shell_escape is True
    assert config.orientation == "below"


@pytest.mark.unit
def test_yaml_file_then_overrides(clean_env, tmp_path):
    config_path = tmp_path / "texpane.yaml"
    config_path.write_text("compiler: lualatex\norientation: left\nmultifile_mode: prompt\n")

    config = load_config(config_path, orientation="above", compiler=None)

    assert config.compiler == "lualatex"
    assert config.orientation == "above"
    assert config.multifile_mode == "prompt"


@pytest.mark.unit
def test_unknown_yaml_key_rejected(clean_env, tmp_path):
    config_path = tmp_path / "texpane.yaml"
    config_path.write_text("compiller: lualatex\n")

    with pytest.raises(ConfigKeyError):
        load_config(config_path)


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [{"orientation": "diagonal"}, {"multifile_mode": "always"}],
)
def test_invalid_enumerations_rejected(clean_env, overrides):
    with pytest.raises(ValueError, match="Available"):
        load_config(**overrides)


@pytest.mark.unit
def test_compile_flags():
    assert PreviewConfig().compile_flags() == []
    assert PreviewConfig(shell_escape=True).compile_flags() == ["-shell-escape"]
    assert PreviewConfig(shell_escape=True, shell_escape_flag="--shell-escape").compile_flags() == [
        "--shell-escape"
    ]
