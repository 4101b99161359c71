"""Shared fixtures for texpane tests."""

import os
import stat
import sys
from pathlib import Path

import pytest
from loguru import logger

from texpane.config import PreviewConfig

FAKE_COMPILER = """#!/bin/sh
# Stand-in for pdflatex: fails on sources containing BROKEN, else writes a PDF
for last; do :; done
if [ -n "$FAKE_COMPILER_ARGS" ]; then
  echo "$@" > "$FAKE_COMPILER_ARGS"
fi
if grep -q BROKEN "$last"; then
  echo "This is a fake TeX engine"
  grep -n BROKEN "$last" | while IFS=: read -r number rest; do
    echo "! Undefined control sequence."
    echo "l.$number BROKEN"
    echo ""
  done
  exit 1
fi
if grep -q NOPDF "$last"; then
  echo "No pages of output."
  exit 0
fi
echo "%PDF-1.4 fake $(date +%s%N)" > "${last%.tex}.pdf"
echo "Output written on ${last%.tex}.pdf (1 page)."
exit 0
"""


@pytest.fixture(autouse=True)
def reset_loguru():
    """Restore a plain stderr sink after tests that reconfigure loguru."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def fake_compiler(tmp_path) -> Path:
    """Executable shell script that behaves like a tiny pdflatex."""
    if sys.platform.startswith("win"):
        pytest.skip("fake compiler is a POSIX shell script")
    script = tmp_path / "bin" / "fake-pdflatex"
    script.parent.mkdir()
    script.write_text(FAKE_COMPILER)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def fake_config(fake_compiler) -> PreviewConfig:
    return PreviewConfig(compiler=str(fake_compiler))


def _write_source(directory: Path, name: str = "paper.tex", broken_lines=(), total_lines: int = 25) -> Path:
    lines = []
    for number in range(1, total_lines + 1):
        if number in broken_lines:
            lines.append(f"\\BROKEN{{line {number}}}")
        else:
            lines.append(f"% line {number}")
    path = directory / name
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def make_source():
    """Factory writing a LaTeX source with BROKEN markers on the given 1-indexed lines."""
    return _write_source


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "LATEX_COMPILER",
        "TEXPANE_SHELL_ESCAPE",
        "TEXPANE_ORIENTATION",
        "TEXPANE_MULTIFILE_MODE",
        "TEXPANE_SEPARATE_GROUP",
        "TEXPANE_LOGS_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    return os.environ
