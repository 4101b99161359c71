"""Unit tests for compiler invocation (subprocess is faked)."""

import subprocess

import pytest

from texpane.config import PreviewConfig
from texpane.contexts.layout.workspace import Surface
from texpane.contexts.rendering import compiler
from texpane.contexts.rendering.compiler import (
    FAILURE_EXIT_STATUS,
    CompilationResult,
    build_compile_command,
    compile_document,
)


@pytest.fixture
def fake_run(monkeypatch):
    """Replace subprocess.run, recording calls and returning a canned result."""
    calls = []
    canned = {"returncode": 0, "stdout": "Output written on paper.pdf (1 page).\n"}

    def run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, canned["returncode"], stdout=canned["stdout"])

    monkeypatch.setattr(compiler.subprocess, "run", run)
    return calls, canned


@pytest.mark.unit
def test_command_without_shell_escape(tmp_path):
    document = tmp_path / "paper.tex"
    assert build_compile_command(PreviewConfig(), document) == ["pdflatex", str(document.resolve())]


@pytest.mark.unit
def test_command_with_shell_escape(tmp_path):
    document = tmp_path / "paper.tex"
    config = PreviewConfig(compiler="xelatex", shell_escape=True)

    assert build_compile_command(config, document) == [
        "xelatex",
        "-shell-escape",
        str(document.resolve()),
    ]


@pytest.mark.unit
def test_runs_in_document_directory(tmp_path, fake_run):
    calls, _ = fake_run
    document = tmp_path / "sub" / "paper.tex"
    document.parent.mkdir()
    document.write_text("\\documentclass{article}\n")

    compile_document(document, PreviewConfig())

    cmd, kwargs = calls[0]
    assert cmd[-1] == str(document.resolve())
    assert kwargs["cwd"] == document.parent.resolve()
    assert kwargs["stderr"] == subprocess.STDOUT
    assert kwargs["stdin"] == subprocess.DEVNULL


@pytest.mark.unit
def test_output_replaces_buffer_contents(tmp_path, fake_run):
    _, canned = fake_run
    buffer = Surface("*pdflatex-buffer*", text="previous run\n")
    canned["stdout"] = "! Undefined control sequence.\nl.3 \\foo\n"
    canned["returncode"] = FAILURE_EXIT_STATUS

    result = compile_document(tmp_path / "paper.tex", PreviewConfig(), output_surface=buffer)

    assert buffer.text == "! Undefined control sequence.\nl.3 \\foo\n"
    assert result.output == buffer.text
    assert result.exit_status == FAILURE_EXIT_STATUS
    assert result.succeeded is False
    assert result.errors == ["Undefined control sequence."]


@pytest.mark.unit
@pytest.mark.parametrize("status, succeeded", [(0, True), (1, False), (2, True), (-9, True)])
def test_success_is_anything_but_failure_sentinel(tmp_path, status, succeeded):
    result = CompilationResult(document=tmp_path / "paper.tex", exit_status=status)
    assert result.succeeded is succeeded


@pytest.mark.unit
def test_spawn_failure_propagates(tmp_path):
    config = PreviewConfig(compiler=str(tmp_path / "no-such-compiler"))
    with pytest.raises(OSError):
        compile_document(tmp_path / "paper.tex", config)
