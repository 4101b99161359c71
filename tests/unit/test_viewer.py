"""Unit tests for the external viewer launch."""

import pytest

from texpane.contexts.rendering import viewer
from texpane.contexts.rendering.viewer import open_externally, opener_command


class FakeProcess:
    """Stands in for subprocess.Popen; records the command and launch options."""

    def __init__(self, calls, cmd, **kwargs):
        self.kwargs = kwargs
        self.returncode = None
        calls.append(cmd)

    def poll(self):
        return self.returncode


@pytest.fixture
def launched(monkeypatch):
    calls = []
    monkeypatch.setattr(viewer, "_launched", [])
    monkeypatch.setattr(
        viewer.subprocess, "Popen", lambda cmd, **kwargs: FakeProcess(calls, cmd, **kwargs)
    )
    monkeypatch.setattr(
        viewer.os, "startfile", lambda path: calls.append(["startfile", path]), raising=False
    )
    return calls


@pytest.mark.unit
@pytest.mark.parametrize(
    "platform, command",
    [("linux", "xdg-open"), ("freebsd13", "xdg-open"), ("darwin", "open"), ("win32", None)],
)
def test_opener_command(platform, command):
    assert opener_command(platform) == command


@pytest.mark.unit
@pytest.mark.parametrize("platform, opener", [("linux", "xdg-open"), ("darwin", "open")])
def test_opens_pdf_sibling(tmp_path, launched, platform, opener):
    (tmp_path / "paper.pdf").write_bytes(b"%PDF-1.4")

    assert open_externally(tmp_path / "paper.tex", platform=platform) is True
    assert launched == [[opener, str(tmp_path / "paper.pdf")]]


@pytest.mark.unit
def test_windows_uses_startfile(tmp_path, launched):
    (tmp_path / "paper.pdf").write_bytes(b"%PDF-1.4")

    assert open_externally(tmp_path / "paper.tex", platform="win32") is True
    assert launched == [["startfile", str(tmp_path / "paper.pdf")]]


@pytest.mark.unit
def test_missing_pdf_notifies(tmp_path, launched):
    messages = []

    assert open_externally(tmp_path / "paper.tex", platform="linux", notify=messages.append) is False
    assert launched == []
    assert "paper.pdf does not exist" in messages[0]


@pytest.mark.unit
def test_opener_is_detached_and_reaped(tmp_path, launched):
    (tmp_path / "paper.pdf").write_bytes(b"%PDF-1.4")

    open_externally(tmp_path / "paper.tex", platform="linux")
    first = viewer._launched[0]
    assert first.kwargs["start_new_session"] is True
    assert viewer.reap_launched() == 1

    first.returncode = 0
    open_externally(tmp_path / "paper.tex", platform="linux")

    assert first not in viewer._launched
    assert len(viewer._launched) == 1
    assert len(launched) == 2
