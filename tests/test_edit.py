import os
import subprocess
import sys

import pytest

from gblog import edit
from gblog.posts import GblogError


class _Recorder:
    def __init__(self):
        self.calls = []
        self.code = 0

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        return subprocess.CompletedProcess(cmd, self.code)


@pytest.fixture
def opener(monkeypatch):
    recorder = _Recorder()
    monkeypatch.setattr(subprocess, "run", recorder)
    monkeypatch.setattr(sys, "platform", "linux")
    return recorder


@pytest.fixture
def blog(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "posts" / "0001-hello").mkdir(parents=True)
    (tmp_path / "posts" / "0002-other").mkdir()
    return tmp_path


@pytest.mark.parametrize(
    "platform, program",
    [("darwin", "open"), ("linux", "xdg-open"), ("win32", "explorer")],
)
def test_open_directory_uses_platform_opener(opener, monkeypatch, platform, program):
    monkeypatch.setattr(sys, "platform", platform)
    opener.code = 1
    with pytest.raises(GblogError, match="exit status 1"):
        edit.open_directory("some/dir")
    assert opener.calls == [[program, "some/dir"]]


def test_open_directory_unsupported_platform(opener, monkeypatch):
    monkeypatch.setattr(sys, "platform", "plan9")
    with pytest.raises(GblogError, match="unsupported operating system: plan9"):
        edit.open_directory("some/dir")
    assert opener.calls == []


def test_open_directory_failure(opener):
    opener.code = 2
    with pytest.raises(GblogError, match="exit status 2"):
        edit.open_directory("some/dir")


def test_edit_post_opens_matching_directory(blog, opener, capsys):
    result = edit.edit_post("0001")
    assert result == os.path.join("posts", "0001-hello")
    assert opener.calls == [["xdg-open", result]]
    out = capsys.readouterr().out
    assert "Opened in file manager" in out
    assert "gblog publish 0001" in out


def test_edit_post_reports_opener_failure(blog, opener, capsys):
    opener.code = 1
    result = edit.edit_post("0002")
    assert result == os.path.join("posts", "0002-other")
    out = capsys.readouterr().out
    assert "Could not open file manager: exit status 1" in out
    assert f"Post directory: {result}" in out


def test_edit_post_unknown_id(blog, opener):
    with pytest.raises(GblogError, match="post with ID 0009 not found"):
        edit.edit_post("0009")
    assert opener.calls == []