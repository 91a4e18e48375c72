import subprocess
import sys
from pathlib import Path

import click
import pytest

from gblog import project
from gblog.posts import GblogError, load_config


class _Recorder:
    def __init__(self):
        self.calls = []
        self.failing = []

    def __call__(self, cmd, **kwargs):
        cmd = list(cmd)
        self.calls.append(cmd)
        code = 1 if any(cmd[: len(p)] == list(p) for p in self.failing) else 0
        return subprocess.CompletedProcess(cmd, code)


@pytest.fixture
def commands(monkeypatch):
    recorder = _Recorder()
    monkeypatch.setattr(subprocess, "run", recorder)
    return recorder


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    for var in ("LOGNAME", "USER", "LNAME", "USERNAME"):
        monkeypatch.setenv(var, "tester")
    return home_dir


def test_run_command_success_runs_program(tmp_path):
    target = tmp_path / "touched.txt"
    project.run_command(sys.executable, "-c", f"open({str(target)!r}, 'w').write('ok')")
    assert target.read_text() == "ok"


def test_run_command_reports_exit_status():
    with pytest.raises(GblogError, match="exit status 3"):
        project.run_command(sys.executable, "-c", "raise SystemExit(3)")


def test_run_command_missing_program():
    with pytest.raises(GblogError, match="no-such-program-xyz"):
        project.run_command("no-such-program-xyz")


def test_create_blog_structure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    project.create_blog_structure("myblog")
    config = load_config()
    assert config.next_id == 1
    assert config.default_public is True
    assert config.blog_path == "."
    assert config.repo_name == "myblog"
    assert (tmp_path / "posts").is_dir()
    assert (tmp_path / "README.md").read_text(encoding="utf-8").startswith("# myblog\n")
    gitignore = (tmp_path / ".gitignore").read_text(encoding="utf-8")
    assert "*.zip" in gitignore.splitlines()


def test_create_github_repo_requires_auth(commands):
    commands.failing.append(("gh", "auth", "status"))
    with pytest.raises(GblogError, match="GitHub CLI not authenticated"):
        project.create_github_repo("myblog")
    assert commands.calls == [["gh", "auth", "status"]]


def test_create_github_repo_arguments(commands):
    commands.failing.append(("gh", "repo", "create"))
    with pytest.raises(GblogError, match="exit status 1"):
        project.create_github_repo("myblog")
    assert commands.calls[1] == [
        "gh",
        "repo",
        "create",
        "myblog",
        "--public",
        "--description",
        "A gist-powered blog created with gblog",
        "--source=.",
        "--remote=origin",
        "--push",
    ]


def test_create_blog_project_without_repo(tmp_path, monkeypatch, commands):
    monkeypatch.chdir(tmp_path)
    blog = tmp_path / "blog"
    project.create_blog_project("myblog", str(blog), False)
    assert commands.calls == [
        ["git", "init"],
        ["git", "add", "."],
        ["git", "commit", "-m", "Initial commit: Initialize gblog"],
    ]
    assert Path.cwd() == blog
    assert load_config(blog / ".gblog" / "config.json").repo_name == "myblog"


def test_create_blog_project_with_repo_pushes(tmp_path, monkeypatch, commands):
    monkeypatch.chdir(tmp_path)
    blog = tmp_path / "blog"
    project.create_blog_project("myblog", str(blog), True)
    assert load_config(blog / ".gblog" / "config.json").repo_name == "myblog"
    assert ["gh", "auth", "status"] in commands.calls
    assert commands.calls[-1] == ["git", "push", "-u", "origin", "main"]


def test_create_blog_project_repo_failure_is_warning(tmp_path, monkeypatch, commands, capsys):
    monkeypatch.chdir(tmp_path)
    commands.failing.append(("gh", "auth", "status"))
    project.create_blog_project("myblog", str(tmp_path / "blog"), True)
    out = capsys.readouterr().out
    assert "Could not create GitHub repository" in out
    assert all(call[:2] != ["git", "push"] for call in commands.calls)


def test_create_blog_project_git_init_failure(tmp_path, monkeypatch, commands):
    monkeypatch.chdir(tmp_path)
    commands.failing.append(("git", "init"))
    with pytest.raises(GblogError, match="failed to initialize git repository"):
        project.create_blog_project("myblog", str(tmp_path / "blog"), False)


def test_initialize_blog_direct_uses_home(home, commands):
    project.initialize_blog_direct("myblog")
    assert load_config(home / "myblog" / ".gblog" / "config.json").repo_name == "myblog"
    assert commands.calls[-1] == ["git", "push", "-u", "origin", "main"]


def test_initialize_blog_interactive_cancel(home, commands, monkeypatch, capsys):
    monkeypatch.setattr(click, "getchar", lambda: "\x1b")
    project.initialize_blog_interactive()
    assert capsys.readouterr().out.rstrip().endswith("Cancelled.")
    assert commands.calls == []


def test_initialize_blog_interactive_defaults(home, commands, monkeypatch):
    keys = iter(["\r", "\r", "n"])
    monkeypatch.setattr(click, "getchar", lambda: next(keys))
    project.initialize_blog_interactive()
    config = load_config(home / "gblog-tester" / ".gblog" / "config.json")
    assert config.repo_name == "gblog-tester"
    assert all(call[0] != "gh" for call in commands.calls)