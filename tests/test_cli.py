import os
import zipfile
from datetime import datetime, timezone

import pytest

from gblog.cli import find_config_file, main
from gblog.posts import Config, PostMeta, read_meta, save_config, write_meta


@pytest.fixture
def blog(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)
    (tmp_path / ".gblog").mkdir()
    (tmp_path / "posts").mkdir()
    save_config(Config(next_id=3, default_public=True, blog_path=".", repo_name="demo"))
    return tmp_path


def _add_post(root, dir_name, meta):
    post_dir = root / "posts" / dir_name
    post_dir.mkdir()
    write_meta(meta, post_dir / ".meta.json")
    (post_dir / "post.md").write_text("# Hello\n", encoding="utf-8")
    return post_dir


def test_find_config_file_without_project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert find_config_file() is None


def test_find_config_file_default_location(blog):
    expected = os.path.abspath(os.path.join(".gblog", "config.json"))
    assert find_config_file() == expected


def test_find_config_file_explicit_path(blog):
    path = str(blog / "custom.json")
    with open(path, "w", encoding="utf-8") as handle:
        handle.write('{"next_id": 1}')
    assert find_config_file(path) == path


def test_find_config_file_rejects_invalid_json(blog):
    path = blog / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert find_config_file(str(path)) is None


def test_no_arguments_shows_help(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "publish" in out
    assert "export" in out


def test_list_without_project_reports_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["list"]) == 1
    err = capsys.readouterr().err
    assert "Error: gblog not initialized. Run 'gblog init' first" in err


def test_list_shows_posts_and_config_notice(blog, capsys):
    created = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    _add_post(blog, "0001-first", PostMeta(id="0001", title="First", public=True, created_at=created))
    assert main(["list"]) == 0
    captured = capsys.readouterr()
    assert "First" in captured.out
    assert "2024-05-06" in captured.out
    assert "Using config file:" in captured.err


def test_edit_requires_post_id(blog, capsys):
    assert main(["edit"]) == 2
    assert "Missing argument" in capsys.readouterr().err


def test_edit_unknown_post_fails(blog, capsys):
    assert main(["edit", "9999"]) == 1
    assert "post with ID 9999 not found" in capsys.readouterr().err


def test_publish_already_published_post_is_left_alone(blog, capsys):
    meta = PostMeta(
        id="0002",
        title="Shared",
        public=True,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        gist_id="abc123",
        gist_url="https://gist.example.com/abc123",
    )
    post_dir = _add_post(blog, "0002-shared", meta)
    assert main(["publish", "0002"]) == 0
    assert "Post already published: https://gist.example.com/abc123" in capsys.readouterr().out
    assert read_meta(post_dir / ".meta.json") == meta


def test_export_writes_archive(blog, capsys):
    created = datetime(2023, 2, 3, 4, 5, 6, tzinfo=timezone.utc)
    _add_post(blog, "0001-first", PostMeta(id="0001", title="First", public=False, created_at=created))
    target = blog / "out.zip"
    assert main(["export", str(target)]) == 0
    with zipfile.ZipFile(target) as archive:
        names = set(archive.namelist())
    assert "export-metadata.json" in names
    assert "posts/2023/02/03/0001-first/post.md" in names


def test_export_without_posts_fails(blog, capsys):
    assert main(["export"]) == 1
    assert "no posts found to export" in capsys.readouterr().err


def test_unknown_command_is_usage_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["bogus"]) == 2
    assert "bogus" in capsys.readouterr().err