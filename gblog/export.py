"""Exporting every post into a zip archive."""

from __future__ import annotations

import os
import shutil
import zipfile
from collections.abc import Iterator, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from .posts import (
    POSTS_DIR,
    GblogError,
    PostInfo,
    _encode_json,
    collect_posts,
    ensure_initialized,
    format_time,
)

DEFAULT_OUTPUT = "gblog-export.zip"
METADATA_NAME = "export-metadata.json"


def build_export_metadata(posts: Sequence[PostInfo], exported_at: datetime) -> dict[str, Any]:
    """Describe an export: when it was made and a summary of every post in it."""
    entries = []
    for post in posts:
        entry: dict[str, Any] = {
            "id": post.meta.id,
            "title": post.meta.title,
            "public": post.meta.public,
            "created_at": format_time(post.meta.created_at),
        }
        if post.meta.gist_url:
            entry["gist_url"] = post.meta.gist_url
        entries.append(entry)
    return {
        "exported_at": format_time(exported_at),
        "total_posts": len(posts),
        "posts": entries if entries else None,
    }


def _iter_files(directory: str) -> Iterator[str]:
    """Yield every non-directory path under directory, in lexical order."""
    with os.scandir(directory) as scan:
        entries = sorted(scan, key=lambda entry: entry.name)
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _iter_files(entry.path)
        else:
            yield entry.path


def _date_path(moment: datetime) -> str:
    return f"{moment.year:04d}/{moment.month:02d}/{moment.day:02d}"


def _add_post(archive: zipfile.ZipFile, post: PostInfo) -> None:
    post_path = os.path.join(POSTS_DIR, post.dir)
    zip_dir = f"posts/{_date_path(post.meta.created_at)}/{post.dir}"
    for file_path in _iter_files(post_path):
        relative = Path(os.path.relpath(file_path, post_path)).as_posix()
        try:
            source = open(file_path, "rb")
        except OSError as exc:
            raise GblogError(f"failed to open file: {exc}") from exc
        with source, archive.open(f"{zip_dir}/{relative}", "w") as target:
            try:
                shutil.copyfileobj(source, target)
            except OSError as exc:
                raise GblogError(f"failed to copy file contents: {exc}") from exc


def export_posts(output_file: str = DEFAULT_OUTPUT) -> None:
    """Write every post, grouped by creation date, plus a metadata summary to a zip file."""
    ensure_initialized()

    if not Path(POSTS_DIR).exists():
        raise GblogError("no posts directory found")

    posts = collect_posts()
    if not posts:
        raise GblogError("no posts found to export")

    posts.sort(key=lambda post: post.meta.created_at)

    try:
        archive = zipfile.ZipFile(output_file, "w", compression=zipfile.ZIP_DEFLATED)
    except OSError as exc:
        raise GblogError(f"failed to create zip file: {exc}") from exc

    with archive:
        print(f"📦 Exporting {len(posts)} posts to {output_file}...")
        for post in posts:
            print(f"  📁 Adding {post.meta.title} ({post.meta.id})...")
            try:
                _add_post(archive, post)
            except (GblogError, OSError) as exc:
                raise GblogError(f"failed to add post {post.meta.id} to zip: {exc}") from exc

        metadata = build_export_metadata(posts, datetime.now().astimezone())
        try:
            archive.writestr(METADATA_NAME, _encode_json(metadata))
        except OSError as exc:
            raise GblogError(f"failed to write export metadata: {exc}") from exc

    print("✅ Export completed successfully!")
    print(f"📦 Archive: {output_file}")
    print(f"📊 Total posts: {len(posts)}")

    published = sum(1 for post in posts if post.meta.gist_id)
    private = sum(1 for post in posts if not post.meta.public)
    print(f"📈 Published: {published}, Drafts: {len(posts) - published}, Private: {private}")