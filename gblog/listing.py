"""Listing blog posts as a table."""

from __future__ import annotations

from pathlib import Path

from .posts import POSTS_DIR, PostInfo, collect_posts, ensure_initialized
from .styles import DRAFT_COLOR, LIST_TITLE_STYLE, PLAIN, PRIVATE_COLOR, PUBLISHED_COLOR

_NO_POSTS = "No posts found. Create your first post with 'gblog new'"


def _row(post_id: str, title: str, status: str, visibility: str, created: str, url: str) -> str:
    return f"{post_id:<4} {title:<35} {status:<12} {visibility:<10} {created:<12} {url}"


def format_row(post: PostInfo) -> str:
    """Format one post as a table row, truncating long titles and gist URLs."""
    meta = post.meta

    title = meta.title
    if len(title) > 33:
        title = title[:30] + "..."

    if meta.gist_id:
        status = PUBLISHED_COLOR.render("Published")
    else:
        status = DRAFT_COLOR.render("Draft")

    if meta.public:
        visibility = PLAIN.render("Public")
    else:
        visibility = PRIVATE_COLOR.render("Private")

    created = meta.created_at.strftime("%Y-%m-%d")

    gist_url = "-"
    if meta.gist_url:
        gist_url = meta.gist_url
        if len(gist_url) > 45:
            gist_url = gist_url[:42] + "..."

    return _row(meta.id, title, status, visibility, created, gist_url)


def list_posts() -> None:
    """Print every post, newest first, followed by summary counts."""
    ensure_initialized()

    if not Path(POSTS_DIR).exists():
        print(_NO_POSTS)
        return

    posts = collect_posts()
    if not posts:
        print(_NO_POSTS)
        return

    posts.sort(key=lambda post: post.meta.id, reverse=True)

    print(LIST_TITLE_STYLE.render("📝 Blog Posts"))
    print()
    print(_row("ID", "Title", "Status", "Visibility", "Created", "Gist URL"))
    print("-" * 120)
    for post in posts:
        print(format_row(post))
    print()

    published = sum(1 for post in posts if post.meta.gist_id)
    private = sum(1 for post in posts if not post.meta.public)
    print(
        f"Total: {len(posts)} | Published: {published} | "
        f"Drafts: {len(posts) - published} | Private: {private}"
    )