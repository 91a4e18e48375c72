"""Creating new blog posts."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click

from .posts import (
    META_FILENAME,
    POSTS_DIR,
    GblogError,
    PostMeta,
    ensure_initialized,
    load_config,
    save_config,
    slugify,
    write_meta,
)
from .prompts import NewPostModel, run_model


def create_post(title: str, description: str = "", is_public: bool = True) -> str:
    """Create a post directory with metadata and a markdown stub; return its name."""
    config = load_config()

    post_id = f"{config.next_id:04d}"
    slug = slugify(title)
    dir_name = f"{post_id}-{slug}"
    post_dir = Path(POSTS_DIR) / dir_name

    try:
        post_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise GblogError(f"failed to create post directory: {exc}") from exc

    meta = PostMeta(
        id=post_id,
        title=title,
        description=description,
        public=is_public,
        created_at=datetime.now().astimezone(),
    )
    write_meta(meta, post_dir / META_FILENAME)

    content = f"# {title}\n\n"
    if description:
        content += f"*{description}*\n\n"
    content += "Write your post content here...\n"
    try:
        (post_dir / f"{slug}.md").write_text(content, encoding="utf-8")
    except OSError as exc:
        raise GblogError(f"failed to create markdown file: {exc}") from exc

    config.next_id += 1
    save_config(config)

    if not is_public:
        try:
            with open(".gitignore", "a", encoding="utf-8") as gitignore:
                gitignore.write(f"posts/{dir_name}/\n")
        except OSError as exc:
            print(f"Warning: could not update .gitignore: {exc}")

    print(f"✅ Created new post: {dir_name}")
    print(f"📁 Directory: posts/{dir_name}/")
    print(f"📝 Edit your post: posts/{dir_name}/{slug}.md")
    if not is_public:
        print("🔒 This post is private and added to .gitignore")
    print(f"\nWhen ready, publish with: gblog publish {post_id}")
    return dir_name


def run_new_post() -> None:
    """Prompt for a new post's details and create it."""
    ensure_initialized()
    model = run_model(NewPostModel(), click.getchar)
    if model.quitting:
        print("Cancelled.")
        return
    create_post(model.title.value, model.description.value, model.is_public)