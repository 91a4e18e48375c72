"""Creating a new blog project: directory layout, git repository and GitHub remote."""

from __future__ import annotations

import getpass
import os
import subprocess
from pathlib import Path

import click

from .posts import CONFIG_PATH, POSTS_DIR, Config, GblogError, save_config
from .prompts import InitModel, run_model

REPO_DESCRIPTION = "A gist-powered blog created with gblog"

_README_TEMPLATE = """# {name}

A gist-powered blog created with gblog.

## Posts

This repository contains my blog posts, each published as a GitHub Gist.

Posts are organized with descriptive filenames (e.g., `getting-started-with-go.md`) rather than generic names.

## Usage

- Create new post: `gblog new`
- List posts: `gblog list`
- Edit post: `gblog edit <id>`
- Publish post: `gblog publish <id>`
- Update existing gist: `gblog publish <id> --update`
- Export all: `gblog export`

## Posts Directory

All posts are organized in the `posts/` directory with the format `XXXX-post-title/`.
Each post contains a descriptively named markdown file and any auxiliary files.

## Workflow

1. `gblog new` - Create post with interactive prompts
2. `gblog edit <id>` - Open directory to write content
3. `git add . && git commit` - Version control your changes
4. `gblog publish <id>` - Publish to GitHub Gists
5. `gblog publish <id> --update` - Update gist after changes
"""

_GITIGNORE = """# gblog private posts will be added here automatically

# OS generated files
.DS_Store
.DS_Store?
._*
.Spotlight-V100
.Trashes
ehthumbs.db
Thumbs.db

# Export files
*.zip
"""


def run_command(name: str, *args: str) -> None:
    """Run a program with the terminal's output streams; raise GblogError if it fails."""
    try:
        result = subprocess.run([name, *args], check=False)
    except OSError as exc:
        raise GblogError(f"exec: {name}: {exc.strerror or exc}") from exc
    if result.returncode != 0:
        raise GblogError(f"exit status {result.returncode}")


def _run_or_fail(message: str, name: str, *args: str) -> None:
    try:
        run_command(name, *args)
    except GblogError as exc:
        raise GblogError(f"{message}: {exc}") from exc


def create_blog_structure(blog_name: str) -> None:
    """Create the config, posts directory, README and .gitignore in the current directory."""
    for directory in (os.path.dirname(CONFIG_PATH), POSTS_DIR):
        try:
            Path(directory).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise GblogError(f"failed to create {directory} directory: {exc}") from exc

    config = Config(next_id=1, default_public=True, blog_path=".", repo_name=blog_name)
    save_config(config)

    try:
        Path("README.md").write_text(_README_TEMPLATE.format(name=blog_name), encoding="utf-8")
    except OSError as exc:
        raise GblogError(f"failed to create README: {exc}") from exc

    try:
        Path(".gitignore").write_text(_GITIGNORE, encoding="utf-8")
    except OSError as exc:
        raise GblogError(f"failed to create .gitignore: {exc}") from exc


def create_github_repo(repo_name: str) -> None:
    """Create a public GitHub repository for the current directory with the gh tool."""
    try:
        run_command("gh", "auth", "status")
    except GblogError as exc:
        raise GblogError("GitHub CLI not authenticated. Run 'gh auth login' first") from exc
    run_command(
        "gh",
        "repo",
        "create",
        repo_name,
        "--public",
        "--description",
        REPO_DESCRIPTION,
        "--source=.",
        "--remote=origin",
        "--push",
    )


def create_blog_project(blog_name: str, blog_path: str, create_repo: bool) -> None:
    """Create the blog directory, initialise git and optionally a GitHub repository."""
    print(f"🚀 Creating blog project: {blog_name}")
    print(f"📁 Location: {blog_path}")

    try:
        Path(blog_path).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise GblogError(f"failed to create blog directory: {exc}") from exc

    try:
        os.chdir(blog_path)
    except OSError as exc:
        raise GblogError(f"failed to change to blog directory: {exc}") from exc

    print("📋 Initializing git repository...")
    _run_or_fail("failed to initialize git repository", "git", "init")

    create_blog_structure(blog_name)

    print("💾 Creating initial commit...")
    _run_or_fail("failed to add files to git", "git", "add", ".")
    _run_or_fail(
        "failed to create initial commit",
        "git",
        "commit",
        "-m",
        "Initial commit: Initialize gblog",
    )

    if create_repo:
        print("🌐 Creating GitHub repository...")
        try:
            create_github_repo(blog_name)
        except GblogError as exc:
            print(f"⚠️  Could not create GitHub repository: {exc}")
            print("You can create it manually later with: gh repo create")
        else:
            print("📤 Pushing to GitHub...")
            try:
                run_command("git", "push", "-u", "origin", "main")
            except GblogError as exc:
                print(f"⚠️  Could not push to GitHub: {exc}")

    print(f"✅ Blog '{blog_name}' created successfully!")
    print()
    print("Next steps:")
    print(f"  1. cd {blog_path}")
    print("  2. gblog new              # Create your first post")
    print("  3. gblog publish 0001     # Publish when ready")
    print()
    print(f"📂 Blog directory: {blog_path}")


def _current_username() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError, ImportError) as exc:
        raise GblogError(f"failed to get current user: {exc}") from exc


def _home_dir() -> str:
    try:
        return str(Path.home())
    except RuntimeError:
        return ""


def initialize_blog_direct(blog_name: str) -> None:
    """Create a blog named blog_name in the home directory, with a GitHub repository."""
    _current_username()
    blog_path = os.path.join(_home_dir(), blog_name)
    create_blog_project(blog_name, blog_path, True)


def initialize_blog_interactive() -> None:
    """Prompt for the blog's name, location and repository choice, then create it."""
    username = _current_username() or "user"
    model = run_model(InitModel(username, _home_dir()), click.getchar)
    if model.quitting:
        print("Cancelled.")
        return
    create_blog_project(model.blog_name.value, model.blog_path.value, model.create_repo)