"""Command-line entry point for gblog."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Sequence

import click

from .edit import edit_post
from .export import DEFAULT_OUTPUT, export_posts
from .listing import list_posts
from .new import run_new_post
from .posts import CONFIG_PATH, GblogError
from .project import initialize_blog_direct, initialize_blog_interactive
from .publish import publish_post


def find_config_file(config_file: str | None = None) -> str | None:
    """Return the configuration file in use, or None if none can be read."""
    if config_file:
        path = config_file
    else:
        path = os.path.abspath(CONFIG_PATH)
    try:
        json.loads(Path(path).read_bytes())
    except (OSError, ValueError):
        return None
    return path


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_file",
    default="",
    help="config file (default is .gblog/config.json)",
)
@click.pass_context
def _cli(ctx: click.Context, config_file: str) -> None:
    """gblog is a command-line tool for creating and managing a blog powered by GitHub Gists.

    Write your posts in markdown, add auxiliary files, and publish them as gists.
    Your blog becomes a collection of organized, shareable code snippets and thoughts.
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return
    used = find_config_file(config_file or None)
    if used is not None:
        click.echo(f"Using config file: {used}", err=True)


@_cli.command("init", short_help="Initialize a new gblog project")
@click.argument("blog_name", required=False)
def _init(blog_name: str | None) -> None:
    """Initialize a new gblog project with automatic repository setup.

    This creates a new blog repository, sets up the directory structure,
    and configures everything needed to start your gist-powered blog.
    """
    if blog_name:
        initialize_blog_direct(blog_name)
    else:
        initialize_blog_interactive()


@_cli.command("new", short_help="Create a new blog post")
def _new() -> None:
    """Create a new blog post with an interactive CLI.

    This will prompt you for the post title, description, and visibility,
    then create a new directory with the post files.
    """
    run_new_post()


@_cli.command("list", short_help="List all blog posts")
def _list() -> None:
    """List all blog posts with their status and information.

    Shows post ID, title, status (draft/published), visibility (public/private),
    and creation date.
    """
    list_posts()


@_cli.command("edit", short_help="Open a post directory for editing")
@click.argument("post_id")
def _edit(post_id: str) -> None:
    """Open a post directory in your default file manager or editor.

    This will open the post directory so you can edit the markdown file
    and add any auxiliary files before publishing.
    """
    edit_post(post_id)


@_cli.command("publish", short_help="Publish a post to GitHub Gists")
@click.argument("post_id")
@click.option(
    "-u",
    "--update",
    is_flag=True,
    default=False,
    help="Update existing gist instead of creating new one",
)
def _publish(post_id: str, update: bool) -> None:
    """Publish a blog post to GitHub Gists.

    This command will upload all files in the post directory to a new gist
    and open it in your default browser. Use --update to update an existing gist.
    """
    publish_post(post_id, update)


@_cli.command("export", short_help="Export all posts to a zip file")
@click.argument("output_file", required=False)
def _export(output_file: str | None) -> None:
    """Export all blog posts (public and private) to a zip file.

    The exported archive will contain all posts organized by date,
    including all markdown files and auxiliary files.
    """
    export_posts(output_file or DEFAULT_OUTPUT)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the gblog command line and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        result = _cli.main(args=args, prog_name="gblog", standalone_mode=False)
    except GblogError as exc:
        click.echo(f"Error: {exc}", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0