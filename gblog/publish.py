"""Publishing posts as GitHub Gists with the gh command-line tool."""

from __future__ import annotations

import os
import shutil
import subprocess

from .posts import META_FILENAME, GblogError, PostMeta, find_post_dir, read_meta, write_meta


def _exec_error(name: str, exc: OSError) -> str:
    return f"exec: {name}: {exc.strerror or exc}"


def get_gist_files(post_dir: str) -> list[str]:
    """Return the paths of the visible files directly inside a post directory, by name."""
    try:
        with os.scandir(post_dir) as entries:
            names = sorted(
                entry.name
                for entry in entries
                if not entry.is_dir() and not entry.name.startswith(".")
            )
    except OSError as exc:
        raise GblogError(f"failed to read post directory: {exc}") from exc
    return [os.path.join(post_dir, name) for name in names]


def check_gh_auth() -> None:
    """Raise GblogError unless the gh tool is installed and authenticated."""
    try:
        result = subprocess.run(
            ["gh", "auth", "status"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
        authenticated = result.returncode == 0
    except OSError:
        authenticated = False
    if not authenticated:
        print("🔐 GitHub CLI authentication required.")
        print("Please run: gh auth login")
        raise GblogError("GitHub CLI not authenticated")


def is_command_available(command: str) -> bool:
    return shutil.which(command) is not None


def open_in_browser(url: str) -> None:
    """Open a URL with the first available system opener; raise GblogError on failure."""
    if is_command_available("open"):
        args = ["open", url]
    elif is_command_available("xdg-open"):
        args = ["xdg-open", url]
    elif is_command_available("cmd"):
        args = ["cmd", "/c", "start", url]
    else:
        raise GblogError("no browser opening command available")
    try:
        result = subprocess.run(
            args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, check=False
        )
    except OSError as exc:
        raise GblogError(_exec_error(args[0], exc)) from exc
    if result.returncode != 0:
        raise GblogError(f"exit status {result.returncode}")


def _format_files(files: list[str]) -> str:
    return "[" + " ".join(files) + "]"


def create_new_gist(post_dir: str, meta: PostMeta) -> tuple[str, str]:
    """Upload a post's files as a new gist; return its URL and id."""
    args = ["gist", "create"]
    if meta.public:
        args.append("--public")
    if meta.description:
        args += ["--desc", meta.description]

    gist_files = get_gist_files(post_dir)
    if not gist_files:
        raise GblogError(f"no files found to publish in {post_dir}")
    args += gist_files

    print(f"📤 Publishing post '{meta.title}'...")
    print(f"Files: {_format_files(gist_files)}")

    try:
        result = subprocess.run(["gh", *args], capture_output=True, text=True, check=False)
    except OSError as exc:
        raise GblogError(f"failed to create gist: {_exec_error('gh', exc)}") from exc
    if result.returncode != 0:
        raise GblogError(f"failed to create gist: {result.stderr}")

    gist_url = result.stdout.strip()
    gist_id = gist_url.split("/")[-1]
    return gist_url, gist_id


def update_existing_gist(post_dir: str, meta: PostMeta) -> tuple[str, str]:
    """Replace the files of the post's existing gist; return its URL and id."""
    gist_files = get_gist_files(post_dir)
    if not gist_files:
        raise GblogError(f"no files found to update in {post_dir}")

    print(f"📤 Updating existing gist '{meta.title}'...")
    print(f"Files: {_format_files(gist_files)}")

    try:
        result = subprocess.run(
            ["gh", "gist", "edit", meta.gist_id, *gist_files],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise GblogError(f"failed to update gist: {_exec_error('gh', exc)}") from exc
    if result.returncode != 0:
        raise GblogError(f"failed to update gist: {result.stderr or ''}")

    return meta.gist_url, meta.gist_id


def publish_post(post_id: str, update: bool = False) -> str | None:
    """Publish a post as a gist, or update its gist; return the gist URL."""
    post_dir = find_post_dir(post_id)
    meta_path = os.path.join(post_dir, META_FILENAME)
    meta = read_meta(meta_path)

    if meta.gist_id and not update:
        print(f"⚠️  Post already published: {meta.gist_url}")
        print("Use 'gblog publish --update' to update the existing gist.")
        return None

    check_gh_auth()

    if meta.gist_id and update:
        gist_url, gist_id = update_existing_gist(post_dir, meta)
        print("✅ Updated existing gist!")
    else:
        gist_url, gist_id = create_new_gist(post_dir, meta)
        print("✅ Published successfully!")

    meta.gist_id = gist_id
    meta.gist_url = gist_url
    write_meta(meta, meta_path)

    print(f"🔗 Gist URL: {gist_url}")
    print(f"📝 Gist ID: {gist_id}")

    print("🌐 Opening in browser...")
    try:
        open_in_browser(gist_url)
    except GblogError as exc:
        print(f"⚠️  Could not open browser automatically: {exc}")
        print(f"Please visit: {gist_url}")

    return gist_url