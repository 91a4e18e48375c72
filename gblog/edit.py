"""Opening a post's directory for editing."""

from __future__ import annotations

import subprocess
import sys

from .posts import GblogError, find_post_dir

_OPENERS = {
    "darwin": "open",
    "linux": "xdg-open",
    "windows": "explorer",
}


def _os_name() -> str:
    return "windows" if sys.platform == "win32" else sys.platform


def open_directory(path: str) -> None:
    """Open a directory in the system file manager; raise GblogError on failure."""
    os_name = _os_name()
    opener = _OPENERS.get(os_name)
    if opener is None:
        raise GblogError(f"unsupported operating system: {os_name}")
    try:
        result = subprocess.run(
            [opener, path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        raise GblogError(f"exec: {opener}: {exc.strerror or exc}") from exc
    if result.returncode != 0:
        raise GblogError(f"exit status {result.returncode}")


def edit_post(post_id: str) -> str:
    """Open the post's directory for editing and return its path."""
    post_dir = find_post_dir(post_id)
    print(f"📁 Opening post directory: {post_dir}")

    try:
        open_directory(post_dir)
    except GblogError as exc:
        print(f"⚠️  Could not open file manager: {exc}")
        print(f"📂 Post directory: {post_dir}")
        print("💡 You can manually navigate to this directory to edit your files")
        return post_dir

    print("✅ Opened in file manager")
    print(f"💡 Edit your files and run 'gblog publish {post_id}' when ready")
    return post_dir