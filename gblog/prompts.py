"""Step-by-step terminal prompts for creating posts and blog projects."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

from .styles import ERROR_STYLE, HELP_STYLE, INPUT_STYLE, TITLE_STYLE

CANCEL_KEYS = frozenset({"ctrl+c", "esc"})
YES_KEYS = frozenset({"y", "Y"})
NO_KEYS = frozenset({"n", "N"})

_RAW_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\x03": "ctrl+c",
    "\x1b": "esc",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x15": "ctrl+u",
}

_CANCEL_HELP = "Press Ctrl+C or Esc to cancel"


def _normalize_key(raw: str) -> str:
    """Map a raw character read from the terminal to a key name."""
    if raw == "":
        return "ctrl+c"
    if raw in _RAW_KEYS:
        return _RAW_KEYS[raw]
    if raw.startswith("\x1b"):
        # Arrow keys and other escape sequences carry no meaning here.
        return "unknown"
    return raw


@dataclass
class TextInput:
    """A single-line text field with a placeholder and an optional length limit."""

    placeholder: str = ""
    char_limit: int = 0
    width: int = 0
    value: str = ""
    focused: bool = False
    prompt: str = "> "

    def __post_init__(self) -> None:
        self.value = self._clip(self.value)

    def _clip(self, text: str) -> str:
        return text[: self.char_limit] if self.char_limit > 0 else text

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def handle_key(self, key: str) -> None:
        """Apply a key press to the field; ignored while the field is blurred."""
        if not self.focused:
            return
        if key == "backspace":
            self.value = self.value[:-1]
        elif key == "ctrl+u":
            self.value = ""
        elif len(key) == 1 and key.isprintable():
            self.value = self._clip(self.value + key)

    def view(self) -> str:
        if not self.value:
            return self.prompt + self.placeholder
        shown = self.value[-self.width:] if self.width > 0 else self.value
        cursor = "█" if self.focused else ""
        return self.prompt + shown + cursor


class NewPostModel:
    """Asks for a post's title, description and visibility."""

    def __init__(self) -> None:
        self.step = 0
        self.title = TextInput(
            placeholder="Enter your post title...", char_limit=100, width=50, focused=True
        )
        self.description = TextInput(
            placeholder="Enter post description (optional)...", char_limit=200, width=50
        )
        self.is_public = True
        self.err: str | None = None
        self.quitting = False
        self.done = False

    def update(self, key: str) -> bool:
        """Handle one key press; return True once the prompt is finished."""
        if key in CANCEL_KEYS:
            self.quitting = True
            self.done = True
        elif key == "enter":
            if self.step == 0:
                if not self.title.value.strip():
                    self.err = "title cannot be empty"
                    return self.done
                self.step = 1
                self.description.focus()
                self.title.blur()
                self.err = None
            elif self.step == 1:
                self.step = 2
                self.description.blur()
            else:
                self.done = True
        elif self.step == 2 and (key in YES_KEYS or key in NO_KEYS):
            self.is_public = key in YES_KEYS
            self.done = True
        elif self.step == 0:
            self.title.handle_key(key)
        elif self.step == 1:
            self.description.handle_key(key)
        return self.done

    def view(self) -> str:
        parts = [TITLE_STYLE.render("📝 Create New Blog Post"), "\n"]
        if self.step == 0:
            parts += [
                "What's the title of your post?\n\n",
                INPUT_STYLE.render(self.title.view()),
                "\n\n",
                HELP_STYLE.render("Press Enter to continue"),
            ]
        elif self.step == 1:
            parts += [
                f"Title: {self.title.value}\n\n",
                "Post description (optional):\n\n",
                INPUT_STYLE.render(self.description.view()),
                "\n\n",
                HELP_STYLE.render("Press Enter to continue (or leave empty)"),
            ]
        else:
            parts.append(f"Title: {self.title.value}\n")
            if self.description.value:
                parts.append(f"Description: {self.description.value}\n")
            parts.append("\nShould this post be public? (y/n): ")
        if self.err:
            parts += ["\n\n", ERROR_STYLE.render(self.err)]
        parts += ["\n\n", HELP_STYLE.render(_CANCEL_HELP)]
        return "".join(parts)


class InitModel:
    """Asks for a new blog's name, location and whether to create a repository."""

    def __init__(self, current_user: str, home_dir: str | None = None) -> None:
        if home_dir is None:
            try:
                home_dir = str(Path.home())
            except RuntimeError:
                home_dir = ""
        self.step = 0
        self.current_user = current_user
        default_name = f"gblog-{current_user}"
        self.blog_name = TextInput(
            placeholder=default_name, char_limit=100, width=50, focused=True
        )
        self.blog_path = TextInput(
            placeholder=os.path.join(home_dir, default_name), char_limit=200, width=70
        )
        self.create_repo = True
        self.err: str | None = None
        self.quitting = False
        self.done = False

    def update(self, key: str) -> bool:
        """Handle one key press; return True once the prompt is finished."""
        if key in CANCEL_KEYS:
            self.quitting = True
            self.done = True
        elif key == "enter":
            if self.step == 0:
                if not self.blog_name.value.strip():
                    self.blog_name.value = self.blog_name.placeholder
                self.step = 1
                self.blog_path.focus()
                self.blog_name.blur()
                self.err = None
            elif self.step == 1:
                if not self.blog_path.value.strip():
                    self.blog_path.value = self.blog_path.placeholder
                self.step = 2
                self.blog_path.blur()
            else:
                self.done = True
        elif self.step == 2 and (key in YES_KEYS or key in NO_KEYS):
            self.create_repo = key in YES_KEYS
            self.done = True
        elif self.step == 0:
            self.blog_name.handle_key(key)
        elif self.step == 1:
            self.blog_path.handle_key(key)
        return self.done

    def view(self) -> str:
        parts = [TITLE_STYLE.render("🚀 Initialize New Blog"), "\n"]
        if self.step == 0:
            parts += [
                "What should your blog be called?\n\n",
                INPUT_STYLE.render(self.blog_name.view()),
                "\n\n",
                HELP_STYLE.render("Press Enter for default or type a custom name"),
            ]
        elif self.step == 1:
            parts += [
                f"Blog name: {self.blog_name.value}\n\n",
                "Where should your blog be created?\n\n",
                INPUT_STYLE.render(self.blog_path.view()),
                "\n\n",
                HELP_STYLE.render("Press Enter for default location or specify custom path"),
            ]
        else:
            parts += [
                f"Blog name: {self.blog_name.value}\n",
                f"Location: {self.blog_path.value}\n",
                "\nCreate GitHub repository? (y/n): ",
            ]
        if self.err:
            parts += ["\n\n", ERROR_STYLE.render(self.err)]
        parts += ["\n\n", HELP_STYLE.render(_CANCEL_HELP)]
        return "".join(parts)


class _Model(Protocol):
    done: bool

    def update(self, key: str) -> bool: ...

    def view(self) -> str: ...


def _draw(screen: str) -> None:
    stream = sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty and isatty():
        stream.write("\x1b[H\x1b[2J")
    stream.write(screen + "\n")
    stream.flush()


def run_model(model: _Model, getchar: Callable[[], str]) -> _Model:
    """Drive a prompt model with keys from getchar until it finishes."""
    while not model.done:
        _draw(model.view())
        try:
            raw = getchar()
        except (EOFError, KeyboardInterrupt):
            raw = "\x03"
        model.update(_normalize_key(raw))
    _draw(model.view())
    return model