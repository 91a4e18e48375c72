"""Terminal text styles: colours, bold text, borders, padding and margins."""

from __future__ import annotations

import os
import sys
import unicodedata
from dataclasses import dataclass

_RESET = "\x1b[0m"
_ROUNDED = {
    "top_left": "╭",
    "top_right": "╮",
    "bottom_left": "╰",
    "bottom_right": "╯",
    "horizontal": "─",
    "vertical": "│",
}


def _color_enabled() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    force = os.environ.get("CLICOLOR_FORCE")
    if force and force != "0":
        return True
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _color_code(color: str) -> str:
    digits = color[1:] if color.startswith("#") else ""
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        raise ValueError(f"invalid hex colour: {color!r}")
    try:
        red, green, blue = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError as exc:
        raise ValueError(f"invalid hex colour: {color!r}") from exc
    return f"38;2;{red};{green};{blue}"


def _display_width(text: str) -> int:
    width = 0
    for char in text:
        if unicodedata.category(char) in ("Mn", "Me", "Cf"):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def _paint(text: str, codes: list[str]) -> str:
    if not codes or not text:
        return text
    return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


@dataclass(frozen=True)
class Style:
    """A text style; margins and padding are (vertical, horizontal) cell counts."""

    bold: bool = False
    foreground: str | None = None
    border: bool = False
    border_foreground: str | None = None
    margin: tuple[int, int] = (0, 0)
    padding: tuple[int, int] = (0, 0)

    def __post_init__(self) -> None:
        for color in (self.foreground, self.border_foreground):
            if color is not None:
                _color_code(color)

    def _text_codes(self) -> list[str]:
        codes = ["1"] if self.bold else []
        if self.foreground is not None:
            codes.append(_color_code(self.foreground))
        return codes

    def render(self, text: str) -> str:
        colored = _color_enabled()
        text_codes = self._text_codes() if colored else []
        border_codes = (
            [_color_code(self.border_foreground)]
            if colored and self.border_foreground is not None
            else []
        )

        raw_lines = text.replace("\r\n", "\n").replace("\t", "    ").split("\n")
        width = max(_display_width(line) for line in raw_lines)
        lines = [
            _paint(line, text_codes) + " " * (width - _display_width(line)) for line in raw_lines
        ]

        pad_v, pad_h = self.padding
        if pad_h:
            lines = [" " * pad_h + line + " " * pad_h for line in lines]
        width += 2 * pad_h
        if pad_v:
            blank = [" " * width] * pad_v
            lines = blank + lines + blank

        if self.border:
            edge = _ROUNDED["horizontal"] * width
            side = _paint(_ROUNDED["vertical"], border_codes)
            top = _paint(_ROUNDED["top_left"] + edge + _ROUNDED["top_right"], border_codes)
            bottom = _paint(_ROUNDED["bottom_left"] + edge + _ROUNDED["bottom_right"], border_codes)
            lines = [top] + [side + line + side for line in lines] + [bottom]

        margin_v, margin_h = self.margin
        if margin_h:
            lines = [" " * margin_h + line + " " * margin_h for line in lines]
        rendered = "\n".join(lines)
        return "\n" * margin_v + rendered + "\n" * margin_v


TITLE_STYLE = Style(bold=True, foreground="#7C3AED", margin=(1, 0))
INPUT_STYLE = Style(border=True, border_foreground="#7C3AED", padding=(0, 1))
HELP_STYLE = Style(foreground="#666666", margin=(1, 0))
ERROR_STYLE = Style(bold=True, foreground="#FF0000")

LIST_TITLE_STYLE = Style(bold=True, foreground="#7C3AED", margin=(1, 0))
PUBLISHED_COLOR = Style(foreground="#22C55E")
DRAFT_COLOR = Style(foreground="#F59E0B")
PRIVATE_COLOR = Style(foreground="#EF4444")
PLAIN = Style()