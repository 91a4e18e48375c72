"""Post and blog configuration records and their storage on disk."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

CONFIG_PATH = os.path.join(".gblog", "config.json")
POSTS_DIR = "posts"
META_FILENAME = ".meta.json"
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class GblogError(Exception):
    """Raised when a gblog operation cannot be completed."""


_TIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"(Z|[+-]\d{2}:\d{2})\Z"
)

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def format_time(moment: datetime) -> str:
    """Format a timestamp as RFC 3339 with trailing fraction zeros trimmed."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += f".{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds()) // 60
    if total_minutes == 0:
        return text + "Z"
    sign = "+" if total_minutes > 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp; fractions beyond microseconds are dropped."""
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction or "")[:6].ljust(6, "0"))
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        zone_hours, zone_minutes = int(zone[1:3]), int(zone[4:6])
        if zone_minutes >= 60:
            raise ValueError(f"invalid time zone offset: {zone!r}")
        tz = timezone(sign * timedelta(hours=zone_hours, minutes=zone_minutes))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


def _encode_json(data: dict[str, Any]) -> str:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    for char, escape in _JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text + "\n"


def _field(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(f"field {key!r} must be of type {kind.__name__}, got {value!r}")
    return value


def _require_mapping(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


@dataclass
class PostMeta:
    """Metadata stored alongside each post."""

    id: str
    title: str
    description: str = ""
    public: bool = False
    created_at: datetime = ZERO_TIME
    gist_id: str = ""
    gist_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "public": self.public,
            "created_at": format_time(self.created_at),
        }
        if self.gist_id:
            data["gist_id"] = self.gist_id
        if self.gist_url:
            data["gist_url"] = self.gist_url
        return data

    @classmethod
    def from_dict(cls, data: Any) -> PostMeta:
        data = _require_mapping(data)
        created = data.get("created_at")
        if created is None:
            created_at = ZERO_TIME
        elif isinstance(created, str):
            created_at = parse_time(created)
        else:
            raise ValueError(f"field 'created_at' must be a timestamp, got {created!r}")
        return cls(
            id=_field(data, "id", str, ""),
            title=_field(data, "title", str, ""),
            description=_field(data, "description", str, ""),
            public=_field(data, "public", bool, False),
            created_at=created_at,
            gist_id=_field(data, "gist_id", str, ""),
            gist_url=_field(data, "gist_url", str, ""),
        )


@dataclass
class Config:
    """Blog-wide settings kept in .gblog/config.json."""

    next_id: int = 0
    github_user: str = ""
    default_public: bool = False
    blog_path: str = ""
    repo_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"next_id": self.next_id}
        if self.github_user:
            data["github_user"] = self.github_user
        data["default_public"] = self.default_public
        data["blog_path"] = self.blog_path
        data["repo_name"] = self.repo_name
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        data = _require_mapping(data)
        return cls(
            next_id=_field(data, "next_id", int, 0),
            github_user=_field(data, "github_user", str, ""),
            default_public=_field(data, "default_public", bool, False),
            blog_path=_field(data, "blog_path", str, ""),
            repo_name=_field(data, "repo_name", str, ""),
        )


@dataclass
class PostInfo:
    """A post's metadata together with its directory name."""

    meta: PostMeta
    dir: str


def slugify(text: str) -> str:
    """Turn a title into a lower-case, hyphen-separated slug of at most 50 characters."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:50]


def load_config(path: str | os.PathLike[str] = CONFIG_PATH) -> Config:
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise GblogError(f"failed to read config: {exc}") from exc
    try:
        return Config.from_dict(json.loads(raw))
    except ValueError as exc:
        raise GblogError(f"failed to parse config: {exc}") from exc


def save_config(config: Config, path: str | os.PathLike[str] = CONFIG_PATH) -> None:
    try:
        Path(path).write_text(_encode_json(config.to_dict()), encoding="utf-8")
    except OSError as exc:
        raise GblogError(f"failed to write config: {exc}") from exc


def read_meta(path: str | os.PathLike[str]) -> PostMeta:
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise GblogError(f"failed to read post metadata: {exc}") from exc
    try:
        return PostMeta.from_dict(json.loads(raw))
    except ValueError as exc:
        raise GblogError(f"failed to parse metadata: {exc}") from exc


def write_meta(meta: PostMeta, path: str | os.PathLike[str]) -> None:
    try:
        Path(path).write_text(_encode_json(meta.to_dict()), encoding="utf-8")
    except OSError as exc:
        raise GblogError(f"failed to write metadata: {exc}") from exc


def ensure_initialized() -> None:
    """Raise GblogError unless the current directory holds a gblog project."""
    if not Path(CONFIG_PATH).exists():
        raise GblogError("gblog not initialized. Run 'gblog init' first")


def _sorted_entries(posts_dir: str | os.PathLike[str]) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(posts_dir) as entries:
            return sorted(entries, key=lambda entry: entry.name)
    except OSError as exc:
        raise GblogError(f"failed to read posts directory: {exc}") from exc


def collect_posts(posts_dir: str | os.PathLike[str] = POSTS_DIR) -> list[PostInfo]:
    """Read every post directory's metadata, warning about and skipping broken ones."""
    posts = []
    for entry in _sorted_entries(posts_dir):
        if not entry.is_dir(follow_symlinks=False):
            continue
        meta_path = os.path.join(posts_dir, entry.name, META_FILENAME)
        try:
            raw = Path(meta_path).read_bytes()
        except OSError as exc:
            print(f"Warning: could not read metadata for {entry.name}: {exc}")
            continue
        try:
            meta = PostMeta.from_dict(json.loads(raw))
        except ValueError as exc:
            print(f"Warning: could not parse metadata for {entry.name}: {exc}")
            continue
        posts.append(PostInfo(meta=meta, dir=entry.name))
    return posts


def find_post_dir(post_id: str, posts_dir: str | os.PathLike[str] = POSTS_DIR) -> str:
    """Return the path of the post directory whose name starts with the id and a hyphen."""
    prefix = post_id + "-"
    for entry in _sorted_entries(posts_dir):
        if entry.is_dir(follow_symlinks=False) and entry.name.startswith(prefix):
            return os.path.join(posts_dir, entry.name)
    raise GblogError(f"post with ID {post_id} not found")