"""Path and text helpers shared by the serializers."""

from __future__ import annotations

import posixpath
from html import escape
from pathlib import Path, PurePosixPath


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` for embedding in sitemap and manifest values."""
    return escape(text, quote=True)


def to_windows_path(path: str | PurePosixPath | Path) -> str:
    """Render a path with backslash separators regardless of the host."""
    return str(path).replace("/", "\\")


def normalize_relative(path: str) -> str:
    """Collapse ``.``/``..`` segments of a root-relative POSIX path.

    Raises ``ValueError`` when the result would escape the root.
    """
    normalized = posixpath.normpath(path.replace("\\", "/")).lstrip("/")
    if normalized in {"", "."}:
        raise ValueError(f"Path '{path}' does not name a file")
    if normalized == ".." or normalized.startswith("../"):
        raise ValueError(f"Path '{path}' escapes the source root")
    return normalized


def with_suffix(path: str, suffix: str) -> str:
    """Swap the extension of a POSIX path string."""
    return str(PurePosixPath(path).with_suffix(suffix))


def write_file(path: Path, contents: bytes | str) -> Path:
    """Write ``contents`` in one call after creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(contents, str):
        path.write_text(contents, encoding="utf-8")
    else:
        path.write_bytes(contents)
    return path
