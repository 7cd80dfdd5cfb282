"""Convert source pages into rendered help pages and collect their dependencies."""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import unquote, urlsplit, urlunsplit

from .errors import SourceReadError
from .markdown import iter_tokens, parse_markdown, render_tokens
from .templates import PageRenderer
from .utilities import normalize_relative, with_suffix

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".md"
RENDERED_SUFFIX = ".html"

_BARE_QUOTE_LINE = re.compile(r"^([ \t]*>(?:[ \t]*>)*)[ \t]*$", re.MULTILINE)
_INCLUDE = re.compile(r"\{\{\s*#include\s+([^}\s]+)\s*\}\}")


@dataclass(frozen=True, slots=True)
class Document:
    """A rendered page.

    ``source_path`` and ``output_path`` are POSIX paths relative to the source
    root and the project directory respectively.
    """

    source_path: str
    output_path: str
    content: bytes
    dependencies: tuple[str, ...] = ()
    text: str = ""


@dataclass(frozen=True, slots=True)
class Asset:
    """A raw dependency (image, download) copied verbatim."""

    source_path: str
    content: bytes

    @property
    def output_path(self) -> str:
        return self.source_path


@dataclass(slots=True)
class IncludedFiles:
    """Pages and assets gathered for one topic; the primary page comes last."""

    documents: list[Document] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)


def output_path_for(source_path: str) -> str:
    """Markdown sources become .html pages; other files keep their path."""
    if PurePosixPath(source_path).suffix.lower() == SOURCE_SUFFIX:
        return with_suffix(source_path, RENDERED_SUFFIX)
    return source_path


def is_network_url(target: str) -> bool:
    """True for targets with a scheme (``https:``, ``mailto:``) or protocol-relative URLs."""
    if target.startswith("//"):
        return True
    return bool(urlsplit(target).scheme)


def preprocess(text: str) -> str:
    """Keep the forced line break on lines holding only block-quote markers."""
    return _BARE_QUOTE_LINE.sub(lambda match: match.group(1) + "  ", text)


def expand_includes(text: str, source_path: str, root: Path) -> str:
    """Replace ``{{#include path}}`` with the named file's contents, one level deep."""
    parent = posixpath.dirname(source_path)

    def _replace(match: re.Match[str]) -> str:
        target = match.group(1)
        try:
            relative = normalize_relative(posixpath.join(parent, target))
        except ValueError as exc:
            raise SourceReadError(target, str(exc)) from exc
        return _read_text(root / relative)

    return _INCLUDE.sub(_replace, text)


def resolve_dependency(target: str, source_path: str) -> str:
    """Resolve an image target against the referencing page's directory.

    A leading ``/`` anchors the target at the source root instead.
    """
    path = unquote(urlsplit(target).path)
    if path.startswith("/"):
        joined = path
    else:
        joined = posixpath.join(posixpath.dirname(source_path), path)
    try:
        return normalize_relative(joined)
    except ValueError as exc:
        raise SourceReadError(target, f"referenced from {source_path}: {exc}") from exc


def rewrite_link(target: str) -> str:
    """Point relative links at ``.md`` sources to the rendered ``.html`` page."""
    if not target or target.startswith("#") or is_network_url(target):
        return target
    parts = urlsplit(target)
    if PurePosixPath(unquote(parts.path)).suffix.lower() != SOURCE_SUFFIX:
        return target
    return urlunsplit(parts._replace(path=with_suffix(parts.path, RENDERED_SUFFIX)))


def transform(
    source_path: str,
    contents: bytes | str,
    *,
    root: Path,
    renderer: PageRenderer,
    title: str | None = None,
) -> Document:
    """Render one Markdown page, recording image dependencies and rewriting links."""
    text = contents.decode("utf-8", errors="replace") if isinstance(contents, bytes) else contents
    text = preprocess(expand_includes(text, source_path, root))

    env: dict[str, Any] = {}
    tokens = parse_markdown(text, env)

    dependencies: list[str] = []
    words: list[str] = []
    for token in iter_tokens(tokens):
        if token.type == "image":
            src = str(token.attrGet("src") or "")
            if src and not is_network_url(src):
                dependency = resolve_dependency(src, source_path)
                if dependency not in dependencies:
                    dependencies.append(dependency)
        elif token.type == "link_open":
            href = token.attrGet("href")
            if isinstance(href, str):
                token.attrSet("href", rewrite_link(href))
        elif token.type in {"text", "code_inline"}:
            words.append(token.content)

    fragment = render_tokens(tokens, env)
    page = renderer.render(fragment, page=source_path, title=title)
    return Document(
        source_path=source_path,
        output_path=output_path_for(source_path),
        content=page.encode("utf-8"),
        dependencies=tuple(dependencies),
        text=" ".join(words),
    )


def collect_files(
    source_path: str,
    *,
    root: Path,
    renderer: PageRenderer,
    contents: bytes | str | None = None,
    title: str | None = None,
) -> IncludedFiles:
    """Transform a page and everything it depends on.

    Markdown dependencies are transformed recursively; anything else is copied.
    Dependencies precede the page that referenced them.
    """
    included = IncludedFiles()
    _add_file(source_path, contents, root, renderer, title, included, seen=set())
    return included


def _add_file(
    source_path: str,
    contents: bytes | str | None,
    root: Path,
    renderer: PageRenderer,
    title: str | None,
    included: IncludedFiles,
    seen: set[str],
) -> None:
    if source_path in seen:
        return
    seen.add(source_path)
    logger.info("Processing %s", source_path)

    if PurePosixPath(source_path).suffix.lower() != SOURCE_SUFFIX:
        raw = contents if contents is not None else _read_bytes(root / source_path)
        included.assets.append(
            Asset(source_path=source_path, content=raw.encode("utf-8") if isinstance(raw, str) else raw)
        )
        return

    if contents is None:
        contents = _read_bytes(root / source_path)
    document = transform(source_path, contents, root=root, renderer=renderer, title=title)
    for dependency in document.dependencies:
        _add_file(dependency, None, root, renderer, None, included, seen)
    included.documents.append(document)


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SourceReadError(path, exc.strerror) from exc


def _read_text(path: Path) -> str:
    return _read_bytes(path).decode("utf-8", errors="replace")
