"""Page template used to wrap rendered Markdown into standalone HTML documents."""

from __future__ import annotations

import logging
from pathlib import Path
from textwrap import dedent

from jinja2 import Environment, Template, meta
from markupsafe import Markup

from .errors import SourceReadError, TemplateAnchorError

logger = logging.getLogger(__name__)

BODY_ANCHOR = "body"

DEFAULT_STYLESHEET = dedent(
    """
    body {
        font-family: "Segoe UI", Tahoma, sans-serif;
        font-size: 16px;
        line-height: 1.6;
        margin: 2em;
        color: #222;
        background-color: #fff;
    }
    h1, h2, h3, h4, h5 {
        margin-top: 1.5em;
        margin-bottom: 0.5em;
        font-weight: 600;
    }
    code, pre {
        background: #f4f4f4;
        font-family: Consolas, monospace;
        padding: 2px 4px;
        border-radius: 4px;
    }
    pre {
        padding: 1em;
        overflow-x: auto;
    }
    a {
        color: #0645ad;
        text-decoration: none;
    }
    a:hover {
        text-decoration: underline;
    }
    ul, ol {
        padding-left: 2em;
    }
    blockquote {
        margin: 1em 0;
        padding-left: 1em;
        border-left: 4px solid #ccc;
        color: #666;
    }
    table {
        border-collapse: collapse;
        width: 100%;
        margin-top: 1em;
    }
    th, td {
        border: 1px solid #ddd;
        padding: 0.5em;
        text-align: left;
    }
    th {
        background-color: #f9f9f9;
    }
    .markdown-alert {
        margin: 1em 0;
        padding: 0.5em 1em;
        border-left: 4px solid #0969da;
        background-color: #f6f8fa;
    }
    .markdown-alert-title {
        font-weight: 600;
        margin: 0;
    }
    .markdown-alert-tip { border-left-color: #1a7f37; }
    .markdown-alert-important { border-left-color: #8250df; }
    .markdown-alert-warning { border-left-color: #9a6700; }
    .markdown-alert-caution { border-left-color: #cf222e; }
    """
).strip()

DEFAULT_PAGE_TEMPLATE = dedent(
    """
    <!DOCTYPE html>
    <html>
    <head>
        <meta name="GENERATOR" content="chmbook">
        <meta http-equiv="X-UA-Compatible" content="IE=edge" />
        <meta charset="utf-8">
        {%- if title %}
        <title>{{ title }}</title>
        {%- endif %}
        <style>
    {{ stylesheet }}
        </style>
    </head>
    <body>
    {{ body }}
    </body>
    </html>
    """
).lstrip()


class StylesheetCache:
    """Raw stylesheet text keyed by path, read at most once per build."""

    def __init__(self) -> None:
        self._entries: dict[Path, str] = {}

    def __contains__(self, path: Path) -> bool:
        return path.resolve() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, path: Path) -> str:
        key = path.resolve()
        cached = self._entries.get(key)
        if cached is None:
            try:
                cached = key.read_text(encoding="utf-8")
            except OSError as exc:
                raise SourceReadError(key, exc.strerror) from exc
            logger.debug("Loaded stylesheet %s", key)
            self._entries[key] = cached
        return cached


class PageRenderer:
    """Substitute rendered fragments into the page template."""

    def __init__(
        self,
        *,
        template_path: Path | None = None,
        stylesheet_path: Path | None = None,
        cache: StylesheetCache | None = None,
    ) -> None:
        self._env = Environment(autoescape=True, keep_trailing_newline=True)
        self._stylesheet_path = stylesheet_path
        self._cache = cache if cache is not None else StylesheetCache()
        source = DEFAULT_PAGE_TEMPLATE
        if template_path is not None:
            try:
                source = template_path.read_text(encoding="utf-8")
            except OSError as exc:
                raise SourceReadError(template_path, exc.strerror) from exc
        self._has_body_anchor = BODY_ANCHOR in meta.find_undeclared_variables(self._env.parse(source))
        self._template: Template = self._env.from_string(source)

    def stylesheet(self) -> str:
        if self._stylesheet_path is None:
            return DEFAULT_STYLESHEET
        return self._cache.get(self._stylesheet_path)

    def render(self, fragment: str, *, page: str, title: str | None = None) -> str:
        """Wrap ``fragment`` in a full HTML page; ``page`` names it in errors."""
        if not self._has_body_anchor:
            raise TemplateAnchorError(page)
        return self._template.render(
            body=Markup(fragment),
            stylesheet=Markup(self.stylesheet()),
            title=title,
        )
