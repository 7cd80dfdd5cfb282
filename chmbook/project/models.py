"""Text artifacts of an HTML Help project: manifest, contents tree and index.

The schemas are fixed by the HTML Help Workshop compiler. Every value is HTML
escaped and every path uses backslash separators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..language import ChmLanguage
from ..topics import TopicNode
from ..utilities import escape_html, to_windows_path

GENERATOR = "chmbook"

SITEMAP_HEADER = "".join(
    (
        '<!DOCTYPE HTML PUBLIC "-//IETF//DTD HTML//EN">',
        "<HTML>",
        "<HEAD>",
        f'<meta name="GENERATOR" content="{GENERATOR}">',
        "<!-- Sitemap 1.0 -->",
        "</HEAD><BODY>",
    )
)

CONTENTS_PROPERTIES = "".join(
    (
        '<OBJECT type="text/site properties">',
        '    <param name="Type" value=" ">',
        '    <param name="TypeDesc" value=" ">',
        '    <param name="Window Styles" value="0x800025">',
        "</OBJECT>",
    )
)

SITEMAP_FOOTER = "</BODY></HTML>"


def _sitemap_value(text: str) -> str:
    return escape_html(text)


def _sitemap_path(path: str) -> str:
    return escape_html(to_windows_path(path))


@dataclass(slots=True)
class ChmProject:
    """The ``.hhp`` manifest tying the project together."""

    title: str
    language: ChmLanguage
    output_path: str
    contents_path: str
    index_path: str
    files: list[str] = field(default_factory=list)
    default_file: str = ""

    def render(self) -> str:
        files = "\n".join(_sitemap_path(path) for path in self.files)
        lines = [
            "[OPTIONS]",
            "Binary TOC=Yes",
            "Compatibility=1.1 or later",
            f"Compiled file={_sitemap_path(self.output_path)}",
            f"Contents file={_sitemap_path(self.contents_path)}",
            f"Default topic={_sitemap_path(self.default_file)}",
            "Display compile progress=Yes",
            "Enhanced decompilation=Yes",
            "Full-text search=Yes",
            f"Index file={_sitemap_path(self.index_path)}",
            f"Language={escape_html(str(self.language))}",
            f"Title={escape_html(self.title)}",
            "",
            "",
            "[FILES]",
            files,
            "",
            "[INFOTYPES]",
        ]
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()


@dataclass(slots=True)
class ChmContents:
    """The ``.hhc`` contents tree."""

    topics: list[TopicNode] = field(default_factory=list)

    def render(self) -> str:
        body = "\n".join(format_topic(topic, 1) for topic in self.topics)
        return "\n".join(
            (SITEMAP_HEADER + CONTENTS_PROPERTIES, "<UL>", body, "</UL>", SITEMAP_FOOTER)
        )

    def __str__(self) -> str:
        return self.render()


def format_topic(topic: TopicNode, depth: int) -> str:
    """Render one sitemap ``<LI>`` and its children, indented by ``depth`` tabs."""
    tabs = "\t" * depth
    lines = [
        f'{tabs}<LI><OBJECT type="text/sitemap">',
        f'{tabs}\t<param name="Name" value="{_sitemap_value(topic.title)}">',
        f'{tabs}\t<param name="Local" value="{_sitemap_path(topic.output_path)}">',
        f"{tabs}</OBJECT>",
    ]
    if topic.children:
        lines.append(f"{tabs}<UL>")
        lines.extend(format_topic(child, depth + 1) for child in topic.children)
        lines.append(f"{tabs}</UL>")
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """A keyword and the page it opens."""

    keyword: str
    target_file: str

    def render(self) -> str:
        return "".join(
            (
                '    <LI> <OBJECT type="text/sitemap">',
                f'        <param name="Name" value="{_sitemap_value(self.keyword)}">',
                f'        <param name="Local" value="{_sitemap_path(self.target_file)}">',
                "        </OBJECT>",
            )
        )


@dataclass(slots=True)
class ChmIndex:
    """The ``.hhk`` keyword index, a flat sitemap."""

    entries: Sequence[IndexEntry] = ()

    def render(self) -> str:
        body = "\n".join(entry.render() for entry in self.entries)
        return "\n".join((SITEMAP_HEADER, "<UL>", body, "</UL>", SITEMAP_FOOTER))

    def __str__(self) -> str:
        return self.render()
