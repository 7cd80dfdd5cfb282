"""Shared Markdown renderer with the fixed extension set used for help pages."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Callable, Iterator, Sequence

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token
from markdown_it.utils import OptionsDict
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

ALERT_TITLES = {
    "note": "Note",
    "tip": "Tip",
    "important": "Important",
    "warning": "Warning",
    "caution": "Caution",
}

_ALERT_MARKER = re.compile(
    r"^\[!(" + "|".join(ALERT_TITLES) + r")\][ \t]*(?:\n|$)",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def _renderer() -> MarkdownIt:
    """Configure and cache the renderer. Raw HTML passes through untouched."""
    md = MarkdownIt("commonmark", {"html": True, "linkify": True})
    md.enable(["table", "strikethrough", "linkify"])
    md.use(deflist_plugin)
    md.use(footnote_plugin)
    md.use(tasklists_plugin, label=True)
    md.use(dollarmath_plugin, double_inline=True)
    md.inline.ruler.after("strikethrough", "superscript", _delimited_rule("^", "sup"))
    md.inline.ruler.after("superscript", "subscript", _delimited_rule("~", "sub"))
    md.core.ruler.after("block", "github_alerts", _alerts_rule)
    md.add_render_rule("strong_open", _render_strong)
    md.add_render_rule("strong_close", _render_strong)
    return md


def parse_markdown(text: str, env: dict[str, Any]) -> list[Token]:
    """Parse ``text`` into a token stream; ``env`` must be reused when rendering."""
    return _renderer().parse(text, env)


def render_tokens(tokens: Sequence[Token], env: dict[str, Any]) -> str:
    md = _renderer()
    return str(md.renderer.render(tokens, md.options, env))


def render_markdown(text: str) -> str:
    """Render Markdown to an HTML fragment using the shared renderer."""
    if not text.strip():
        return ""
    env: dict[str, Any] = {}
    return render_tokens(parse_markdown(text, env), env)


def iter_tokens(tokens: Sequence[Token]) -> Iterator[Token]:
    """Yield every token depth-first, including inline children."""
    for token in tokens:
        yield token
        if token.children:
            yield from iter_tokens(token.children)


def _delimited_rule(marker: str, tag: str) -> Callable[[StateInline, bool], bool]:
    """Build an inline rule for ``^sup^`` / ``~sub~`` style spans.

    Single markers only; doubled markers belong to strikethrough. The span may
    not contain whitespace.
    """

    def rule(state: StateInline, silent: bool) -> bool:
        start = state.pos
        maximum = state.posMax
        if state.src[start] != marker:
            return False
        if start + 1 >= maximum or state.src[start + 1] == marker:
            return False
        end = state.src.find(marker, start + 1, maximum)
        if end == -1:
            return False
        content = state.src[start + 1 : end]
        if any(char.isspace() for char in content):
            return False
        if not silent:
            opening = state.push(f"{tag}_open", tag, 1)
            opening.markup = marker
            text = state.push("text", "", 0)
            text.content = content.replace("\\" + marker, marker)
            closing = state.push(f"{tag}_close", tag, -1)
            closing.markup = marker
        state.pos = end + 1
        return True

    return rule


def _alerts_rule(state: StateCore) -> None:
    """Turn ``> [!NOTE]`` block quotes into GitHub-style alert blocks."""
    tokens = state.tokens
    index = 0
    while index < len(tokens) - 2:
        token = tokens[index]
        paragraph = tokens[index + 1]
        inline = tokens[index + 2]
        if (
            token.type != "blockquote_open"
            or paragraph.type != "paragraph_open"
            or inline.type != "inline"
        ):
            index += 1
            continue
        match = _ALERT_MARKER.match(inline.content)
        if match is None:
            index += 1
            continue

        kind = match.group(1).lower()
        token.tag = "div"
        token.attrSet("class", f"markdown-alert markdown-alert-{kind}")
        tokens[_matching_close(tokens, index)].tag = "div"

        title = _alert_title(kind, token.level + 1)
        inline.content = inline.content[match.end() :]
        if inline.content.strip():
            tokens[index + 1 : index + 1] = title
        else:
            # marker was the whole paragraph
            tokens[index + 1 : index + 4] = title
        index += 1


def _matching_close(tokens: list[Token], start: int) -> int:
    level = tokens[start].level
    for position in range(start + 1, len(tokens)):
        candidate = tokens[position]
        if candidate.type == "blockquote_close" and candidate.level == level:
            return position
    raise ValueError("unbalanced blockquote tokens")


def _alert_title(kind: str, level: int) -> list[Token]:
    opening = Token("paragraph_open", "p", 1, level=level, block=True)
    opening.attrSet("class", "markdown-alert-title")
    inline = Token("inline", "", 0, level=level + 1, content=ALERT_TITLES[kind], children=[])
    closing = Token("paragraph_close", "p", -1, level=level, block=True)
    return [opening, inline, closing]


def _render_strong(
    self: Any, tokens: Sequence[Token], idx: int, options: OptionsDict, env: dict[str, Any]
) -> str:
    """Render ``__text__`` as underline while ``**text**`` stays bold."""
    token = tokens[idx]
    if token.markup == "__":
        return "<u>" if token.nesting == 1 else "</u>"
    return str(self.renderToken(tokens, idx, options, env))
