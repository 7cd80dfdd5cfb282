"""Topic tree mirroring the book outline, and its flattened form."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from .chapters import Chapter
from .content import Asset, Document, collect_files, output_path_for
from .templates import PageRenderer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TopicNode:
    """One entry of the contents tree.

    ``documents`` holds the pages this topic owns, its own page last, after the
    Markdown dependencies it pulled in. Children are owned exclusively.
    """

    title: str
    output_path: str
    children: list["TopicNode"] = field(default_factory=list)
    documents: list[Document] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)

    def add_child(self, child: "TopicNode") -> "TopicNode":
        self.children.append(child)
        return self

    def without_children(self) -> "FlatEntry":
        return FlatEntry(
            title=self.title,
            output_path=self.output_path,
            documents=tuple(self.documents),
            assets=tuple(self.assets),
        )

    def count(self) -> int:
        """Number of nodes in this subtree, including itself."""
        return 1 + sum(child.count() for child in self.children)


@dataclass(frozen=True, slots=True)
class FlatEntry:
    """A topic stripped of its children."""

    title: str
    output_path: str
    documents: tuple[Document, ...] = ()
    assets: tuple[Asset, ...] = ()

    @property
    def primary(self) -> Document | None:
        return self.documents[-1] if self.documents else None

    @property
    def output_paths(self) -> list[str]:
        return [item.output_path for item in (*self.assets, *self.documents)]


def build_topics(
    chapters: Sequence[Chapter],
    *,
    root: Path,
    renderer: PageRenderer,
    visited: set[str] | None = None,
) -> list[TopicNode]:
    """Transform chapters into topics, in outline order.

    Chapters without a source file are skipped and their sub-items take their
    place. A source already visited in this build is dropped with its
    sub-items. Any read or render failure propagates.
    """
    seen = set() if visited is None else visited
    topics: list[TopicNode] = []
    for chapter in chapters:
        topics.extend(_build_topic(chapter, root, renderer, seen))
    return topics


def _build_topic(
    chapter: Chapter,
    root: Path,
    renderer: PageRenderer,
    visited: set[str],
) -> list[TopicNode]:
    source_path = chapter.source_path
    if source_path is None:
        logger.debug("Chapter '%s' has no source file; skipping", chapter.name)
        return build_topics(chapter.sub_items, root=root, renderer=renderer, visited=visited)
    if source_path in visited:
        logger.debug("Chapter '%s' repeats %s; skipping", chapter.name, source_path)
        return []
    visited.add(source_path)

    logger.info("Adding topic: %s", source_path)
    files = collect_files(
        source_path,
        root=root,
        renderer=renderer,
        contents=chapter.content,
        title=chapter.name,
    )
    topic = TopicNode(
        title=chapter.name,
        output_path=output_path_for(source_path),
        documents=files.documents,
        assets=files.assets,
    )
    for child in build_topics(chapter.sub_items, root=root, renderer=renderer, visited=visited):
        topic.add_child(child)
    return [topic]


def flatten(nodes: Iterable[TopicNode]) -> list[FlatEntry]:
    """List every node once, each after all of its descendants."""
    result: list[FlatEntry] = []
    for node in nodes:
        result.extend(flatten(node.children))
        result.append(node.without_children())
    return result
