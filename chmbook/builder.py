"""Assemble topics into a compiled-help project and hand it to the compiler."""

from __future__ import annotations

import logging
from pathlib import Path

from .compiler import CompilerRunner, run_compiler
from .config import Book
from .language import ChmLanguage
from .project import (
    ChmContents,
    ChmIndex,
    ChmProject,
    keyword_entries,
    project_files,
    title_entries,
    write_project,
)
from .templates import PageRenderer
from .topics import FlatEntry, TopicNode, build_topics, flatten

logger = logging.getLogger(__name__)


class ChmBuilder:
    """Collect topics and write the ``.hhp``/``.hhc``/``.hhk`` project beside the ``.chm``.

    Pages and assets are written relative to the directory of ``output_path``.
    """

    def __init__(
        self,
        title: str,
        language: ChmLanguage,
        output_path: str | Path,
        *,
        keywords: bool = False,
    ) -> None:
        self.output_path = Path(output_path).with_suffix(".chm")
        self.project_path = self.output_path.with_suffix(".hhp")
        self.contents_path = self.output_path.with_suffix(".hhc")
        self.index_path = self.output_path.with_suffix(".hhk")
        self.keywords = keywords
        self._project = ChmProject(
            title=title,
            language=language,
            output_path=self.output_path.name,
            contents_path=self.contents_path.name,
            index_path=self.index_path.name,
        )
        self._contents = ChmContents()

    @classmethod
    def from_book(cls, book: Book, *, renderer: PageRenderer | None = None) -> "ChmBuilder":
        """Render every chapter of ``book`` into topics on a new builder."""
        config = book.chm
        language = ChmLanguage.resolve(config.language_code)
        if language.code != config.language_code:
            logger.warning("Unknown language code '%s'; falling back to %s", config.language_code, language.code)

        builder = cls(book.title, language, book.output_path, keywords=config.keywords)
        page_renderer = renderer or PageRenderer(
            template_path=config.template,
            stylesheet_path=config.stylesheet,
        )
        for topic in build_topics(book.chapters, root=book.source_dir, renderer=page_renderer):
            builder.add_topic(topic)
        return builder

    @property
    def project(self) -> ChmProject:
        return self._project

    @property
    def contents(self) -> ChmContents:
        return self._contents

    @property
    def default_file(self) -> str:
        return self._project.default_file

    def add_topic(self, topic: TopicNode) -> "ChmBuilder":
        """Append a top-level topic; the first one added picks the default page."""
        if not self._project.default_file:
            first = flatten([topic])[0]
            primary = first.primary
            self._project.default_file = primary.output_path if primary else first.output_path
        self._contents.topics.append(topic)
        return self

    def entries(self) -> list[FlatEntry]:
        return flatten(self._contents.topics)

    def build_index(self, entries: list[FlatEntry] | None = None) -> ChmIndex:
        flat = self.entries() if entries is None else entries
        index_entries = title_entries(flat)
        if self.keywords:
            index_entries.extend(keyword_entries(flat))
        return ChmIndex(entries=index_entries)

    def write(self) -> list[Path]:
        """Write the project files, pages and assets. Does not compile."""
        entries = self.entries()
        self._project.files = project_files(entries)
        return write_project(
            self.project_path,
            project=self._project,
            contents=self._contents,
            index=self.build_index(entries),
            entries=entries,
        )

    def compile(
        self,
        *,
        compiler: Path | None = None,
        runner: CompilerRunner | None = None,
    ) -> int:
        """Write the project, then run the compiler on it and return its exit status."""
        self.write()
        return run_compiler(self.project_path, compiler=compiler, runner=runner)
