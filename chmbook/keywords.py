"""Find words that occur in exactly one document of a set."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

WORD_PATTERN = re.compile(r"\b[\w-]+\b")


@dataclass(slots=True)
class KeywordProperties:
    """A distinct word and the documents it was seen in, in processing order."""

    keyword: str
    seen_in: list[str] = field(default_factory=list)


class Keyworder:
    """Accumulate words per document and report the rare ones."""

    def __init__(self) -> None:
        self._keywords: dict[str, KeywordProperties] = {}

    def __len__(self) -> int:
        return len(self._keywords)

    def process(self, path: str, text: str) -> None:
        """Record each distinct word of ``text`` as occurring in ``path``."""
        seen: set[str] = set()
        for match in WORD_PATTERN.finditer(text):
            word = match.group(0)
            if word in seen:
                continue
            seen.add(word)
            entry = self._keywords.get(word)
            if entry is None:
                self._keywords[word] = KeywordProperties(keyword=word, seen_in=[path])
            elif path not in entry.seen_in:
                entry.seen_in.append(path)

    def process_all(self, documents: Iterable[tuple[str, str]]) -> "Keyworder":
        for path, text in documents:
            self.process(path, text)
        return self

    def documents_for(self, word: str) -> list[str]:
        entry = self._keywords.get(word)
        return list(entry.seen_in) if entry else []

    def visible_keywords(self) -> list[tuple[str, str]]:
        """Words seen in exactly one document, sorted, each with that document."""
        visible = [entry for entry in self._keywords.values() if len(entry.seen_in) == 1]
        visible.sort(key=lambda entry: entry.keyword)
        return [(entry.keyword, entry.seen_in[0]) for entry in visible]
