"""Derive manifest file lists and index entries from flattened topics."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..keywords import Keyworder
from ..topics import FlatEntry
from .models import IndexEntry


def project_files(entries: Iterable[FlatEntry]) -> list[str]:
    """Every page and asset output path, de-duplicated and sorted."""
    paths: set[str] = set()
    for entry in entries:
        paths.update(entry.output_paths)
    return sorted(paths)


def title_entries(entries: Sequence[FlatEntry]) -> list[IndexEntry]:
    """One index entry per topic, keyed by its title, in flatten order."""
    return [IndexEntry(keyword=entry.title, target_file=entry.output_path) for entry in entries]


def keyword_entries(entries: Sequence[FlatEntry]) -> list[IndexEntry]:
    """Index entries for words that appear on exactly one topic page."""
    keyworder = Keyworder()
    for entry in entries:
        primary = entry.primary
        if primary is not None:
            keyworder.process(primary.output_path, primary.text)
    return [
        IndexEntry(keyword=word, target_file=path)
        for word, path in keyworder.visible_keywords()
    ]
