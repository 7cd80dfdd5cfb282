"""Compiled-help project artifacts and their serialization."""

from .generator import keyword_entries, project_files, title_entries
from .models import ChmContents, ChmIndex, ChmProject, IndexEntry, format_topic
from .writer import write_project

__all__ = [
    "ChmContents",
    "ChmIndex",
    "ChmProject",
    "IndexEntry",
    "format_topic",
    "keyword_entries",
    "project_files",
    "title_entries",
    "write_project",
]
