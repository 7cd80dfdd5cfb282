"""Write the project artifacts, pages and assets to disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..topics import FlatEntry
from ..utilities import write_file
from .models import ChmContents, ChmIndex, ChmProject

logger = logging.getLogger(__name__)


def write_project(
    manifest_path: Path,
    *,
    project: ChmProject,
    contents: ChmContents,
    index: ChmIndex,
    entries: Iterable[FlatEntry],
) -> list[Path]:
    """Write the manifest, contents tree, index and every owned file.

    The contents and index paths on ``project``, and every page and asset
    output path, are relative to the manifest's directory. Files are written
    one at a time with no rollback, so a failure can leave a partial tree.
    """
    project_dir = manifest_path.parent
    written = [
        _write(manifest_path, project.render()),
        _write(project_dir / project.contents_path, contents.render()),
        _write(project_dir / project.index_path, index.render()),
    ]
    for entry in entries:
        for item in (*entry.assets, *entry.documents):
            written.append(_write(project_dir / item.output_path, item.content))
    return written


def _write(path: Path, contents: bytes | str) -> Path:
    logger.info("Writing %s", path)
    return write_file(path, contents)
