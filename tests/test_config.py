from __future__ import annotations

import json
from pathlib import Path

import pytest

from chmbook.config import ChmConfig, load_book, load_render_context
from chmbook.errors import ConfigError


def _render_context(root: Path, items_key: str = "sections") -> str:
    chapter_b = {
        "name": "B",
        "content": "# B",
        "number": [1, 1],
        "sub_items": [],
        "path": "guide/b.md",
        "source_path": "guide/b.md",
        "parent_names": ["A"],
    }
    chapter_a = {
        "name": "A",
        "content": "# A",
        "number": [1],
        "sub_items": [{"Chapter": chapter_b}, "Separator"],
        "path": "a.md",
        "source_path": "a.md",
        "parent_names": [],
    }
    draft = {"name": "Draft", "content": "", "sub_items": [], "path": None, "source_path": None}
    payload = {
        "version": "0.4.48",
        "root": str(root),
        "destination": str(root / "book" / "chm"),
        "config": {
            "book": {"title": "Manual", "src": "src"},
            "output": {"chm": {"language-code": "FR", "output-path": "manual.chm", "command": "mdbook-chm"}},
        },
        "book": {items_key: [{"PartTitle": "Part"}, {"Chapter": chapter_a}, "Separator", {"Chapter": draft}]},
    }
    return json.dumps(payload)


def test_config_defaults() -> None:
    config = ChmConfig()

    assert config.language_code == "en-us"
    assert config.output_path == Path("book.chm")
    assert config.keywords is False
    assert config.compile is True


def test_compile_option_can_be_disabled() -> None:
    assert ChmConfig.model_validate({"compile": False}).compile is False
    assert ChmConfig.model_validate({"compile": "no"}).compile is False


def test_config_accepts_kebab_and_snake_case() -> None:
    assert ChmConfig.model_validate({"language-code": "DE"}).language_code == "de"
    assert ChmConfig.model_validate({"language_code": "it"}).language_code == "it"
    assert ChmConfig.model_validate({"language-code": ""}).language_code == "en-us"


def test_render_context_builds_book(tmp_path: Path) -> None:
    book = load_render_context(_render_context(tmp_path))

    assert book.title == "Manual"
    assert book.source_dir == tmp_path.resolve() / "src"
    assert book.output_path == tmp_path / "book" / "chm" / "manual.chm"
    assert book.chm.language_code == "fr"
    assert [chapter.name for chapter in book.chapters] == ["A", "Draft"]
    assert book.chapters[0].content == "# A"
    assert [chapter.source_path for chapter in book.chapters[0].sub_items] == ["guide/b.md"]
    assert book.chapters[1].source_path is None


def test_render_context_accepts_items_key(tmp_path: Path) -> None:
    book = load_render_context(_render_context(tmp_path, items_key="items"))

    assert [chapter.name for chapter in book.chapters] == ["A", "Draft"]


def test_render_context_rejects_garbage() -> None:
    with pytest.raises(ConfigError):
        load_render_context("not json")
    with pytest.raises(ConfigError):
        load_render_context("{}")


def test_load_book_resolves_paths_relative_to_file(tmp_path: Path) -> None:
    (tmp_path / "theme.css").write_text("body {}", encoding="utf-8")
    (tmp_path / "book.yml").write_text(
        "title: Handbook\n"
        "src: pages\n"
        "destination: dist\n"
        "chapters:\n"
        "  - name: Start\n"
        "    path: start.md\n"
        "    children:\n"
        "      - name: Windows\\Path\n"
        "        path: sub\\page.md\n"
        "chm:\n"
        "  language_code: ja\n"
        "  stylesheet: theme.css\n"
        "  keywords: true\n",
        encoding="utf-8",
    )

    book = load_book(tmp_path)

    assert book.title == "Handbook"
    assert book.source_dir == tmp_path.resolve() / "pages"
    assert book.output_path == tmp_path.resolve() / "dist" / "book.chm"
    assert book.chm.stylesheet == (tmp_path / "theme.css").resolve()
    assert book.chm.keywords is True
    assert book.chapters[0].sub_items[0].source_path == "sub/page.md"


def test_load_book_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_book(tmp_path / "absent.yml")


def test_load_book_rejects_escaping_source_paths(tmp_path: Path) -> None:
    (tmp_path / "book.yml").write_text(
        "chapters:\n  - name: Bad\n    path: ../outside.md\n", encoding="utf-8"
    )

    with pytest.raises(ConfigError):
        load_book(tmp_path / "book.yml")
