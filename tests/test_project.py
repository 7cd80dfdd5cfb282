from __future__ import annotations

import logging
import re
from pathlib import Path

from chmbook.builder import ChmBuilder
from chmbook.chapters import Chapter
from chmbook.config import Book, ChmConfig
from chmbook.language import ChmLanguage
from chmbook.project import ChmIndex, ChmProject, IndexEntry
from chmbook.templates import PageRenderer
from chmbook.topics import TopicNode, build_topics
from chmbook.utilities import escape_html, to_windows_path

GOLDEN_DIR = Path(__file__).parent / "fixtures" / "golden"


def _write(path: Path, text: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(text, bytes):
        path.write_bytes(text)
    else:
        path.write_text(text, encoding="utf-8")
    return path


def _builder(tmp_path: Path, title: str = "Book", **kwargs: bool) -> ChmBuilder:
    return ChmBuilder(title, ChmLanguage.default(), tmp_path / "out" / "book.chm", **kwargs)


def _topics(root: Path, chapters: list[Chapter]) -> list[TopicNode]:
    return build_topics(chapters, root=root, renderer=PageRenderer())


def _two_level_book(tmp_path: Path) -> list[TopicNode]:
    source = tmp_path / "src"
    _write(source / "a.md", "# A\n")
    _write(source / "b.md", "# B\n")
    chapters = [
        Chapter(name="A", source_path="a.md", sub_items=[Chapter(name="B", source_path="b.md")]),
    ]
    return _topics(source, chapters)


def test_two_level_book_matches_golden_files(tmp_path: Path) -> None:
    builder = _builder(tmp_path, title="Tips & Tricks")
    for topic in _two_level_book(tmp_path):
        builder.add_topic(topic)

    builder.write()

    for name in ("book.hhp", "book.hhc", "book.hhk"):
        written = (tmp_path / "out" / name).read_text(encoding="utf-8")
        expected = (GOLDEN_DIR / name).read_text(encoding="utf-8")
        assert written == expected, name


def test_two_level_book_structure(tmp_path: Path) -> None:
    builder = _builder(tmp_path)
    for topic in _two_level_book(tmp_path):
        builder.add_topic(topic)
    builder.write()
    out = tmp_path / "out"

    manifest = (out / "book.hhp").read_text(encoding="utf-8")
    files_block = manifest.split("[FILES]\n", 1)[1].split("\n\n", 1)[0]
    contents = (out / "book.hhc").read_text(encoding="utf-8")
    index = (out / "book.hhk").read_text(encoding="utf-8")

    assert files_block.splitlines() == ["a.html", "b.html"]
    assert contents.count("<LI>") == 2
    assert contents.index("value=\"A\"") < contents.index("\t<UL>") < contents.index("value=\"B\"")
    assert re.findall(r'name="Name" value="([^"]*)"', index) == ["B", "A"]
    assert (out / "a.html").read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
    assert (out / "b.html").exists()


def test_builder_derives_sibling_paths(tmp_path: Path) -> None:
    builder = ChmBuilder("T", ChmLanguage.default(), tmp_path / "manual.txt")

    assert builder.output_path == tmp_path / "manual.chm"
    assert builder.project_path == tmp_path / "manual.hhp"
    assert builder.contents_path == tmp_path / "manual.hhc"
    assert builder.index_path == tmp_path / "manual.hhk"
    assert builder.default_file == ""


def test_default_file_is_set_by_first_topic_only(tmp_path: Path) -> None:
    builder = _builder(tmp_path)
    builder.add_topic(TopicNode(title="One", output_path="one.html"))
    builder.add_topic(TopicNode(title="Two", output_path="two.html"))

    assert builder.default_file == "one.html"
    assert len(builder.contents.topics) == 2


def test_dependencies_are_written_and_listed(tmp_path: Path) -> None:
    source = tmp_path / "src"
    _write(source / "guide" / "intro.md", "![x](img/pic.png)\n\n[next](next.md)\n")
    _write(source / "guide" / "img" / "pic.png", b"\x89PNG-bytes")
    builder = _builder(tmp_path)
    for topic in _topics(source, [Chapter(name="Intro", source_path="guide/intro.md")]):
        builder.add_topic(topic)

    builder.write()
    out = tmp_path / "out"

    assert (out / "guide" / "img" / "pic.png").read_bytes() == b"\x89PNG-bytes"
    page = (out / "guide" / "intro.html").read_text(encoding="utf-8")
    assert 'href="next.html"' in page
    manifest = (out / "book.hhp").read_text(encoding="utf-8")
    assert "guide\\img\\pic.png\n" in manifest
    assert "Default topic=guide\\intro.html\n" in manifest
    contents = (out / "book.hhc").read_text(encoding="utf-8")
    assert 'value="guide\\intro.html"' in contents


def test_shared_assets_are_listed_once(tmp_path: Path) -> None:
    source = tmp_path / "src"
    _write(source / "a.md", "![x](logo.png)")
    _write(source / "b.md", "![x](logo.png)")
    _write(source / "logo.png", b"logo")
    builder = _builder(tmp_path)
    chapters = [Chapter(name="A", source_path="a.md"), Chapter(name="B", source_path="b.md")]
    for topic in _topics(source, chapters):
        builder.add_topic(topic)

    builder.write()

    assert builder.project.files == ["a.html", "b.html", "logo.png"]


def test_keyword_index_is_optional(tmp_path: Path) -> None:
    source = tmp_path / "src"
    _write(source / "a.md", "shared aardvark")
    _write(source / "b.md", "shared zebra")
    chapters = [Chapter(name="A", source_path="a.md"), Chapter(name="B", source_path="b.md")]
    topics = _topics(source, chapters)

    plain = _builder(tmp_path)
    enriched = _builder(tmp_path, keywords=True)
    for topic in topics:
        plain.add_topic(topic)
        enriched.add_topic(topic)

    assert [entry.keyword for entry in plain.build_index().entries] == ["A", "B"]
    keywords = [(entry.keyword, entry.target_file) for entry in enriched.build_index().entries]
    assert keywords[:2] == [("A", "a.html"), ("B", "b.html")]
    assert ("aardvark", "a.html") in keywords
    assert ("zebra", "b.html") in keywords
    assert all(keyword != "shared" for keyword, _ in keywords)


def test_every_text_value_is_escaped() -> None:
    project = ChmProject(
        title="\"Quotes\" & <tags> 'here'",
        language=ChmLanguage.default(),
        output_path="out.chm",
        contents_path="out.hhc",
        index_path="out.hhk",
        files=["a&b.html"],
        default_file="a&b.html",
    )
    index = ChmIndex(entries=[IndexEntry(keyword="<script>", target_file="x'y.html")])

    manifest = project.render()
    sitemap = index.render()

    assert "Title=&quot;Quotes&quot; &amp; &lt;tags&gt; &#x27;here&#x27;" in manifest
    assert "a&amp;b.html" in manifest
    assert 'value="&lt;script&gt;"' in sitemap
    assert 'value="x&#x27;y.html"' in sitemap


def test_escape_leaves_no_special_characters() -> None:
    samples = ["", "plain", "&&&", "<>\"'", "a & b < c > d \" e ' f", "&amp;", "ünïcödé <é>"]
    for sample in samples:
        escaped = escape_html(sample)
        assert not set("<>\"'") & set(escaped)
        assert "&" not in re.sub(r"&(amp|lt|gt|quot|#x27);", "", escaped)


def test_windows_paths_use_backslashes() -> None:
    assert to_windows_path("a/b/c.html") == "a\\b\\c.html"
    assert to_windows_path(Path("a") / "b.html") == "a\\b.html"


def test_compile_writes_then_runs_compiler(tmp_path: Path) -> None:
    builder = _builder(tmp_path)
    for topic in _two_level_book(tmp_path):
        builder.add_topic(topic)
    calls: list[list[str]] = []

    def runner(command: list[str]) -> int:
        assert builder.project_path.exists()
        calls.append(list(command))
        return 1

    status = builder.compile(compiler=Path("hhc.exe"), runner=runner)

    assert status == 1
    assert calls == [["hhc.exe", str(builder.project_path)]]


def test_from_book_falls_back_on_unknown_language(tmp_path: Path, caplog) -> None:
    _write(tmp_path / "a.md", "# A")
    book = Book(
        source_dir=tmp_path,
        destination=tmp_path / "out",
        chapters=[Chapter(name="A", source_path="a.md")],
        chm=ChmConfig(language_code="xx-yy"),
    )

    with caplog.at_level(logging.WARNING, logger="chmbook.builder"):
        builder = ChmBuilder.from_book(book)

    assert builder.project.language == ChmLanguage.default()
    assert any("xx-yy" in record.getMessage() for record in caplog.records)
