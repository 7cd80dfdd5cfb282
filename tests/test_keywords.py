from __future__ import annotations

from chmbook.keywords import Keyworder


def test_disjoint_documents_expose_every_word() -> None:
    keyworder = Keyworder().process_all([("a.html", "alpha beta"), ("b.html", "gamma delta")])

    assert keyworder.visible_keywords() == [
        ("alpha", "a.html"),
        ("beta", "a.html"),
        ("delta", "b.html"),
        ("gamma", "b.html"),
    ]


def test_identical_documents_expose_nothing() -> None:
    keyworder = Keyworder().process_all([("a.html", "same words here"), ("b.html", "here words same")])

    assert keyworder.visible_keywords() == []


def test_repeats_within_one_document_count_once() -> None:
    keyworder = Keyworder()
    keyworder.process("a.html", "echo echo echo")
    keyworder.process("b.html", "other")

    assert ("echo", "a.html") in keyworder.visible_keywords()
    assert keyworder.documents_for("echo") == ["a.html"]


def test_words_include_underscores_and_hyphens() -> None:
    keyworder = Keyworder()
    keyworder.process("a.html", "snake_case and kebab-case, done.")

    words = [word for word, _ in keyworder.visible_keywords()]

    assert "snake_case" in words
    assert "kebab-case" in words
    assert "done" in words
    assert len(keyworder) == 4


def test_processing_the_same_document_twice_does_not_hide_words() -> None:
    keyworder = Keyworder()
    keyworder.process("a.html", "unique")
    keyworder.process("a.html", "unique")

    assert keyworder.visible_keywords() == [("unique", "a.html")]
