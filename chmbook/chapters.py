"""Chapter hierarchy handed over by the upstream documentation generator."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .utilities import normalize_relative


class Chapter(BaseModel):
    """One node of the book outline.

    ``source_path`` is relative to the book's source root; chapters without one
    (drafts, headings) are skipped while their sub-items are still visited.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(validation_alias=AliasChoices("name", "title"))
    source_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("source_path", "path", "file"),
    )
    content: str | None = Field(
        default=None,
        description="Body text already produced upstream; replaces reading source_path.",
    )
    sub_items: list["Chapter"] = Field(
        default_factory=list,
        validation_alias=AliasChoices("sub_items", "children"),
    )

    @field_validator("source_path", mode="before")
    def _normalize_source(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        return normalize_relative(text)

    @field_validator("sub_items", mode="before")
    def _unwrap_sub_items(cls, value: Any) -> list[dict[str, Any]]:
        if value is None:
            return []
        return unwrap_book_items(value)


def unwrap_book_items(items: list[Any]) -> list[Any]:
    """Strip mdBook's ``{"Chapter": {...}}`` wrappers, dropping separators and part titles."""
    chapters: list[Any] = []
    for item in items:
        if isinstance(item, Chapter):
            chapters.append(item)
            continue
        if not isinstance(item, dict):
            # "Separator"
            continue
        if "Chapter" in item:
            chapters.append(item["Chapter"])
        elif "PartTitle" in item:
            continue
        else:
            chapters.append(item)
    return chapters
