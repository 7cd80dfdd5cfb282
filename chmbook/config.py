"""Configuration and book descriptions consumed by the CHM builder."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .chapters import Chapter, unwrap_book_items
from .errors import ConfigError
from .language import DEFAULT_LANGUAGE_CODE

BOOK_FILENAME = "book.yml"
RENDERER_NAME = "chm"


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class ChmConfig(BaseModel):
    """Options read from ``[output.chm]`` (mdBook) or the ``chm`` block of a book file."""

    model_config = ConfigDict(alias_generator=_kebab, populate_by_name=True, extra="ignore")

    language_code: str = Field(default=DEFAULT_LANGUAGE_CODE, description="Locale tag, e.g. 'en-us'.")
    output_path: Path = Field(default=Path("book.chm"), description="Compiled file, relative to the destination.")
    stylesheet: Path | None = Field(
        default=None,
        description="CSS file embedded in every page instead of the built-in stylesheet.",
    )
    template: Path | None = Field(
        default=None,
        description="Jinja2 page template; must reference '{{ body }}'.",
    )
    keywords: bool = Field(
        default=False,
        description="Append words unique to a single page to the keyword index.",
    )
    compile: bool = Field(
        default=True,
        description="Invoke the HTML Help compiler after writing the project.",
    )

    @field_validator("language_code", mode="before")
    def _normalize_language(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_LANGUAGE_CODE
        text = str(value).strip().lower()
        return text or DEFAULT_LANGUAGE_CODE

    @field_validator("output_path", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("stylesheet", "template", mode="before")
    def _ensure_optional_path(cls, value: Any) -> Path | None:
        if value is None or value == "":
            return None
        return Path(value)

    def resolved(self, base_dir: Path) -> "ChmConfig":
        """Return a copy with relative asset paths anchored at ``base_dir``."""

        def _abs(value: Path | None) -> Path | None:
            if value is None or value.is_absolute():
                return value
            return (base_dir / value).resolve()

        return self.model_copy(
            update={"stylesheet": _abs(self.stylesheet), "template": _abs(self.template)}
        )


class Book(BaseModel):
    """Everything the builder needs from the upstream generator."""

    title: str = Field(default="Book")
    source_dir: Path = Field(description="Directory that chapter source paths are relative to.")
    destination: Path = Field(description="Directory the compiled file path is relative to.")
    chapters: list[Chapter] = Field(default_factory=list)
    chm: ChmConfig = Field(default_factory=ChmConfig)

    @field_validator("title", mode="before")
    def _default_title(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return "Book"
        return str(value)

    @property
    def output_path(self) -> Path:
        target = self.chm.output_path
        return target if target.is_absolute() else self.destination / target


def load_book(path: str | Path) -> Book:
    """Load a YAML book description.

    ``path`` may name the file or a directory containing ``book.yml``. Relative
    paths inside the file are interpreted relative to the file's directory.
    """
    candidate = Path(path)
    book_file = candidate / BOOK_FILENAME if candidate.is_dir() else candidate
    try:
        with book_file.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except FileNotFoundError as exc:
        raise ConfigError(f"Book file not found: {book_file}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {book_file}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Book file {book_file} should define a mapping")

    base_dir = book_file.parent.resolve()
    source_dir = Path(data.get("src") or "src")
    destination = Path(data.get("destination") or ".")

    try:
        chm = ChmConfig.model_validate(data.get("chm") or {})
        return Book(
            title=data.get("title"),
            source_dir=source_dir if source_dir.is_absolute() else base_dir / source_dir,
            destination=destination if destination.is_absolute() else base_dir / destination,
            chapters=unwrap_book_items(data.get("chapters") or []),
            chm=chm.resolved(base_dir),
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid book description in {book_file}: {exc}") from exc


def load_render_context(text: str) -> Book:
    """Parse the JSON render context mdBook writes to a renderer's stdin."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Could not parse mdBook render context: {exc}") from exc
    if not isinstance(data, dict) or "root" not in data:
        raise ConfigError("Render context is missing the book root. Is this a valid mdBook build?")

    root = Path(data["root"]).resolve()
    config = data.get("config") or {}
    book_table = config.get("book") or {}
    output_table = (config.get("output") or {}).get(RENDERER_NAME) or {}

    source_dir = Path(book_table.get("src") or "src")
    destination = Path(data.get("destination") or root / "book" / RENDERER_NAME)

    book = data.get("book") or {}
    # mdBook 0.4 serializes "sections"; newer releases renamed it to "items".
    items = book.get("items", book.get("sections")) or []

    try:
        return Book(
            title=book_table.get("title"),
            source_dir=source_dir if source_dir.is_absolute() else root / source_dir,
            destination=destination if destination.is_absolute() else root / destination,
            chapters=unwrap_book_items(items),
            chm=ChmConfig.model_validate(output_table).resolved(root),
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid mdBook render context: {exc}") from exc
