"""Exceptions raised while building a compiled-help project."""

from __future__ import annotations

from pathlib import Path


class ChmError(RuntimeError):
    """Base class for chmbook build failures."""


class SourceReadError(ChmError):
    """Raised when a source, include, or dependency file cannot be read."""

    def __init__(self, path: str | Path, reason: str | None = None) -> None:
        self.path = Path(path)
        message = f"Unable to read {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TemplateAnchorError(ChmError):
    """Raised when the page template has no slot for the rendered body."""

    def __init__(self, page: str | Path) -> None:
        self.page = str(page)
        super().__init__(
            f"Page template does not reference '{{{{ body }}}}'; cannot render {self.page}"
        )


class CompilerNotFoundError(ChmError):
    """Raised when the HTML Help compiler cannot be located."""


class ConfigError(ChmError):
    """Raised when the book description or renderer context is malformed."""
