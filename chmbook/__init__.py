"""Build HTML Help (CHM) projects from Markdown books."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .builder import ChmBuilder
from .language import ChmLanguage
from .topics import TopicNode, build_topics, flatten

__all__ = ["ChmBuilder", "ChmLanguage", "TopicNode", "__version__", "build_topics", "flatten"]

try:
    __version__ = version("chmbook")
except PackageNotFoundError:
    # Source checkout without an installed distribution.
    __version__ = "0.0.0"
