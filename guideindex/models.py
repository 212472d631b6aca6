"""Core data models shared across guideindex components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Set

if TYPE_CHECKING:  # pragma: no cover
    from .git.repository import ContentProvider

QUARKUS_ORIGIN = "quarkus"
QUARKIVERSE_ORIGIN = "quarkiverse"


@dataclass
class Guide:
    """One documentation guide for one product version."""

    version: str
    origin: str
    url: str
    title: Optional[str] = None
    summary: Optional[str] = None
    keywords: Optional[str] = None
    categories: Set[str] = field(default_factory=set)
    topics: Set[str] = field(default_factory=set)
    extensions: Set[str] = field(default_factory=set)
    content: Optional["ContentProvider"] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly view; content is described, never read."""
        return {
            "version": self.version,
            "origin": self.origin,
            "url": self.url,
            "title": self.title,
            "summary": self.summary,
            "keywords": self.keywords,
            "categories": sorted(self.categories),
            "topics": sorted(self.topics),
            "extensions": sorted(self.extensions),
            "content": self.content.path if self.content is not None else None,
        }


@dataclass(frozen=True)
class VersionedLocation:
    """A version paired with the directory or file holding its guides."""

    version: str
    path: Path


__all__ = ["Guide", "QUARKIVERSE_ORIGIN", "QUARKUS_ORIGIN", "VersionedLocation"]
