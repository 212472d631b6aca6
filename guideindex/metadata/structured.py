"""Parser for the per-version ``quarkus.yaml`` guide index.

The file groups guides by documentation type::

    types:
      tutorial:
        - title: Getting Started
          filename: getting-started.adoc
          summary: ...
          keywords: ...
          categories: "getting-started, core"
          topics: [...]
          extensions: [...]
          url: /guides/getting-started
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Set

from ..logging import get_logger
from ..models import Guide
from .errors import MetadataParseError
from .fields import as_text, read_yaml_mapping, to_set

_LOGGER = get_logger("metadata.structured")


@dataclass
class GuideMetadata:
    """Pre-authored metadata of one guide."""

    title: Optional[str] = None
    summary: Optional[str] = None
    keywords: Optional[str] = None
    categories: Set[str] = field(default_factory=set)
    topics: Set[str] = field(default_factory=set)
    extensions: Set[str] = field(default_factory=set)
    type: Optional[str] = None


class QuarkusIOMetadata:
    """Guide metadata of one version, keyed by guide source file name."""

    def __init__(self, guides: Mapping[str, GuideMetadata], *, source: Path | None = None) -> None:
        self._guides = dict(guides)
        self.source = source

    def __len__(self) -> int:
        return len(self._guides)

    def get(self, filename: str) -> Optional[GuideMetadata]:
        return self._guides.get(filename)

    def add_metadata(self, path: Path, guide: Guide) -> None:
        """Copy the metadata of the guide at ``path`` into ``guide``."""
        metadata = self._guides.get(path.name)
        if metadata is None:
            _LOGGER.debug("No metadata entry for %s in %s", path.name, self.source)
            return
        guide.title = metadata.title
        guide.summary = metadata.summary
        guide.keywords = metadata.keywords
        guide.categories = set(metadata.categories)
        guide.topics = set(metadata.topics)
        guide.extensions = set(metadata.extensions)


def load_guides_metadata(path: Path) -> QuarkusIOMetadata:
    """Parse ``quarkus.yaml`` at ``path``.

    Raises ``FileNotFoundError`` when the file is absent and
    :class:`MetadataParseError` when its structure is not understood.
    """
    data = read_yaml_mapping(path)
    types = data.get("types")
    if not isinstance(types, dict):
        raise MetadataParseError(path, "missing 'types' mapping")

    guides: Dict[str, GuideMetadata] = {}
    for type_name, entries in types.items():
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise MetadataParseError(path, f"guides of type '{type_name}' must be a list")
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            filename = _filename_of(entry)
            if filename is None:
                _LOGGER.debug("Ignoring entry without filename or url in %s", path)
                continue
            guides[filename] = _guide_metadata(entry, default_type=str(type_name))
    return QuarkusIOMetadata(guides, source=path)


def _filename_of(entry: Mapping[str, Any]) -> Optional[str]:
    filename = as_text(entry.get("filename"))
    if filename:
        return filename
    url = as_text(entry.get("url"))
    if not url:
        return None
    name = url.rstrip("/").rsplit("/", 1)[-1]
    return f"{name}.adoc" if name else None


def _guide_metadata(entry: Mapping[str, Any], *, default_type: str) -> GuideMetadata:
    return GuideMetadata(
        title=as_text(entry.get("title")),
        summary=as_text(entry.get("summary")),
        keywords=as_text(entry.get("keywords")),
        categories=to_set(entry.get("categories")),
        topics=to_set(entry.get("topics")),
        extensions=to_set(entry.get("extensions")),
        type=as_text(entry.get("type")) or default_type,
    )


__all__ = ["GuideMetadata", "QuarkusIOMetadata", "load_guides_metadata"]
