"""Extension (Quarkiverse) guides described by metadata files only.

Two formats exist. The current one lives next to ``quarkus.yaml`` and has the
same ``types`` layout, with absolute URLs pointing at the extension sites. The
legacy one, ``_data/guides-<version>.yaml``, lists every guide of the version
grouped by category; only the entries marked as Quarkiverse guides are
extension guides there.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping
from urllib.parse import urljoin

from ..logging import get_logger
from ..models import QUARKIVERSE_ORIGIN, Guide
from .errors import MetadataParseError
from .fields import as_text, read_yaml_mapping, to_set

_LOGGER = get_logger("metadata.quarkiverse")


@dataclass
class QuarkiverseMetadata:
    """Extension guides parsed from one metadata file."""

    version: str
    source: Path
    guides: List[Guide]

    def create_quarkiverse_guides(self) -> Iterator[Guide]:
        yield from self.guides


def parse_quarkiverse_metadata(web_uri: str, path: Path, version: str) -> QuarkiverseMetadata:
    """Parse a current-format ``quarkiverse.yaml`` file."""
    data = read_yaml_mapping(path)
    types = data.get("types")
    if types is None:
        return QuarkiverseMetadata(version=version, source=path, guides=[])
    if not isinstance(types, dict):
        raise MetadataParseError(path, "'types' must be a mapping")

    guides: Dict[str, Guide] = {}
    for type_name, entries in types.items():
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise MetadataParseError(path, f"guides of type '{type_name}' must be a list")
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            guide = _create_guide(web_uri, version, entry, summary_key="summary")
            if guide is None:
                continue
            _merge(guides, guide)
    return QuarkiverseMetadata(version=version, source=path, guides=list(guides.values()))


def parse_legacy_quarkiverse_metadata(
    web_uri: str, path: Path, version: str
) -> QuarkiverseMetadata:
    """Parse a legacy ``guides-<version>.yaml`` file."""
    data = read_yaml_mapping(path)
    categories = data.get("categories")
    if categories is None:
        return QuarkiverseMetadata(version=version, source=path, guides=[])
    if not isinstance(categories, list):
        raise MetadataParseError(path, "'categories' must be a list")

    guides: Dict[str, Guide] = {}
    for category in categories:
        if not isinstance(category, dict):
            continue
        category_id = as_text(category.get("cat-id")) or as_text(category.get("category"))
        entries = category.get("guides") or []
        if not isinstance(entries, list):
            raise MetadataParseError(path, f"guides of category '{category_id}' must be a list")
        for entry in entries:
            if not isinstance(entry, dict) or not _is_quarkiverse_entry(entry):
                continue
            guide = _create_guide(web_uri, version, entry, summary_key="description")
            if guide is None:
                continue
            if category_id:
                guide.categories.add(category_id)
            _merge(guides, guide)
    return QuarkiverseMetadata(version=version, source=path, guides=list(guides.values()))


def _is_quarkiverse_entry(entry: Mapping[str, Any]) -> bool:
    origin = as_text(entry.get("origin"))
    if origin is not None:
        return origin.lower().startswith(QUARKIVERSE_ORIGIN)
    url = as_text(entry.get("url")) or ""
    return url.startswith(("http://", "https://"))


def _create_guide(
    web_uri: str, version: str, entry: Mapping[str, Any], *, summary_key: str
) -> Guide | None:
    url = as_text(entry.get("url"))
    if url is None:
        _LOGGER.debug("Ignoring extension guide without url: %s", entry.get("title"))
        return None
    return Guide(
        version=version,
        origin=QUARKIVERSE_ORIGIN,
        url=urljoin(web_uri, url),
        title=as_text(entry.get("title")),
        summary=as_text(entry.get(summary_key)) or as_text(entry.get("summary")),
        keywords=as_text(entry.get("keywords")),
        categories=to_set(entry.get("categories")),
        topics=to_set(entry.get("topics")),
        extensions=to_set(entry.get("extensions")),
    )


def _merge(guides: Dict[str, Guide], guide: Guide) -> None:
    existing = guides.get(guide.url)
    if existing is None:
        guides[guide.url] = guide
        return
    existing.categories.update(guide.categories)
    existing.topics.update(guide.topics)
    existing.extensions.update(guide.extensions)


__all__ = [
    "QuarkiverseMetadata",
    "parse_legacy_quarkiverse_metadata",
    "parse_quarkiverse_metadata",
]
