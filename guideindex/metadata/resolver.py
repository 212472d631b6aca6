"""Per-version choice between structured metadata and AsciiDoc header scanning."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Mapping

from ..logging import get_logger
from ..models import Guide, VersionedLocation
from ..paths import yaml_metadata_path
from .asciidoc import scan_asciidoc
from .errors import MetadataParseError
from .fields import to_set
from .structured import QuarkusIOMetadata, load_guides_metadata

_LOGGER = get_logger("metadata.resolver")

MetadataFiller = Callable[[Path, Guide], None]
MetadataLoader = Callable[[Path], QuarkusIOMetadata]
AsciidocScanner = Callable[
    [Path, Callable[[str], None], Mapping[str, Callable[[str], None]]], None
]


class MetadataResolver:
    """Hands out the metadata filler of each guide location, deciding once per location.

    Versions that ship a ``quarkus.yaml`` index (see
    :func:`guideindex.paths.yaml_metadata_path`) get their metadata from it.
    Older versions (2.7 and before) only have the AsciiDoc sources, so their
    guides are filled by scanning each document header instead.
    """

    def __init__(
        self,
        root: Path,
        *,
        loader: MetadataLoader = load_guides_metadata,
        scanner: AsciidocScanner = scan_asciidoc,
    ) -> None:
        self._root = root
        self._loader = loader
        self._scanner = scanner
        self._fillers: Dict[VersionedLocation, MetadataFiller] = {}

    def resolver_for(self, location: VersionedLocation) -> MetadataFiller:
        filler = self._fillers.get(location)
        if filler is None:
            filler = self._create_filler(location)
            self._fillers[location] = filler
        return filler

    def clear(self) -> None:
        self._fillers.clear()

    def _create_filler(self, location: VersionedLocation) -> MetadataFiller:
        metadata_path = self._root / yaml_metadata_path(location.version)
        try:
            metadata = self._loader(metadata_path)
        except FileNotFoundError:
            _LOGGER.info(
                "No guide metadata for version %s, scanning AsciiDoc headers instead",
                location.version,
            )
            return self._scan_source
        except MetadataParseError as exc:
            _LOGGER.warning(
                "Ignoring guide metadata of version %s, scanning AsciiDoc headers instead: %s",
                location.version,
                exc,
            )
            return self._scan_source
        _LOGGER.debug(
            "Loaded metadata of %d guides for version %s", len(metadata), location.version
        )
        return metadata.add_metadata

    def _scan_source(self, path: Path, guide: Guide) -> None:
        def set_title(value: str) -> None:
            guide.title = value or None

        def set_summary(value: str) -> None:
            guide.summary = value or None

        def set_keywords(value: str) -> None:
            guide.keywords = value or None

        def set_categories(value: str) -> None:
            guide.categories = to_set(value)

        def set_topics(value: str) -> None:
            guide.topics = to_set(value)

        def set_extensions(value: str) -> None:
            guide.extensions = to_set(value)

        self._scanner(
            path,
            set_title,
            {
                "summary": set_summary,
                "keywords": set_keywords,
                "categories": set_categories,
                "topics": set_topics,
                "extensions": set_extensions,
            },
        )


__all__ = ["MetadataFiller", "MetadataResolver", "to_set"]
