"""Guide metadata sources: structured YAML files and AsciiDoc headers."""

from .asciidoc import scan_asciidoc
from .errors import MetadataParseError
from .quarkiverse import (
    QuarkiverseMetadata,
    parse_legacy_quarkiverse_metadata,
    parse_quarkiverse_metadata,
)
from .resolver import MetadataFiller, MetadataResolver, to_set
from .structured import GuideMetadata, QuarkusIOMetadata, load_guides_metadata

__all__ = [
    "GuideMetadata",
    "MetadataFiller",
    "MetadataParseError",
    "MetadataResolver",
    "QuarkiverseMetadata",
    "QuarkusIOMetadata",
    "load_guides_metadata",
    "parse_legacy_quarkiverse_metadata",
    "parse_quarkiverse_metadata",
    "scan_asciidoc",
    "to_set",
]
