"""Tests for the per-location metadata resolver."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pytest

from guideindex.metadata.resolver import MetadataResolver
from guideindex.metadata.structured import QuarkusIOMetadata, load_guides_metadata
from guideindex.models import Guide, VersionedLocation
from tests._fixtures.site_builder import SiteBuilder


def _guide(version: str = "latest") -> Guide:
    return Guide(version=version, origin="quarkus", url="https://quarkus.io/guides/x")


class CountingLoader:
    def __init__(self) -> None:
        self.paths: List[Path] = []

    def __call__(self, path: Path) -> QuarkusIOMetadata:
        self.paths.append(path)
        return load_guides_metadata(path)


def test_structured_metadata_is_preferred(site_builder: SiteBuilder) -> None:
    site_builder.write(
        {
            "_data/versioned/latest/index/quarkus.yaml": """
            types:
              guide:
                - title: Foo from YAML
                  filename: foo.adoc
                  categories: "core, web"
            """,
            "_guides/foo.adoc": "= Foo from AsciiDoc\n:summary: ignored\n",
        }
    )
    root = site_builder.path()
    resolver = MetadataResolver(root)
    guide = _guide()

    resolver.resolver_for(VersionedLocation("latest", root / "_guides"))(
        root / "_guides" / "foo.adoc", guide
    )

    assert guide.title == "Foo from YAML"
    assert guide.summary is None
    assert guide.categories == {"core", "web"}


def test_missing_metadata_falls_back_to_asciidoc(site_builder: SiteBuilder) -> None:
    site_builder.write(
        {
            "_versions/2.7/guides/bar.adoc": """
            = Bar Guide
            :summary: Bar summary.
            :keywords: bar baz
            :categories: data, , core
            :topics:
            :extensions: io.quarkus:quarkus-bar

            Body.
            """,
        }
    )
    root = site_builder.path()
    resolver = MetadataResolver(root)
    guide = _guide("2.7")

    resolver.resolver_for(VersionedLocation("2.7", root / "_versions/2.7/guides"))(
        root / "_versions/2.7/guides/bar.adoc", guide
    )

    assert guide.title == "Bar Guide"
    assert guide.summary == "Bar summary."
    assert guide.keywords == "bar baz"
    assert guide.categories == {"data", "core"}
    assert guide.topics == set()
    assert guide.extensions == {"io.quarkus:quarkus-bar"}


def test_malformed_metadata_is_parsed_once_per_location(
    site_builder: SiteBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    site_builder.write(
        {
            "_data/versioned/3-0/index/quarkus.yaml": "types: [\n",
            "_versions/3.0/guides/a.adoc": "= A\n:summary: First.\n",
            "_versions/3.0/guides/b.adoc": "= B\n:summary: Second.\n",
            "_versions/3.0/guides/c.adoc": "= C\n",
        }
    )
    root = site_builder.path()
    loader = CountingLoader()
    resolver = MetadataResolver(root, loader=loader)
    location = VersionedLocation("3.0", root / "_versions/3.0/guides")

    guides = []
    with caplog.at_level(logging.WARNING, logger="guideindex"):
        for name in ("a", "b", "c"):
            guide = _guide("3.0")
            resolver.resolver_for(location)(location.path / f"{name}.adoc", guide)
            guides.append(guide)

    assert loader.paths == [root / "_data/versioned/3-0/index/quarkus.yaml"]
    assert [guide.title for guide in guides] == ["A", "B", "C"]
    assert [guide.summary for guide in guides] == ["First.", "Second.", None]
    assert sum("Ignoring guide metadata" in record.getMessage() for record in caplog.records) == 1


def test_equal_locations_share_the_cached_filler(tmp_path: Path) -> None:
    loader = CountingLoader()
    resolver = MetadataResolver(tmp_path, loader=loader)

    first = resolver.resolver_for(VersionedLocation("2.7", tmp_path / "guides"))
    second = resolver.resolver_for(VersionedLocation("2.7", tmp_path / "guides"))
    other = resolver.resolver_for(VersionedLocation("2.13", tmp_path / "guides"))

    assert first == second
    assert other is not None
    assert len(loader.paths) == 2


def test_clear_forgets_decisions(tmp_path: Path) -> None:
    loader = CountingLoader()
    resolver = MetadataResolver(tmp_path, loader=loader)
    location = VersionedLocation("2.7", tmp_path / "guides")

    resolver.resolver_for(location)
    resolver.clear()
    resolver.resolver_for(location)

    assert len(loader.paths) == 2


def test_unexpected_io_errors_propagate(tmp_path: Path) -> None:
    def failing_loader(path: Path) -> QuarkusIOMetadata:
        raise PermissionError(f"denied: {path}")

    resolver = MetadataResolver(tmp_path, loader=failing_loader)

    with pytest.raises(PermissionError):
        resolver.resolver_for(VersionedLocation("latest", tmp_path / "_guides"))


def test_scanning_tolerates_non_utf8_sources(site_builder: SiteBuilder) -> None:
    site_builder.write({"_guides/a.adoc": "= A\n:summary: Plain.\n"})
    root = site_builder.path()
    (root / "_guides" / "b.adoc").write_bytes(b"= Caf\xe9 guide\n:summary: D\xe9j\xe0 vu.\n\nBody\n")
    resolver = MetadataResolver(root)
    location = VersionedLocation("latest", root / "_guides")

    guides = []
    for name in ("a", "b"):
        guide = _guide()
        resolver.resolver_for(location)(location.path / f"{name}.adoc", guide)
        guides.append(guide)

    assert guides[0].title == "A"
    assert guides[1].title == "Caf\ufffd guide"
    assert guides[1].summary == "D\ufffdj\ufffd vu."
