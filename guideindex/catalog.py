"""Assembly of the guide stream of every version of the documentation site."""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import Callable, Iterator, Set, Tuple

from .config import GuideIndexConfig
from .git.checkout import Checkout
from .git.repository import ContentProvider, GitRepository
from .layout import (
    guide_directories,
    list_guide_documents,
    quarkiverse_directories,
    quarkiverse_legacy_directories,
)
from .logging import get_logger
from .metadata.errors import MetadataParseError
from .metadata.quarkiverse import (
    QuarkiverseMetadata,
    parse_legacy_quarkiverse_metadata,
    parse_quarkiverse_metadata,
)
from .metadata.resolver import MetadataResolver
from .models import QUARKUS_ORIGIN, Guide, VersionedLocation
from .paths import html_path, http_url

_LOGGER = get_logger("catalog")

QuarkiverseParser = Callable[[str, Path, str], QuarkiverseMetadata]


class GuideDirectoryError(RuntimeError):
    """Raised when a guide directory cannot be listed."""

    def __init__(self, location: VersionedLocation, cause: OSError) -> None:
        super().__init__(
            f"Cannot list guides of version {location.version} in {location.path}: {cause}"
        )
        self.location = location


class GuideCatalog:
    """Resolves the guides of a site working copy.

    The catalog owns the working copy and the repository handle passed to it;
    both are released by :meth:`close`. Guides are produced lazily and carry a
    :class:`ContentProvider` bound to the published-output tree resolved at
    construction time.
    """

    def __init__(
        self,
        config: GuideIndexConfig,
        checkout: Checkout,
        repository: GitRepository,
        *,
        resolver: MetadataResolver | None = None,
    ) -> None:
        self._exit_stack = ExitStack()
        self._exit_stack.callback(checkout.close)
        self._exit_stack.callback(repository.close)
        self.web_uri = config.web_uri
        self.root = checkout.path
        self._repository = repository
        self._resolver = resolver or MetadataResolver(self.root)
        self._exit_stack.callback(self._resolver.clear)
        try:
            self.pages_tree = repository.resolve_tree(
                f"origin/{config.pages_branch}", config.pages_branch
            )
        except BaseException:
            self._exit_stack.close()
            raise

    @classmethod
    def open(cls, config: GuideIndexConfig) -> "GuideCatalog":
        """Open the working copy described by ``config``, cloning it when needed."""
        if config.git_uri:
            checkout = Checkout.clone(config.git_uri, config.source_branch)
        else:
            checkout = Checkout.local(config.root)
        try:
            repository = GitRepository(checkout.path)
        except BaseException:
            checkout.close()
            raise
        return cls(config, checkout, repository)

    def __enter__(self) -> "GuideCatalog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._exit_stack.close()

    def guides(self) -> Iterator[Guide]:
        """Yield local guides, then extension guides, each ``(version, url)`` once."""
        seen: Set[Tuple[str, str]] = set()
        for stream in (self.local_guides(), self.quarkiverse_guides()):
            for guide in stream:
                key = (guide.version, guide.url)
                if key in seen:
                    _LOGGER.warning(
                        "Skipping duplicate guide %s for version %s", guide.url, guide.version
                    )
                    continue
                seen.add(key)
                yield guide

    def local_guides(self) -> Iterator[Guide]:
        for location in guide_directories(self.root):
            try:
                documents = list_guide_documents(location.path)
            except OSError as exc:
                raise GuideDirectoryError(location, exc) from exc
            _LOGGER.debug(
                "Found %d guides for version %s in %s",
                len(documents),
                location.version,
                location.path,
            )
            for path in documents:
                yield self._parse_guide(location, path)

    def quarkiverse_guides(
        self,
        *,
        parser: QuarkiverseParser = parse_quarkiverse_metadata,
        legacy_parser: QuarkiverseParser = parse_legacy_quarkiverse_metadata,
    ) -> Iterator[Guide]:
        current_versions: Set[str] = set()
        for location in quarkiverse_directories(self.root):
            current_versions.add(location.version)
            yield from self._extension_guides(parser, location)
        for location in quarkiverse_legacy_directories(self.root):
            if location.version in current_versions:
                _LOGGER.debug(
                    "Ignoring %s, version %s has current extension metadata",
                    location.path.name,
                    location.version,
                )
                continue
            yield from self._extension_guides(legacy_parser, location)

    def _extension_guides(
        self, parser: QuarkiverseParser, location: VersionedLocation
    ) -> Iterator[Guide]:
        try:
            metadata = parser(self.web_uri, location.path, location.version)
        except MetadataParseError as exc:
            _LOGGER.warning("Skipping extension guides of version %s: %s", location.version, exc)
            return
        yield from metadata.create_quarkiverse_guides()

    def _parse_guide(self, location: VersionedLocation, path: Path) -> Guide:
        name = path.stem
        guide = Guide(
            version=location.version,
            origin=QUARKUS_ORIGIN,
            url=http_url(self.web_uri, location.version, name),
            content=ContentProvider(
                self._repository, self.pages_tree, html_path(location.version, name)
            ),
        )
        self._resolver.resolver_for(location)(path, guide)
        return guide


def iter_guides(config: GuideIndexConfig) -> Iterator[Guide]:
    """Yield every guide described by ``config``.

    The working copy and repository handle are released when the generator is
    exhausted, closed, or garbage collected. Guide content must therefore be
    read before the next guide is requested past the end of the stream.
    """
    with GuideCatalog.open(config) as catalog:
        yield from catalog.guides()


__all__ = ["GuideCatalog", "GuideDirectoryError", "iter_guides"]
