"""Enumeration of the guide and extension-metadata locations of every version.

Three layout generations coexist in the site repository:

* ``_guides`` and ``_versions/<version>/guides`` hold the AsciiDoc sources,
* ``_data/versioned/<version>/index/quarkiverse.yaml`` holds the current
  extension metadata,
* ``_data/guides-<version>.yaml`` holds the legacy extension metadata.

Every function returns a generator; directory listings happen only when the
caller starts iterating.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List

from .logging import get_logger
from .models import VersionedLocation
from .paths import (
    DATA_DIR,
    GUIDE_EXTENSION,
    GUIDES_DIR,
    LATEST,
    LEGACY_METADATA_PREFIX,
    LEGACY_METADATA_SUFFIX,
    QUARKIVERSE_METADATA_FILE,
    VERSIONED_DATA_DIR,
    VERSIONS_DIR,
    is_valid_version,
    version_from_dashes,
)

_LOGGER = get_logger("layout")


def is_guide_document(filename: str) -> bool:
    """Return True for AsciiDoc guide sources, excluding partials and READMEs."""
    if filename.startswith("_"):
        return False
    base, dot, extension = filename.rpartition(".")
    if not dot:
        return False
    return base != "README" and extension == GUIDE_EXTENSION


def guide_directories(root: Path) -> Iterator[VersionedLocation]:
    """Yield the latest guide directory, then one directory per archived version."""
    yield VersionedLocation(LATEST, root / GUIDES_DIR)
    for name in _list_subdirectories(root / VERSIONS_DIR):
        yield VersionedLocation(name, root / VERSIONS_DIR / name / "guides")


def quarkiverse_directories(root: Path) -> Iterator[VersionedLocation]:
    """Yield the current-format extension metadata file of each version that has one."""
    versioned = root / DATA_DIR / VERSIONED_DATA_DIR
    for name in _list_subdirectories(versioned):
        metadata = versioned / name / "index" / QUARKIVERSE_METADATA_FILE
        if metadata.is_file():
            yield VersionedLocation(version_from_dashes(name), metadata)
        else:
            _LOGGER.debug("No %s for version directory %s", QUARKIVERSE_METADATA_FILE, name)


def quarkiverse_legacy_directories(root: Path) -> Iterator[VersionedLocation]:
    """Yield the legacy ``guides-<version>.yaml`` extension metadata files."""
    data_dir = root / DATA_DIR
    for name in _list_files(data_dir):
        if not (
            name.startswith(LEGACY_METADATA_PREFIX) and name.endswith(LEGACY_METADATA_SUFFIX)
        ):
            continue
        dashed = name[len(LEGACY_METADATA_PREFIX) : -len(LEGACY_METADATA_SUFFIX)]
        version = version_from_dashes(dashed)
        if not is_valid_version(version):
            _LOGGER.warning("Skipping %s: cannot derive a version from its name", name)
            continue
        yield VersionedLocation(version, data_dir / name)


def list_guide_documents(directory: Path) -> List[Path]:
    """Return the guide sources directly inside ``directory``, sorted by name.

    Raises ``FileNotFoundError``/``OSError`` when the directory cannot be listed.
    """
    with os.scandir(directory) as entries:
        names = [
            entry.name
            for entry in entries
            if entry.is_file() and is_guide_document(entry.name)
        ]
    return [directory / name for name in sorted(names)]


def _list_subdirectories(path: Path) -> List[str]:
    try:
        with os.scandir(path) as entries:
            names = [entry.name for entry in entries if entry.is_dir()]
    except FileNotFoundError:
        _LOGGER.debug("%s does not exist", path)
        return []
    return sorted(names)


def _list_files(path: Path) -> List[str]:
    try:
        with os.scandir(path) as entries:
            names = [entry.name for entry in entries if entry.is_file()]
    except FileNotFoundError:
        _LOGGER.debug("%s does not exist", path)
        return []
    return sorted(names)


__all__ = [
    "guide_directories",
    "is_guide_document",
    "list_guide_documents",
    "quarkiverse_directories",
    "quarkiverse_legacy_directories",
]
