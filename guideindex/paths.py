"""Path and URL conventions of the documentation site repository."""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import urljoin

LATEST = "latest"

GUIDES_DIR = "_guides"
VERSIONS_DIR = "_versions"
DATA_DIR = "_data"
VERSIONED_DATA_DIR = "versioned"

GUIDE_EXTENSION = "adoc"
QUARKUS_METADATA_FILE = "quarkus.yaml"
QUARKIVERSE_METADATA_FILE = "quarkiverse.yaml"
LEGACY_METADATA_PREFIX = "guides-"
LEGACY_METADATA_SUFFIX = ".yaml"

_VERSION_RE = re.compile(r"^[A-Za-z0-9]+(?:\.[A-Za-z0-9]+)*$")


def version_to_dashes(version: str) -> str:
    """Return the on-disk form of a version, e.g. ``2.7`` -> ``2-7``."""
    return version.replace(".", "-")


def version_from_dashes(value: str) -> str:
    """Inverse of :func:`version_to_dashes`."""
    return value.replace("-", ".")


def is_valid_version(version: str) -> bool:
    """Return True for dot-separated alphanumeric versions such as ``3.2`` or ``latest``."""
    return bool(_VERSION_RE.match(version))


def http_path(version: str, name: str) -> str:
    if version == LATEST:
        return f"guides/{name}"
    return f"version/{version}/guides/{name}"


def http_url(web_uri: str, version: str, name: str) -> str:
    """Absolute URL of a guide page on the web site."""
    return urljoin(web_uri, http_path(version, name))


def html_path(version: str, name: str) -> str:
    """Path of the rendered guide inside the published-output branch."""
    return f"{http_path(version, name)}.html"


def asciidoc_path(version: str, name: str) -> str:
    """Path of the guide source inside the source branch."""
    if version == LATEST:
        return f"{GUIDES_DIR}/{name}.{GUIDE_EXTENSION}"
    return f"{VERSIONS_DIR}/{version}/guides/{name}.{GUIDE_EXTENSION}"


def versioned_index_dir(version: str) -> Path:
    return Path(DATA_DIR, VERSIONED_DATA_DIR, version_to_dashes(version), "index")


def yaml_metadata_path(version: str) -> Path:
    """Relative path of the structured guide metadata of ``version``."""
    return versioned_index_dir(version) / QUARKUS_METADATA_FILE


def yaml_quarkiverse_metadata_path(version: str) -> Path:
    """Relative path of the current-format extension metadata of ``version``."""
    return versioned_index_dir(version) / QUARKIVERSE_METADATA_FILE


def legacy_quarkiverse_metadata_path(version: str) -> Path:
    """Relative path of the legacy extension metadata of ``version``."""
    filename = f"{LEGACY_METADATA_PREFIX}{version_to_dashes(version)}{LEGACY_METADATA_SUFFIX}"
    return Path(DATA_DIR, filename)


__all__ = [
    "LATEST",
    "asciidoc_path",
    "html_path",
    "http_path",
    "http_url",
    "is_valid_version",
    "legacy_quarkiverse_metadata_path",
    "version_from_dashes",
    "version_to_dashes",
    "yaml_metadata_path",
    "yaml_quarkiverse_metadata_path",
]
