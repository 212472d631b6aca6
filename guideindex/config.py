"""Configuration loading for guideindex (.guideindex.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".guideindex.yml"

DEFAULT_WEB_URI = "https://quarkus.io/"
DEFAULT_SOURCE_BRANCH = "develop"
DEFAULT_PAGES_BRANCH = "master"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GuideIndexConfig:
    """Settings for one guide resolution run.

    ``root`` is the working copy of the site's source branch. When ``git_uri``
    is set, the repository is cloned into a temporary directory instead and
    ``root`` only anchors relative paths.
    """

    root: Path
    web_uri: str = DEFAULT_WEB_URI
    git_uri: Optional[str] = None
    source_branch: str = DEFAULT_SOURCE_BRANCH
    pages_branch: str = DEFAULT_PAGES_BRANCH


def load_config(config_path: Path) -> GuideIndexConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GuideIndexConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    web_uri = _as_str(data.get("web_uri")) or DEFAULT_WEB_URI
    git_uri = _as_str(data.get("git_uri"))
    if git_uri and _looks_like_relative_path(git_uri):
        git_uri = str((root / git_uri).resolve())

    return GuideIndexConfig(
        root=root,
        web_uri=normalize_web_uri(web_uri),
        git_uri=git_uri,
        source_branch=_as_str(data.get("source_branch")) or DEFAULT_SOURCE_BRANCH,
        pages_branch=_as_str(data.get("pages_branch")) or DEFAULT_PAGES_BRANCH,
    )


def normalize_web_uri(value: str) -> str:
    """Ensure the base URI ends with a slash so relative paths resolve below it."""
    value = value.strip()
    if not value:
        raise ConfigError("web_uri must not be empty")
    return value if value.endswith("/") else f"{value}/"


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _looks_like_relative_path(value: str) -> bool:
    if "://" in value or value.startswith("git@"):
        return False
    return not Path(value).is_absolute()


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        text = str(value).strip()
        return text or None
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GuideIndexConfig",
    "load_config",
    "normalize_web_uri",
]
