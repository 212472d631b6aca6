"""Normalisation of loosely typed metadata values."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml

from .errors import MetadataParseError


def to_set(value: Any) -> Set[str]:
    """Turn a comma-separated string (or a list of them) into a set of trimmed values.

    ``"a, b,,  c "`` gives ``{"a", "b", "c"}``; ``None`` and blank strings give an
    empty set.
    """
    if value is None:
        return set()
    if isinstance(value, (list, tuple, set)):
        result: Set[str] = set()
        for item in value:
            result.update(to_set(item))
        return result
    text = str(value)
    if not text.strip():
        return set()
    return {part.strip() for part in text.split(",") if part.strip()}


def as_text(value: Any) -> Optional[str]:
    """Return a stripped string for scalar values, None for blanks and containers."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return None
    text = str(value).strip()
    return text or None


def read_yaml_mapping(path: Path) -> Dict[str, Any]:
    """Load a YAML file whose root must be a mapping.

    ``FileNotFoundError`` and other ``OSError`` propagate untouched; content
    problems become :class:`MetadataParseError`.
    """
    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MetadataParseError(path, f"not valid UTF-8 ({exc})") from exc
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MetadataParseError(path, str(exc)) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise MetadataParseError(path, "expected a mapping at the root")
    return loaded


__all__ = ["as_text", "read_yaml_mapping", "to_set"]
