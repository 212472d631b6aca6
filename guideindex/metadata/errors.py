"""Errors raised while reading guide metadata."""

from __future__ import annotations

from pathlib import Path


class MetadataParseError(RuntimeError):
    """Raised when a metadata file exists but cannot be understood."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason


__all__ = ["MetadataParseError"]
