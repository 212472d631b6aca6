"""Header scanner for AsciiDoc guide sources.

Only the document header is read: the level-0 title (``= Title``) and the
``:name: value`` attribute entries that follow it. Scanning stops at the first
blank line after the title, which is where AsciiDoc ends the header.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, Mapping, Optional

_TITLE_RE = re.compile(r"^=\s+(?P<title>\S.*)$")
_ATTRIBUTE_RE = re.compile(r"^:(?P<name>[A-Za-z0-9_][A-Za-z0-9_-]*):(?:\s+(?P<value>.*))?$")
_COMMENT_BLOCK = "////"
_CONTINUATION = " \\"


def scan_asciidoc(
    path: Path,
    on_title: Callable[[str], None],
    attributes: Mapping[str, Callable[[str], None]],
) -> None:
    """Feed the title and the requested header attributes of ``path`` to callbacks.

    Callbacks of absent attributes are not invoked. Attribute names are matched
    case-insensitively. Bytes that are not valid UTF-8 are replaced with U+FFFD.
    """
    with path.open("r", encoding="utf-8", errors="replace") as handle:
        title, values = parse_header(handle)
    if title is not None:
        on_title(title)
    for name, callback in attributes.items():
        value = values.get(name.lower())
        if value is not None:
            callback(value)


def parse_header(lines: Iterable[str]) -> tuple[Optional[str], Dict[str, str]]:
    """Return the document title and header attributes found in ``lines``."""
    title: Optional[str] = None
    values: Dict[str, str] = {}
    in_comment = False
    pending_name: Optional[str] = None
    pending_value = ""

    for raw in lines:
        line = raw.rstrip("\r\n")

        if pending_name is not None:
            part = line.strip()
            if part.endswith("\\"):
                pending_value = f"{pending_value} {part[:-1].strip()}".strip()
                continue
            values[pending_name] = f"{pending_value} {part}".strip()
            pending_name = None
            continue

        stripped = line.strip()
        if stripped == _COMMENT_BLOCK:
            in_comment = not in_comment
            continue
        if in_comment or stripped.startswith("//"):
            continue

        if not stripped:
            if title is not None:
                break
            continue

        title_match = _TITLE_RE.match(line)
        if title_match and title is None:
            title = title_match.group("title").strip()
            continue

        attribute_match = _ATTRIBUTE_RE.match(line)
        if attribute_match:
            name = attribute_match.group("name").lower()
            value = (attribute_match.group("value") or "").rstrip()
            if value.endswith(_CONTINUATION) or value == "\\":
                pending_name = name
                pending_value = value[:-1].strip()
                continue
            values[name] = value.strip()

    if pending_name is not None:
        values[pending_name] = pending_value
    return title, values


__all__ = ["parse_header", "scan_asciidoc"]
