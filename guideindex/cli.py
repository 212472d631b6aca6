"""CLI entrypoints for guideindex commands."""

from __future__ import annotations

import argparse
import itertools
import json
import sys
from pathlib import Path
from typing import TextIO

from .catalog import GuideDirectoryError, iter_guides
from .config import ConfigError, load_config, normalize_web_uri
from .git.repository import GitError
from .logging import configure_logging, get_logger

_LOGGER = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guideindex",
        description="Resolve the documentation guides of every site version.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="Print one JSON object per guide.",
    )
    list_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the site working copy (defaults to current directory).",
    )
    list_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .guideindex.yml (defaults to the one in PATH).",
    )
    list_parser.add_argument(
        "--web-uri",
        default=None,
        help="Base URI of the published site, overriding the configuration.",
    )
    list_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Stop after this many guides.",
    )
    return parser


def main(argv: list[str] | None = None, *, out: TextIO | None = None) -> None:
    """CLI entrypoint for guideindex commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    output = out or sys.stdout

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    if args.command == "list":
        try:
            count = _run_list(args, output)
        except (ConfigError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except (GitError, GuideDirectoryError) as exc:
            parser.exit(1, f"guideindex list failed: {exc}\nRun with --verbose for more details.\n")
        except Exception as exc:
            parser.exit(1, f"guideindex list failed: {exc}\nRun with --verbose for more details.\n")
        _LOGGER.info("Listed %d guides", count)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_list(args: argparse.Namespace, output: TextIO) -> int:
    root = Path(args.path)
    config = load_config(args.config if args.config is not None else root)
    config.root = root.expanduser().resolve()
    if args.web_uri:
        config.web_uri = normalize_web_uri(args.web_uri)

    stream = iter_guides(config)
    guides = stream
    if args.limit is not None:
        guides = itertools.islice(stream, max(args.limit, 0))

    count = 0
    try:
        for guide in guides:
            output.write(json.dumps(guide.to_dict(), sort_keys=True))
            output.write("\n")
            count += 1
    finally:
        stream.close()
    return count


if __name__ == "__main__":
    main(sys.argv[1:])
