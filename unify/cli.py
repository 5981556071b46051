"""Command-line interface for Unify."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unify",
        description="Normalize paths, URLs and IDs into stable Unified IDs",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"unify {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings path (default: ~/.config/unify/settings.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Print the UID of each identifier",
    )
    normalize_parser.add_argument(
        "identifiers",
        nargs="+",
        help="Paths, URLs, URIs or IDs to normalize",
    )
    normalize_parser.add_argument(
        "--tags",
        action="store_true",
        help="Also print the inline #tags found in each identifier",
    )
    normalize_parser.add_argument(
        "--no-diacritics",
        action="store_true",
        help="Leave accented letters untouched",
    )
    normalize_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )

    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Resolve keys to files under a directory tree",
    )
    lookup_parser.add_argument(
        "root",
        type=Path,
        help="Directory tree to index",
    )
    lookup_parser.add_argument(
        "keys",
        nargs="+",
        help="UIDs, paths or IDs to resolve",
    )
    _add_scan_options(lookup_parser)

    index_parser = subparsers.add_parser(
        "index",
        help="List the UIDs of every file under a directory tree",
    )
    index_parser.add_argument(
        "root",
        type=Path,
        help="Directory tree to index",
    )
    _add_scan_options(index_parser)

    return parser


def _add_scan_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--ext",
        action="append",
        help="Only index files with this extension (repeatable)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        help="fnmatch pattern of files to skip (repeatable)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None, output_sink=print) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(args.verbose)

    try:
        from .settings import default_config_path, load_settings

        settings = load_settings(args.config or default_config_path())

        if args.command == "normalize":
            from .commands.normalize import run_normalize
            return run_normalize(args, settings=settings, output_sink=output_sink)
        elif args.command == "lookup":
            from .commands.lookup import run_lookup
            return run_lookup(args, settings=settings, output_sink=output_sink)
        elif args.command == "index":
            from .commands.lookup import run_index
            return run_index(args, settings=settings, output_sink=output_sink)
        else:
            parser.print_help()
            return 1
    except Exception as exc:
        from .errors import exit_code_for_exception

        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        print(str(exc), file=sys.stderr)
        return exit_code_for_exception(exc)


if __name__ == "__main__":
    sys.exit(main())
