"""
cda — command line tool for Coorong development application notices.

Usage:
  cda <command> [options]

Commands:
  parse         Reads development applications from a local PDF notice.
  scrape        Fetches notices from the council site and stores their applications.
  address       Normalises addresses against the reference tables.
  apply-schema  Applies db/schema.sql to the database (idempotent).
"""

from __future__ import annotations

import argparse
import logging
import sys

if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from rich.logging import RichHandler

from cda.commands import address as cmd_address
from cda.commands import apply_schema as cmd_apply_schema
from cda.commands import parse as cmd_parse
from cda.commands import scrape as cmd_scrape


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cda",
        description="Coorong development application notices — CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="cda 0.1.0"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug diagnostics (address fallbacks, layout detection).",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        metavar="<command>",
        dest="command",
    )
    subparsers.required = True

    cmd_parse.add_parser(subparsers)
    cmd_scrape.add_parser(subparsers)
    cmd_address.add_parser(subparsers)
    cmd_apply_schema.add_parser(subparsers)

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
