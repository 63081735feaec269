"""Command: cda scrape — fetching notices from the council site and reading their applications."""

from __future__ import annotations

import argparse
import random
from datetime import date
from pathlib import Path

from rich.console import Console

from cda.commands.parse import _store

console = Console()


def run(args: argparse.Namespace) -> None:
    from cda._config import load_settings
    from extractor.assembler import parse_document
    from html_parser.parser import (
        download_document,
        fetch_pdf_links,
        random_year,
        select_documents,
    )
    from pdf.parser import PageCursor
    from reference.dictionaries import load_reference_data

    settings = load_settings()
    delay = settings.request_delay if args.delay is None else args.delay
    year: int = args.year or date.today().year
    rng = random.Random(args.seed)

    try:
        reference = load_reference_data(args.reference_dir or settings.reference_dir)
        current = fetch_pdf_links(year, settings.index_url, delay)
        if args.all:
            selected = current
        else:
            other_year = random_year(rng)
            other = current if other_year == year else fetch_pdf_links(other_year, settings.index_url, delay)
            selected = select_documents(current, other, rng)
    except Exception as e:
        console.print(f"[red]Retrieving the notice list failed:[/red] {e}")
        raise SystemExit(1)

    if not selected:
        console.print("[yellow]No PDF notices were found on the pages examined.[/yellow]")
        return

    console.print(f"Selected [bold]{len(selected)}[/bold] notice(s) to parse.")

    applications = []
    for url in selected:
        console.print(f"Parsing document: [bold]{url}[/bold]")
        try:
            data = download_document(url, delay)
            found = parse_document(PageCursor(data), url, reference, comment_url=settings.comment_url)
        except Exception as e:
            console.print(f"[red]Reading {url} failed:[/red] {e}")
            raise SystemExit(1)
        console.print(f"Parsed [bold]{len(found)}[/bold] application(s) from {url}")
        applications.extend(found)

    _store(applications, args.out, Path(args.json_file), args.show)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "scrape",
        help="Fetches notices from the council site and stores their applications.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Reads the council's notice list for the current year, picks the most recent
notice plus one random notice from a random year (or every notice of the year
with --all), and stores the applications they list.

Environment:
  CDA_INDEX_URL      index page template with a {year} placeholder
  CDA_COMMENT_URL    contact stored with every application
  CDA_REQUEST_DELAY  seconds to wait between requests (default: 2)
  MORPH_PROXY        HTTP(S) proxy

Examples:
  cda scrape --show
  cda scrape --year 2019 --all --out db
        """,
    )
    p.add_argument(
        "--year",
        type=int,
        default=None,
        help="Year whose notices are listed (default: the current year).",
    )
    p.add_argument(
        "--all",
        action="store_true",
        help="Parse every notice of the year instead of a two-notice sample.",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the notice sample.",
    )
    p.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait between requests (overrides CDA_REQUEST_DELAY).",
    )
    p.add_argument(
        "--reference-dir",
        metavar="DIR",
        default=None,
        help="Directory with the reference tables (default: bundled data).",
    )
    p.add_argument(
        "--out",
        choices=["json", "db", "both"],
        default="db",
        help="Where to store the applications: json, db or both (default: db).",
    )
    p.add_argument(
        "--json-file",
        metavar="PATH",
        default="applications.json",
        help="JSON output path (default: applications.json).",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Print a table of the applications afterwards.",
    )
    p.set_defaults(func=run)
