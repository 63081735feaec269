"""Command: cda parse — reading development applications from a local PDF notice."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich import box

from data_model.applications import DevelopmentApplication

console = Console()


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------

def _write_json(applications: list[DevelopmentApplication], json_path: Path) -> None:
    data = [a.to_row() for a in applications]
    json_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    console.print(f"[green]JSON:[/green] {json_path}  ({len(applications)} applications)")


# ---------------------------------------------------------------------------
# Database output
# ---------------------------------------------------------------------------

_INSERT_SQL = """
    INSERT INTO application
        (council_reference, address, description, info_url, comment_url,
         date_scraped, date_received, legal_description)
    VALUES %s
    ON CONFLICT (council_reference) DO NOTHING
    RETURNING council_reference
"""

_COLUMNS = (
    "council_reference", "address", "description", "info_url", "comment_url",
    "date_scraped", "date_received", "legal_description",
)


def _write_db(applications: list[DevelopmentApplication]) -> None:
    from cda._db import get_connection
    import psycopg2.extras

    if not applications:
        console.print("[yellow]No applications to store.[/yellow]")
        return

    rows = [tuple(a.to_row()[c] for c in _COLUMNS) for a in applications]

    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        raise SystemExit(1)

    try:
        with conn, conn.cursor() as cur:
            inserted = psycopg2.extras.execute_values(cur, _INSERT_SQL, rows, fetch=True)
    finally:
        conn.close()

    new = {r[0] for r in inserted}
    for application in applications:
        if application.council_reference in new:
            console.print(
                f"    Inserted: application [cyan]{application.council_reference}[/cyan] "
                f"with address \"{application.address}\"."
            )
        else:
            console.print(
                f"    [dim]Skipped: application {application.council_reference} "
                f"was already present in the database.[/dim]"
            )
    console.print(
        f"[green]DB:[/green] {len(new)} inserted, "
        f"{len(applications) - len(new)} already present"
    )


# ---------------------------------------------------------------------------
# Terminal output
# ---------------------------------------------------------------------------

def _show_table(applications: list[DevelopmentApplication]) -> None:
    if not applications:
        console.print("[yellow]No applications.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("REFERENCE", no_wrap=True, style="bold cyan")
    table.add_column("RECEIVED",  justify="center", no_wrap=True)
    table.add_column("ADDRESS",   no_wrap=False, max_width=45)
    table.add_column("LEGAL",     no_wrap=False, max_width=30, style="dim")
    table.add_column("DESCRIPTION", no_wrap=False, max_width=50)

    for application in applications:
        row = application.to_row()
        table.add_row(
            row["council_reference"],
            row["date_received"] or "-",
            row["address"],
            row["legal_description"] or "-",
            row["description"][:120],
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(applications)} applications[/dim]\n")


def _store(applications: list[DevelopmentApplication], out: str, json_path: Path, show: bool) -> None:
    if out in ("json", "both"):
        _write_json(applications, json_path)

    if out in ("db", "both"):
        _write_db(applications)

    if show:
        _show_table(applications)


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    from cda._config import load_settings
    from extractor.assembler import parse_document
    from pdf.parser import PageCursor
    from reference.dictionaries import load_reference_data

    pdf_path = Path(args.pdf_file)
    if not pdf_path.exists():
        console.print(f"[red]File does not exist:[/red] {pdf_path}")
        raise SystemExit(1)
    if pdf_path.suffix.lower() != ".pdf":
        console.print(f"[red]Expected a .pdf file, got:[/red] {pdf_path.suffix}")
        raise SystemExit(1)

    settings = load_settings()
    info_url: str = args.url or pdf_path.resolve().as_uri()

    console.print(f"Parsing [bold]{pdf_path}[/bold] (info_url=[cyan]{info_url}[/cyan]) …")

    try:
        reference = load_reference_data(args.reference_dir or settings.reference_dir)
        applications = parse_document(
            PageCursor(pdf_path.read_bytes()),
            info_url,
            reference,
            comment_url=settings.comment_url,
        )
    except Exception as e:
        console.print(f"[red]Parsing failed:[/red] {e}")
        raise SystemExit(1)

    console.print(f"Found [bold]{len(applications)}[/bold] applications.")

    json_path = pdf_path.with_suffix(".applications.json")
    _store(applications, args.out, json_path, args.show)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "parse",
        help="Reads development applications from a local PDF notice.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Reads the development applications listed in a PDF notice and stores them.

Examples:
  cda parse notice.pdf --show
  cda parse notice.pdf --out json
  cda parse notice.pdf --out db --url https://www.coorong.sa.gov.au/notice.pdf
        """,
    )
    p.add_argument(
        "pdf_file",
        metavar="FILE.pdf",
        help="Path to the PDF notice.",
    )
    p.add_argument(
        "--url",
        metavar="URL",
        default=None,
        help="Source URL recorded as info_url (default: the file's URI).",
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
        default="json",
        help="Where to store the applications: json, db or both (default: json).",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Print a table of the applications afterwards.",
    )
    p.set_defaults(func=run)
