"""Command: cda apply-schema — applies db/schema.sql to the database."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console

from cda._db import get_connection

console = Console()

ROOT        = pathlib.Path(__file__).resolve().parent.parent.parent
SCHEMA_PATH = ROOT / "db" / "schema.sql"


def _split_statements(sql: str) -> list[str]:
    """Statements of the schema, comment lines dropped."""
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    return [stmt.strip() for stmt in body.split(";") if stmt.strip()]


def run(args: argparse.Namespace) -> None:
    if not SCHEMA_PATH.exists():
        console.print(f"[red]Schema file missing:[/red] {SCHEMA_PATH}")
        raise SystemExit(1)

    stmts = _split_statements(SCHEMA_PATH.read_text(encoding="utf-8"))

    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        raise SystemExit(1)

    # schema.sql is idempotent (IF NOT EXISTS)
    conn.autocommit = True
    try:
        with conn.cursor() as cur:
            for stmt in stmts:
                cur.execute(stmt)
    except Exception as e:
        console.print(f"[red]Applying the schema failed:[/red] {e}")
        raise SystemExit(1)
    finally:
        conn.close()

    console.print(f"[green]Schema applied:[/green] {SCHEMA_PATH} ({len(stmts)} statements)")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "apply-schema",
        help="Applies db/schema.sql to the database (idempotent).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Runs db/schema.sql against the configured PostgreSQL database.

Example:
  cda apply-schema
        """,
    )
    p.set_defaults(func=run)
