"""Command: cda address — normalising a single address against the reference tables."""

from __future__ import annotations

import argparse

from rich.console import Console

console = Console()


def run(args: argparse.Namespace) -> None:
    from address.normalizer import AddressNormalizer
    from cda._config import load_settings
    from reference.dictionaries import load_reference_data

    settings = load_settings()
    try:
        reference = load_reference_data(args.reference_dir or settings.reference_dir)
    except Exception as e:
        console.print(f"[red]Loading the reference tables failed:[/red] {e}")
        raise SystemExit(1)

    normalizer = AddressNormalizer(reference)
    for text in args.text:
        result = normalizer.normalize(text)
        if result:
            console.print(f"[dim]{text}[/dim] → [bold]{result}[/bold]")
        else:
            console.print(f"[dim]{text}[/dim] → [yellow](no address)[/yellow]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "address",
        help="Normalises addresses against the reference tables.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Prints the canonical form of each address given.

Example:
  cda address "4,665 Princes HWY MENINGIE 5264"
        """,
    )
    p.add_argument(
        "text",
        nargs="+",
        metavar="TEXT",
        help="Raw address text.",
    )
    p.add_argument(
        "--reference-dir",
        metavar="DIR",
        default=None,
        help="Directory with the reference tables (default: bundled data).",
    )
    p.set_defaults(func=run)
