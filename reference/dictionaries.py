"""
reference/dictionaries.py — loading the reference text tables.

Files (one record per line, comma separated, upper-cased on load):
  streetnames.txt     STREET NAME,SUBURB          (a street may repeat per suburb)
  streetsuffixes.txt  ABBREVIATION,EXPANSION
  suburbnames.txt     SUBURB,SUBURB STATE POSTCODE
  hundrednames.txt    HUNDRED

The bundled tables are a small sample of Coorong streets and suburbs, enough
for the tests and a demonstration. Addresses outside them take the normaliser's
fallback path; for real runs point CDA_REFERENCE_DIR (or --reference-dir) at
a directory holding the full council tables in the same format.

Public API:
  load_reference_data(data_dir=None) -> ReferenceData
"""

from __future__ import annotations

import pathlib

from data_model.reference import ReferenceData

DATA_DIR = pathlib.Path(__file__).resolve().parent / "data"

STREET_NAMES_FILE    = "streetnames.txt"
STREET_SUFFIXES_FILE = "streetsuffixes.txt"
SUBURB_NAMES_FILE    = "suburbnames.txt"
HUNDRED_NAMES_FILE   = "hundrednames.txt"


class ReferenceDataError(ValueError):
    """A reference table line could not be read."""


def _read_lines(path: pathlib.Path) -> list[tuple[int, str]]:
    text = path.read_text(encoding="utf-8").replace("\r", "")
    return [
        (number, line.strip().upper())
        for number, line in enumerate(text.split("\n"), start=1)
        if line.strip()
    ]


def _read_pairs(path: pathlib.Path) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for number, line in _read_lines(path):
        key, sep, value = line.partition(",")
        if not sep or not key.strip() or not value.strip():
            raise ReferenceDataError(f"{path.name}:{number}: expected 'NAME,VALUE', got {line!r}")
        pairs.append((key.strip(), value.strip()))
    return pairs


def load_street_names(path: pathlib.Path) -> dict[str, list[str]]:
    streets: dict[str, list[str]] = {}
    for street, suburb in _read_pairs(path):
        suburbs = streets.setdefault(street, [])
        if suburb not in suburbs:
            suburbs.append(suburb)
    return streets


def load_street_suffixes(path: pathlib.Path) -> dict[str, str]:
    return dict(_read_pairs(path))


def load_suburb_names(path: pathlib.Path) -> dict[str, str]:
    return dict(_read_pairs(path))


def load_hundred_names(path: pathlib.Path) -> list[str]:
    return [line for _, line in _read_lines(path)]


def load_reference_data(data_dir: str | pathlib.Path | None = None) -> ReferenceData:
    """Reads all four tables from `data_dir` (default: the bundled data)."""
    root = pathlib.Path(data_dir) if data_dir else DATA_DIR
    return ReferenceData.build(
        street_names=load_street_names(root / STREET_NAMES_FILE),
        street_suffixes=load_street_suffixes(root / STREET_SUFFIXES_FILE),
        suburb_names=load_suburb_names(root / SUBURB_NAMES_FILE),
        hundred_names=load_hundred_names(root / HUNDRED_NAMES_FILE),
    )
