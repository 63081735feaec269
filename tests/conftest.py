"""Shared fixtures: a small reference dictionary and fragment builders."""

from __future__ import annotations

import pytest

from data_model.layout import Fragment
from data_model.reference import ReferenceData


def frag(text: str, x: float, y: float, width: float, height: float = 10.0) -> Fragment:
    return Fragment(x, y, width, height, text=text)


@pytest.fixture
def reference() -> ReferenceData:
    return ReferenceData.build(
        street_names={
            "MAIN STREET":     ["MENINGIE"],
            "PRINCES HIGHWAY": ["MENINGIE", "TAILEM BEND"],
            "RAILWAY TERRACE": ["TAILEM BEND", "COONALPYN"],
            "NARRUNG ROAD":    ["NARRUNG"],
        },
        street_suffixes={
            "ST":  "STREET",
            "HWY": "HIGHWAY",
            "TCE": "TERRACE",
            "RD":  "ROAD",
        },
        suburb_names={
            "MENINGIE":    "MENINGIE SA 5264",
            "TAILEM BEND": "TAILEM BEND SA 5260",
            "COONALPYN":   "COONALPYN SA 5265",
            "NARRUNG":     "NARRUNG SA 5259",
        },
        hundred_names=["BONNEY", "MENINGIE"],
    )


# Register-layout column headings and one application row beneath them.
HEADINGS = [
    frag("Document", 10, 20, 60),
    frag("Lodged", 80, 20, 50),
    frag("Subject Land", 140, 20, 80),
    frag("Estimated", 300, 20, 50),
    frag("Proposal", 360, 20, 60),
]


def register_row(y: float, reference: str | None = "45/2019", address: str = "8 Main ST MENINGIE 5264"):
    row = [
        frag("7/02/2019", 80, y, 50),
        frag(address, 140, y, 150),
        frag("LOT: 5 DP 1234", 140, y + 12, 100),
        frag("$10,000", 300, y, 40),
        frag("Dwelling and", 360, y, 60),
        frag("garage", 360, y + 12, 40),
        frag("Approval:", 450, y, 50),
    ]
    if reference is not None:
        row.insert(0, frag(reference, 10, y, 50))
    return row
