"""
data_model/applications.py — the output record and skip reasons.

DevelopmentApplication is keyed by `council_reference`; its `to_row()` shape is
what the storage layer and the JSON writer consume.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class SkipReason(StrEnum):
    """Why a section did not become an application (used in diagnostics)."""

    MISSING_REFERENCE = "E_MISSING_REFERENCE"
    MISSING_ADDRESS   = "E_MISSING_ADDRESS"
    DUPLICATE         = "E_DUPLICATE"


@dataclass(slots=True)
class DevelopmentApplication:
    council_reference: str       # e.g. "123/2019"; natural key
    address: str                 # "1 MAIN STREET, MENINGIE SA 5264"
    description: str
    info_url: str                # document the application was read from
    comment_url: str
    date_scraped: date
    date_received: date | None   # None when absent or unparseable
    legal_description: str = ""

    def to_row(self) -> dict[str, str]:
        return {
            "council_reference": self.council_reference,
            "address":           self.address,
            "description":       self.description,
            "info_url":          self.info_url,
            "comment_url":       self.comment_url,
            "date_scraped":      self.date_scraped.isoformat(),
            "date_received":     self.date_received.isoformat() if self.date_received else "",
            "legal_description": self.legal_description,
        }
