"""
address/normalizer.py — rebuilding a canonical address from noisy text.

  "4,665 Princes HWY MENINGIE 5264" → "4665 PRINCES HIGHWAY, MENINGIE SA 5264"

Tokens are popped from the right, most reliable first:
  postcode → state → suburb (fuzzy) → street suffix → street name (fuzzy)
Postcode and state are removed before the fuzzy suburb/street lookups run.

When the suburb cannot be resolved the (lightly cleaned) input is returned as
a fallback; an address is only rejected outright when it is empty or is really
a legal description.
"""

from __future__ import annotations

import logging
import re

from data_model.reference import ReferenceData
from reference.fuzzy import MatchClosest, match_closest

log = logging.getLogger(__name__)

# Text starting with one of these carries no street address.
NO_ADDRESS_MARKERS: tuple[str, ...] = ("LOT:",)

STATES = frozenset({"ACT", "NSW", "NT", "QLD", "SA", "TAS", "VIC", "WA"})

SUBURB_WINDOW = 4
STREET_WINDOW = 5
NAME_DISTANCE = 1

# "7/02/2019 " fused to the front of the address by the decoder.
_LEADING_DATE_RE = re.compile(r"^\d\d?/\d\d/\d\d\d\d\s+")

# "4,665 ..." / "12,345 ..." — a house number written with a thousands comma.
_THOUSANDS_RE = re.compile(r"^(\d{1,2}),(\d{3})\b")

_POSTCODE_RE = re.compile(r"^\d{4}$")
_TRAILING_POSTCODE_RE = re.compile(r"\d{4}$")


def strip_leading_date(text: str) -> str:
    return _LEADING_DATE_RE.sub("", text.strip())


class AddressNormalizer:
    """
    Normalises addresses against the reference dictionaries.

    The matcher is injectable so tests can substitute a deterministic stub.
    """

    def __init__(
        self,
        reference: ReferenceData,
        matcher: MatchClosest = match_closest,
    ) -> None:
        self._reference = reference
        self._matcher = matcher
        self._suburbs = list(reference.suburb_names)
        self._streets = list(reference.street_names)

    def normalize(self, raw: str) -> str:
        address = " ".join(strip_leading_date(raw).split())
        if not address or address.upper().startswith(NO_ADDRESS_MARKERS):
            return ""

        address = _THOUSANDS_RE.sub(r"\1\2", address)
        tokens = [t.rstrip(",") for t in address.split(" ")]
        tokens = [t for t in tokens if t]

        postcode = tokens.pop() if tokens and _POSTCODE_RE.match(tokens[-1]) else None
        state = tokens.pop().upper() if tokens and tokens[-1].upper() in STATES else None

        if postcode is not None:
            fallback = " ".join(tokens + [p for p in (state, postcode) if p])
        else:
            fallback = address

        suburb = self._pop_suburb(tokens)
        street = self._pop_street(tokens, suburb)
        if street is not None:
            street_name, street_suburb = street
            tokens.append(street_name)
            suburb = suburb or street_suburb

        if suburb is None:
            log.debug("Suburb not recognised, keeping the address as found: %s", address)
            return fallback

        if postcode is not None:
            if _TRAILING_POSTCODE_RE.search(suburb):
                suburb = _TRAILING_POSTCODE_RE.sub(postcode, suburb)
            else:
                suburb = f"{suburb} {postcode}"

        street_part = " ".join(tokens)
        return f"{street_part}, {suburb}" if street_part else suburb

    # -----------------------------------------------------------------------

    def _pop_suburb(self, tokens: list[str]) -> str | None:
        """Removes the trailing suburb name; returns "SUBURB STATE POSTCODE"."""
        for size in range(1, min(SUBURB_WINDOW, len(tokens)) + 1):
            found = self._matcher(" ".join(tokens[-size:]), self._suburbs, NAME_DISTANCE)
            if found is not None:
                del tokens[-size:]
                return self._reference.suburb_names[found]
        return None

    def _pop_street(self, tokens: list[str], suburb: str | None) -> tuple[str, str | None] | None:
        """
        Removes the trailing street name (including its suffix).

        Returns the canonical street name and, when the street lies in exactly
        one suburb, that suburb's canonical string. When no street matches, the
        suffix goes back onto the tokens in its expanded form.
        """
        if not tokens:
            return None

        token = tokens.pop()
        suffix = self._reference.expand_suffix(token)
        if suffix is None:
            tokens.append(token)

        for size in range(1, min(STREET_WINDOW, len(tokens)) + 1):
            words = tokens[-size:] + ([suffix] if suffix else [])
            found = self._matcher(" ".join(words), self._streets, NAME_DISTANCE)
            if found is not None:
                del tokens[-size:]
                street_suburb = None
                suburbs = self._reference.street_names[found]
                if suburb is None and len(suburbs) == 1:
                    street_suburb = self._reference.suburb_names.get(suburbs[0])
                return found, street_suburb

        if suffix is not None:
            tokens.append(suffix)
        return None
