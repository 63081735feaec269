"""
layout/fields.py — carving a section into named field regions.

Two page layouts are understood:

  REGISTER  several applications per page under the column headings
            Document | Lodged | Subject Land | Estimated | Proposal | Approval:
            Each application starts at its "Approval:" label; "Conditions:"
            (when present) ends the proposal text.
  FORM      one block per application, opened by "Dev App No" and followed by
            labelled fields: Application Received Date:, Applicant,
            Property Details:, Referrals, Total Development Costs:.

For every field a region (Rectangle) is derived from heading positions, and the
fragments with enough of their area inside it are joined in (y, x) order.

Public API:
  detect_layout(fragments, matcher)                 -> (Layout, anchors) | None
  find_column_headings(fragments, matcher)          -> ColumnHeadings
  extract_register_fields(section, headings, ...)   -> SectionFields | None
  extract_form_fields(section, ...)                 -> SectionFields | None
  parse_received_date(text)                         -> date | None
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from address.normalizer import strip_leading_date
from data_model.applications import SkipReason
from data_model.layout import Fragment, Rectangle, Section
from layout.geometry import SENTINEL_EXTENT, is_inside, region
from layout.rows import find_section_anchors, group_rows, sort_fragments
from reference.fuzzy import MatchClosest, match_closest

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Labels and constants
# ---------------------------------------------------------------------------

APPROVAL_LABEL      = "Approval:"
CONDITIONS_LABEL    = "Conditions:"
DOCUMENT_LABEL      = "Document"
LODGED_LABEL        = "Lodged"
SUBJECT_LAND_LABEL  = "Subject Land"
ESTIMATED_LABEL     = "Estimated"
PROPOSAL_LABEL      = "Proposal"

DEV_APP_NO_LABEL        = "Dev App No"
APPLICANT_LABEL         = "Applicant"
RECEIVED_DATE_LABEL     = "Application Received Date:"
PROPERTY_DETAILS_LABEL  = "Property Details:"
REFERRALS_LABEL         = "Referrals"
TOTAL_COSTS_LABEL       = "Total Development Costs:"

NO_DESCRIPTION = "No Description Provided"

# Legal descriptions start with this marker; an address row starting with it is
# really a legal description.
LOT_MARKER = "LOT:"

_WHITESPACE_RE = re.compile(r"\s+")
_REFERENCE_GLYPHS_RE = re.compile(r"[Il,]")
_ELLIPSIS_RE = re.compile(r"\.{3,}")
_RECEIVED_DATE_RE = re.compile(r"^(\d{1,2})/(\d{2})/(\d{4})$")


class Layout(StrEnum):
    REGISTER = "register"
    FORM     = "form"


@dataclass(slots=True)
class ColumnHeadings:
    """Register-layout column headings of one page (any may be missing)."""

    document: Fragment | None = None
    lodged: Fragment | None = None
    subject_land: Fragment | None = None
    estimated: Fragment | None = None
    proposal: Fragment | None = None


@dataclass(slots=True)
class SectionFields:
    """Raw field values of one section, before address normalisation."""

    council_reference: str
    address: str
    legal_description: str
    description: str
    date_received: date | None


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def fragments_in(fragments: list[Fragment], bounds: Rectangle) -> list[Fragment]:
    """Members of `bounds`, in (y, x) order."""
    return [f for f in sort_fragments(fragments) if is_inside(f, bounds)]


def text_in(fragments: list[Fragment], bounds: Rectangle, separator: str = " ") -> str:
    return collapse(separator.join(f.text for f in fragments_in(fragments, bounds)))


def find_heading(
    fragments: list[Fragment],
    label: str,
    matcher: MatchClosest = match_closest,
) -> Fragment | None:
    """Topmost occurrence of a heading label (tolerates noise and split runs)."""
    found = find_section_anchors(fragments, label, matcher)
    return found[0] if found else None


def clean_reference(text: str) -> str:
    """Removes whitespace and maps glyphs the decoder confuses with "/" back to "/"."""
    return _REFERENCE_GLYPHS_RE.sub("/", re.sub(r"\s", "", text))


def parse_received_date(text: str) -> date | None:
    """
    Strict D/MM/YYYY (the day's leading zero may be omitted).

    Only the first ten characters are considered, because the lodged date is
    sometimes fused with the following column's text.
    """
    candidate = re.sub(r"\s", "", text.strip()[:len("DD/MM/YYYY")])
    match = _RECEIVED_DATE_RE.match(candidate)
    if not match:
        return None
    day, month, year = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def split_address_block(fragments: list[Fragment]) -> tuple[str, str]:
    """
    First row of the block is the address, the remaining rows the legal
    description; swapped when the first row is itself a legal description.
    """
    rows = [collapse(" ".join(f.text for f in row)) for row in group_rows(sort_fragments(fragments))]
    address = rows[0] if rows else ""
    legal_description = collapse(" ".join(rows[1:]))

    address = strip_leading_date(address)
    if address.startswith(LOT_MARKER) and legal_description:
        address, legal_description = legal_description, address
    return address, legal_description


def _log_skip(reason: SkipReason, message: str, section: Section) -> None:
    log.warning("%s: %s The application will be ignored. Fragments: %s", reason, message, section.summary())


# ---------------------------------------------------------------------------
# Layout detection
# ---------------------------------------------------------------------------

def detect_layout(
    fragments: list[Fragment],
    matcher: MatchClosest = match_closest,
) -> tuple[Layout, list[Fragment]] | None:
    """Returns the page layout together with its section anchors."""
    anchors = find_section_anchors(fragments, DEV_APP_NO_LABEL, matcher)
    if anchors:
        return Layout.FORM, anchors
    anchors = find_section_anchors(fragments, APPROVAL_LABEL, matcher)
    if anchors:
        return Layout.REGISTER, anchors
    return None


def find_column_headings(
    fragments: list[Fragment],
    matcher: MatchClosest = match_closest,
) -> ColumnHeadings:
    return ColumnHeadings(
        document=find_heading(fragments, DOCUMENT_LABEL, matcher),
        lodged=find_heading(fragments, LODGED_LABEL, matcher),
        subject_land=find_heading(fragments, SUBJECT_LAND_LABEL, matcher),
        estimated=find_heading(fragments, ESTIMATED_LABEL, matcher),
        proposal=find_heading(fragments, PROPOSAL_LABEL, matcher),
    )


# ---------------------------------------------------------------------------
# Register layout
# ---------------------------------------------------------------------------

def _first_row_columns(fragments: list[Fragment], anchor: Fragment) -> ColumnHeadings:
    """
    Column positions guessed from the cells of the section's first row, left of
    the anchor: number, lodged date (when the cell reads as one), subject land,
    estimated cost and, last before the anchor, the proposal.
    """
    rows = group_rows(sort_fragments(fragments))
    cells = sorted((f for f in rows[0] if f.x < anchor.x), key=lambda f: f.x) if rows else []

    columns = ColumnHeadings()
    if cells and parse_received_date(cells[0].text) is None:
        columns.document, cells = cells[0], cells[1:]
    if cells and parse_received_date(cells[0].text) is not None:
        columns.lodged, cells = cells[0], cells[1:]
    if cells:
        columns.subject_land, cells = cells[0], cells[1:]
    if cells:
        columns.estimated = cells[0]
    if len(cells) > 1:
        columns.proposal = cells[-1]
    return columns


def _with_fixed_offsets(headings: ColumnHeadings, fragments: list[Fragment], anchor: Fragment) -> ColumnHeadings:
    """Fills the column headings missing from the page with first-row positions."""
    names = ("document", "lodged", "subject_land", "estimated", "proposal")
    if all(getattr(headings, name) is not None for name in names):
        return headings
    guessed = _first_row_columns(fragments, anchor)
    return ColumnHeadings(**{name: getattr(headings, name) or getattr(guessed, name) for name in names})


def extract_register_fields(
    section: Section,
    headings: ColumnHeadings,
    matcher: MatchClosest = match_closest,
) -> SectionFields | None:
    fragments = [f for f in section.fragments if f.text.strip()]
    if not fragments:
        _log_skip(SkipReason.MISSING_REFERENCE, "The section holds no text.", section)
        return None

    leftmost = min(fragments, key=lambda f: f.x)
    topmost = min(fragments, key=lambda f: f.y)
    bottommost = max(fragments, key=lambda f: f.y)
    line_height = leftmost.height
    headings = _with_fixed_offsets(headings, fragments, section.anchor)

    # Application number: the "Document" column, two lines deep.
    council_reference = ""
    if headings.document is not None:
        reference_bounds = region(headings.document.x, topmost.y, headings.document.width, line_height * 2)
        council_reference = clean_reference(text_in(fragments, reference_bounds, separator=""))
    if not council_reference:
        _log_skip(SkipReason.MISSING_REFERENCE, "Could not find the application number.", section)
        return None
    log.info("    Found \"%s\".", council_reference)

    # Lodged date.
    date_received = None
    if headings.lodged is not None:
        date_bounds = region(headings.lodged.x, topmost.y, headings.lodged.width, line_height * 2)
        date_received = parse_received_date(text_in(fragments, date_bounds, separator=""))

    # Address and legal description.
    address, legal_description = "", ""
    if headings.subject_land is not None:
        right = headings.estimated.x if headings.estimated else headings.subject_land.x + SENTINEL_EXTENT
        address_bounds = region(
            headings.subject_land.x, topmost.y,
            right - headings.subject_land.x, line_height * 3,
        )
        address, legal_description = split_address_block(fragments_in(fragments, address_bounds))

    # Proposal, up to the "Conditions:" label or the bottom of the section.
    description = ""
    if headings.proposal is not None:
        conditions = find_heading(fragments, CONDITIONS_LABEL, matcher)
        bottom = conditions.y if conditions else bottommost.bottom
        description_bounds = region(
            headings.proposal.x, topmost.y,
            section.anchor.x - headings.proposal.x, bottom - topmost.y,
        )
        description = text_in(fragments, description_bounds)
        description = collapse(_ELLIPSIS_RE.sub(" ", description))

    return SectionFields(
        council_reference=council_reference,
        address=address,
        legal_description=legal_description,
        description=description or NO_DESCRIPTION,
        date_received=date_received,
    )


# ---------------------------------------------------------------------------
# Form layout
# ---------------------------------------------------------------------------

def _right_of(heading: Fragment) -> Rectangle:
    return region(heading.right, heading.y, heading.width, heading.height)


def extract_form_fields(
    section: Section,
    matcher: MatchClosest = match_closest,
) -> SectionFields | None:
    fragments = [f for f in section.fragments if f.text.strip()]
    anchor = section.anchor

    # Application number: whatever sits immediately right of "Dev App No".
    candidates = [
        f for f in fragments_in(fragments, _right_of(anchor))
        if clean_reference(f.text)
    ]
    if not candidates:
        _log_skip(SkipReason.MISSING_REFERENCE, "Could not find the application number.", section)
        return None
    reference_fragment = candidates[0]
    council_reference = clean_reference(reference_fragment.text)
    log.info("    Found \"%s\".", council_reference)

    applicant = find_heading(fragments, APPLICANT_LABEL, matcher)
    received = find_heading(fragments, RECEIVED_DATE_LABEL, matcher)
    property_details = find_heading(fragments, PROPERTY_DETAILS_LABEL, matcher)
    referrals = find_heading(fragments, REFERRALS_LABEL, matcher)
    total_costs = find_heading(fragments, TOTAL_COSTS_LABEL, matcher)

    # Received date.
    date_received = None
    if received is not None:
        date_fragments = fragments_in(fragments, _right_of(received))
        if date_fragments:
            date_received = parse_received_date(date_fragments[0].text)

    # Description: right of the application number, down to "Applicant".
    if applicant is None:
        log.debug("No \"%s\" heading for %s; the description may be truncated.", APPLICANT_LABEL, council_reference)
        description_height = reference_fragment.height * 2
    else:
        description_height = applicant.y - reference_fragment.y
    description_bounds = region(
        reference_fragment.right, reference_fragment.y, SENTINEL_EXTENT, description_height,
    )
    description = text_in(fragments, description_bounds)

    # Address block below "Property Details:", else below the application number.
    if property_details is not None:
        top = property_details.bottom
        width = referrals.x - property_details.x if referrals else SENTINEL_EXTENT
        height = (
            total_costs.y - property_details.y - 2 * property_details.height
            if total_costs else SENTINEL_EXTENT
        )
        address_bounds = region(property_details.x, top, width, height)
    else:
        leftmost = min(fragments, key=lambda f: f.x)
        top = reference_fragment.y + reference_fragment.height * 2
        below = [h.y for h in (applicant, received, referrals, total_costs) if h is not None and h.y >= top]
        height = (min(below) - top) if below else SENTINEL_EXTENT
        address_bounds = region(leftmost.x, top, SENTINEL_EXTENT, height)
    address, legal_description = split_address_block(fragments_in(fragments, address_bounds))

    return SectionFields(
        council_reference=council_reference,
        address=address,
        legal_description=legal_description,
        description=description or NO_DESCRIPTION,
        date_received=date_received,
    )
