"""
layout/rows.py — grouping fragments into visual rows and per-application sections.

Architecture:
  page fragments → sort_fragments() → find_section_anchors(label)
  → build_sections() → list[Section]

A fragment is "in the same row" as another when more than half of its height
overlaps the other's vertical extent; measuring against the candidate's own
height keeps abnormally tall fragments (boxes, rules) out of every row.
"""

from __future__ import annotations

import math
import re

from data_model.layout import Fragment, Section
from layout.geometry import (
    is_vertical_overlap,
    merge_fragments,
    vertical_overlap_percentage,
)
from reference.fuzzy import MAX_DISTANCE, MatchClosest, match_closest

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ROW_OVERLAP_PERCENTAGE = 50.0

# Largest horizontal gap between two runs of the same label.
RIGHT_GAP_TOLERANCE = 30.0

# Fragments joined when looking for a label split across text runs.
MAX_LABEL_FRAGMENTS = 3

# Vertical tolerance when grouping an address block into rows.
ROW_Y_TOLERANCE = 5.0

_LABEL_NOISE_RE = re.compile(r"[\s,\-_]")


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------

def sort_fragments(fragments: list[Fragment]) -> list[Fragment]:
    """Top to bottom, then left to right."""
    return sorted(fragments, key=lambda f: (f.y, f.x))


def row_top(fragments: list[Fragment], start: Fragment) -> float:
    """Smallest y of the fragments sharing a row with `start`."""
    top = start.y
    for fragment in fragments:
        if not is_vertical_overlap(start, fragment):
            continue
        if vertical_overlap_percentage(start, fragment) > ROW_OVERLAP_PERCENTAGE:
            top = min(top, fragment.y)
    return top


def _distance(fragment: Fragment, other: Fragment) -> float:
    """Squared distance from the middle of fragment's right edge to the middle of other's left edge."""
    x1 = fragment.right
    y1 = fragment.y + fragment.height / 2
    x2 = other.x
    y2 = other.y + other.height / 2
    return (x2 - x1) ** 2 + (y2 - y1) ** 2


def nearest_right(fragments: list[Fragment], fragment: Fragment) -> Fragment | None:
    """The fragment immediately to the right, ignoring anything past a large gap."""
    closest: Fragment | None = None
    closest_distance = math.inf
    for other in fragments:
        if other is fragment:
            continue
        if not is_vertical_overlap(fragment, other):
            continue
        if vertical_overlap_percentage(fragment, other) <= ROW_OVERLAP_PERCENTAGE:
            continue
        # strictly to the right: a neighbour overlapping the fragment never continues it
        if other.x <= fragment.right:
            continue
        if other.x - fragment.right >= RIGHT_GAP_TOLERANCE:
            continue
        distance = _distance(fragment, other)
        if distance < closest_distance:
            closest, closest_distance = other, distance
    return closest


def group_rows(fragments: list[Fragment], tolerance: float = ROW_Y_TOLERANCE) -> list[list[Fragment]]:
    """
    Groups fragments by approximate y (compared with each row's first fragment).

    Rows keep the order in which their first fragment appears in `fragments`,
    so callers pass (y, x)-sorted input.
    """
    rows: list[list[Fragment]] = []
    for fragment in fragments:
        row = next((r for r in rows if abs(r[0].y - fragment.y) < tolerance), None)
        if row is None:
            rows.append([fragment])
        else:
            row.append(fragment)
    return rows


# ---------------------------------------------------------------------------
# Anchors
# ---------------------------------------------------------------------------

def normalise_label(text: str) -> str:
    """"Dev App-No," → "devappno": lower case, no whitespace/commas/dashes/underscores."""
    return _LABEL_NOISE_RE.sub("", text).lower()


def find_section_anchors(
    fragments: list[Fragment],
    label: str,
    matcher: MatchClosest = match_closest,
) -> list[Fragment]:
    """
    Finds every occurrence of `label` on the page, tolerating spelling noise and
    labels split over up to MAX_LABEL_FRAGMENTS adjacent runs.

    Each anchor is returned as one merged Fragment (union box, joined text),
    sorted top to bottom.
    """
    target = normalise_label(label)
    if not target:
        return []
    first_letter = target[0]

    anchors: list[Fragment] = []
    for start in fragments:
        if not start.text.strip().lower().startswith(first_letter):
            continue

        # (tier, length difference, fragments) for each acceptable prefix
        matches: list[tuple[int, int, list[Fragment]]] = []
        run: list[Fragment] = []
        current: Fragment | None = start
        while current is not None and len(run) < MAX_LABEL_FRAGMENTS:
            run.append(current)
            text = normalise_label("".join(f.text for f in run))
            if len(text) > len(target) + MAX_DISTANCE:
                break
            if len(text) >= len(target) - MAX_DISTANCE:
                tier = _match_tier(text, target, matcher)
                if tier is not None:
                    matches.append((tier, abs(len(text) - len(target)), list(run)))
            current = nearest_right(fragments, current)

        if matches:
            _, _, best = min(matches, key=lambda m: (m[0], m[1]))
            anchors.append(merge_fragments(best))

    return sorted(anchors, key=lambda a: (a.y, a.x))


def _match_tier(text: str, target: str, matcher: MatchClosest) -> int | None:
    for tier in range(MAX_DISTANCE + 1):
        if matcher(text, [target], tier) is not None:
            return tier
    return None


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def build_sections(fragments: list[Fragment], anchors: list[Fragment]) -> list[Section]:
    """
    Splits the page into one section per anchor.

    Section i holds the fragments whose y lies in [top_i, top_{i+1}), where top
    is the anchor's row top; each anchor is raised by half its height first,
    because a record's other columns (e.g. the lodged date) may sit slightly
    above its label. The last section runs to the bottom of the page.
    """
    ordered = sort_fragments(fragments)
    tops: list[float] = []
    for anchor in anchors:
        raised = Fragment(
            anchor.x, anchor.y - anchor.height / 2, anchor.width, anchor.height,
            text=anchor.text,
        )
        tops.append(row_top(ordered, raised))

    sections: list[Section] = []
    for index, anchor in enumerate(anchors):
        top = tops[index]
        next_top = tops[index + 1] if index + 1 < len(tops) else math.inf
        members = [f for f in ordered if top <= f.y < next_top]
        sections.append(Section(anchor=anchor, fragments=members))
    return sections
