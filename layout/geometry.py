"""
layout/geometry.py — rectangle primitives.

Pure functions, no state. A fragment "belongs" to a region when at least
MEMBERSHIP_PERCENTAGE of its own area lies inside it; this is the only
membership test used by the clusterer and the field extractor.
"""

from __future__ import annotations

from typing import Iterable

from data_model.layout import Fragment, Rectangle, zero_rectangle

MEMBERSHIP_PERCENTAGE = 10.0

# Width/height used for regions without a natural right or bottom bound.
SENTINEL_EXTENT = 1.0e9


def intersect(r1: Rectangle, r2: Rectangle) -> Rectangle:
    """Overlapping rectangle of r1 and r2, or the zero rectangle when disjoint."""
    x1 = max(r1.x, r2.x)
    y1 = max(r1.y, r2.y)
    x2 = min(r1.right, r2.right)
    y2 = min(r1.bottom, r2.bottom)
    if x2 >= x1 and y2 >= y1:
        return Rectangle(x1, y1, x2 - x1, y2 - y1)
    return zero_rectangle()


def area(rectangle: Rectangle) -> float:
    return rectangle.width * rectangle.height


def percentage_inside(fragment: Rectangle, rectangle: Rectangle) -> float:
    """Share of the fragment's area inside the rectangle, 0..100."""
    fragment_area = area(fragment)
    if fragment_area == 0:
        return 0.0
    return area(intersect(rectangle, fragment)) * 100.0 / fragment_area


def is_inside(fragment: Rectangle, rectangle: Rectangle) -> bool:
    return percentage_inside(fragment, rectangle) >= MEMBERSHIP_PERCENTAGE


def is_vertical_overlap(a: Rectangle, b: Rectangle) -> bool:
    return b.y < a.bottom and b.bottom > a.y


def vertical_overlap_percentage(a: Rectangle, b: Rectangle) -> float:
    """
    Vertical overlap as a percentage of b's height.

    Measured against b so that one very tall b (spanning many rows) scores low
    against a normal-height a.
    """
    y1 = max(a.y, b.y)
    y2 = min(a.bottom, b.bottom)
    if y2 < y1 or b.height == 0:
        return 0.0
    return (y2 - y1) * 100.0 / b.height


def union(rectangles: Iterable[Rectangle]) -> Rectangle:
    """Bounding box of the given rectangles (zero rectangle when empty)."""
    items = list(rectangles)
    if not items:
        return zero_rectangle()
    x1 = min(r.x for r in items)
    y1 = min(r.y for r in items)
    x2 = max(r.right for r in items)
    y2 = max(r.bottom for r in items)
    return Rectangle(x1, y1, x2 - x1, y2 - y1)


def merge_fragments(fragments: list[Fragment], separator: str = "") -> Fragment:
    """One fragment spanning all given fragments, texts joined in list order."""
    box = union(fragments)
    return Fragment(
        box.x, box.y, box.width, box.height,
        text=separator.join(f.text for f in fragments),
    )


def region(x: float, y: float, width: float, height: float) -> Rectangle:
    """A rectangle whose negative extents are clamped to zero."""
    return Rectangle(x, y, max(0.0, width), max(0.0, height))
