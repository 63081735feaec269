"""
layout — positional reconstruction of application records from page fragments.

Modules:
  geometry — intersect, percentage_inside, vertical_overlap_percentage, union
  rows     — row_top, nearest_right, find_section_anchors, build_sections
  fields   — layout detection and per-field region extraction
"""

from .geometry import (
    MEMBERSHIP_PERCENTAGE,
    area,
    intersect,
    is_inside,
    percentage_inside,
    union,
    vertical_overlap_percentage,
)
from .rows import (
    build_sections,
    find_section_anchors,
    group_rows,
    nearest_right,
    row_top,
    sort_fragments,
)
from .fields import (
    ColumnHeadings,
    Layout,
    SectionFields,
    detect_layout,
    extract_form_fields,
    extract_register_fields,
    find_column_headings,
    parse_received_date,
)

__all__ = [
    # geometry
    "MEMBERSHIP_PERCENTAGE",
    "area",
    "intersect",
    "is_inside",
    "percentage_inside",
    "union",
    "vertical_overlap_percentage",
    # rows
    "build_sections",
    "find_section_anchors",
    "group_rows",
    "nearest_right",
    "row_top",
    "sort_fragments",
    # fields
    "ColumnHeadings",
    "Layout",
    "SectionFields",
    "detect_layout",
    "extract_form_fields",
    "extract_register_fields",
    "find_column_headings",
    "parse_received_date",
]
