"""
data_model/layout.py — rectangles and positioned text fragments of a page.

Rectangle — a box in page space (y grows downwards).
Fragment  — a piece of text with its box; the raw input unit.
Section   — the fragments of one candidate application, with exactly one anchor.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rectangle needs a non-negative size, got {self.width} x {self.height}"
            )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height


def zero_rectangle() -> Rectangle:
    return Rectangle(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Fragment(Rectangle):
    """Text plus its box; `text` may be empty or whitespace only."""

    text: str = ""


@dataclass(slots=True)
class Section:
    """
    Fragments believed to belong to a single application.

    - anchor:    the label that opened the section (e.g. "Approval:", "Dev App No")
    - fragments: the section's fragments, sorted by (y, x)
    """

    anchor: Fragment
    fragments: list[Fragment] = field(default_factory=list)

    def summary(self) -> str:
        """All fragment texts as "[a][b]…", for diagnostics."""
        return "".join(f"[{f.text}]" for f in self.fragments)
