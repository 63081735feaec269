"""
data_model — data structures for development application notices.

Usage:
  from data_model import Fragment, Section, DevelopmentApplication, ...

Modules:
  layout       — Rectangle, Fragment, Section, zero_rectangle
  applications — DevelopmentApplication, SkipReason
  reference    — ReferenceData
"""

from .layout import (
    Rectangle,
    Fragment,
    Section,
    zero_rectangle,
)
from .applications import (
    DevelopmentApplication,
    SkipReason,
)
from .reference import ReferenceData

__all__ = [
    # layout
    "Rectangle",
    "Fragment",
    "Section",
    "zero_rectangle",
    # applications
    "DevelopmentApplication",
    "SkipReason",
    # reference
    "ReferenceData",
]
