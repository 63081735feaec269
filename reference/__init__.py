"""
reference — reference dictionaries and fuzzy matching.

Public API:
  load_reference_data(data_dir=None)          -> ReferenceData
  match_closest(candidate, targets, max_dist) -> str | None
  match_distance(candidate, targets, max_dist)-> (str, int) | None
  MatchClosest                                   matcher protocol
  ReferenceDataError                             malformed table line
"""

from .dictionaries import ReferenceDataError, load_reference_data
from .fuzzy import MAX_DISTANCE, MatchClosest, match_closest, match_distance

__all__ = [
    "ReferenceDataError",
    "load_reference_data",
    "MAX_DISTANCE",
    "MatchClosest",
    "match_closest",
    "match_distance",
]
