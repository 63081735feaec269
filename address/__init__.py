"""
address — canonicalisation of development application addresses.

Public API:
  AddressNormalizer(reference, matcher).normalize(raw) -> str
  strip_leading_date(text)                             -> str
"""

from .normalizer import AddressNormalizer, strip_leading_date

__all__ = ["AddressNormalizer", "strip_leading_date"]
