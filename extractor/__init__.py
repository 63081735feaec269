"""
extractor — assembling DevelopmentApplication records from decoded pages.

Public API:
  ApplicationAssembler   per-document assembler with duplicate suppression
  parse_document(...)    -> list[DevelopmentApplication]
  COMMENT_URL            contact attached to every record
"""

from .assembler import COMMENT_URL, ApplicationAssembler, parse_document

__all__ = ["COMMENT_URL", "ApplicationAssembler", "parse_document"]
