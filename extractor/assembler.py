"""
extractor/assembler.py — from page fragments to DevelopmentApplication records.

Architecture:
  page fragments → detect_layout() → build_sections()
  → extract_*_fields() → AddressNormalizer → DevelopmentApplication
  → duplicate suppression (per document)

Public API:
  ApplicationAssembler(reference, info_url, ...).parse_page(fragments) -> list[DevelopmentApplication]
  parse_document(pages, info_url, reference, ...)                      -> list[DevelopmentApplication]

Nothing here raises for an unparseable application: the section is dropped
and a WARNING explains why, with the fragment texts involved.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from address.normalizer import AddressNormalizer
from data_model.applications import DevelopmentApplication, SkipReason
from data_model.layout import Fragment, Section
from data_model.reference import ReferenceData
from layout.fields import (
    Layout,
    SectionFields,
    detect_layout,
    extract_form_fields,
    extract_register_fields,
    find_column_headings,
)
from layout.rows import build_sections, sort_fragments
from reference.fuzzy import MatchClosest, match_closest

log = logging.getLogger(__name__)

COMMENT_URL = "mailto:council@coorong.sa.gov.au"


class ApplicationAssembler:
    """
    Assembles the applications of one document, page by page.

    Keeps the set of council references already emitted for the document, so
    an application listed twice (documents sometimes repeat a record verbatim)
    is returned only once.
    """

    def __init__(
        self,
        reference: ReferenceData,
        info_url: str,
        comment_url: str = COMMENT_URL,
        date_scraped: date | None = None,
        matcher: MatchClosest = match_closest,
    ) -> None:
        self.info_url = info_url
        self.comment_url = comment_url
        self.date_scraped = date_scraped or date.today()
        self._matcher = matcher
        self._normalizer = AddressNormalizer(reference, matcher)
        self._seen: set[str] = set()

    @property
    def seen_references(self) -> frozenset[str]:
        return frozenset(self._seen)

    def parse_page(self, fragments: list[Fragment]) -> list[DevelopmentApplication]:
        ordered = sort_fragments(fragments)
        detected = detect_layout(ordered, self._matcher)
        if detected is None:
            log.info("No applications found on the page (%d fragments).", len(ordered))
            return []
        layout, anchors = detected
        log.debug("Page layout %s with %d section(s).", layout, len(anchors))

        headings = find_column_headings(ordered, self._matcher) if layout is Layout.REGISTER else None

        applications: list[DevelopmentApplication] = []
        for section in build_sections(ordered, anchors):
            if layout is Layout.REGISTER:
                fields = extract_register_fields(section, headings, self._matcher)
            else:
                fields = extract_form_fields(section, self._matcher)
            if fields is None:
                continue
            application = self._assemble(fields, section)
            if application is None:
                continue
            if application.council_reference in self._seen:
                log.warning(
                    "%s: Application %s was already read from %s; the repeat is ignored.",
                    SkipReason.DUPLICATE, application.council_reference, self.info_url,
                )
                continue
            self._seen.add(application.council_reference)
            applications.append(application)
        return applications

    def _assemble(self, fields: SectionFields, section: Section) -> DevelopmentApplication | None:
        address = self._normalizer.normalize(fields.address)
        if not address:
            log.warning(
                "%s: Application %s will be ignored because an address was not found or parsed. Fragments: %s",
                SkipReason.MISSING_ADDRESS, fields.council_reference, section.summary(),
            )
            return None
        return DevelopmentApplication(
            council_reference=fields.council_reference,
            address=address,
            description=fields.description,
            info_url=self.info_url,
            comment_url=self.comment_url,
            date_scraped=self.date_scraped,
            date_received=fields.date_received,
            legal_description=fields.legal_description,
        )


def parse_document(
    pages: Iterable[list[Fragment]],
    info_url: str,
    reference: ReferenceData,
    comment_url: str = COMMENT_URL,
    date_scraped: date | None = None,
    matcher: MatchClosest = match_closest,
) -> list[DevelopmentApplication]:
    """Applications of every page of one document, duplicates removed."""
    assembler = ApplicationAssembler(
        reference, info_url,
        comment_url=comment_url, date_scraped=date_scraped, matcher=matcher,
    )
    applications: list[DevelopmentApplication] = []
    for number, fragments in enumerate(pages, start=1):
        log.info("Parsing applications from page %d of %s.", number, info_url)
        applications.extend(assembler.parse_page(fragments))
    log.info("Parsed %d application(s) from %s.", len(applications), info_url)
    return applications
