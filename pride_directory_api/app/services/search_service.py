"""
Free-text and location search over business listings.

The store has no text index, so search reads the whole collection and
filters in memory.  A business matches the term when it occurs
(case-insensitively) in its name, any of its categories or its
description, and matches the location when it occurs in
``"<city>, <state>"``.

If a term and a location are both given and nothing matches both, the
location is dropped and the term alone is applied.  The result then
carries ``location_fallback=True`` so the client can say the results
are not limited to the requested place.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Tuple

from pride_directory_api.app.schemas.business import BusinessTile, SearchResults
from pride_directory_api.app.services.business_service import BusinessService, collect_tiles, sort_by_name

logger = logging.getLogger(__name__)

SEARCH_ERROR = "Failed to load search results"


def matches_term(business: BusinessTile, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    fields = [business.business_name, *business.categories, business.description]
    return any(needle in field.lower() for field in fields)


def matches_location(business: BusinessTile, location: str) -> bool:
    if not location:
        return True
    return location.lower() in f"{business.city}, {business.state}".lower()


def filter_businesses(
    businesses: List[BusinessTile], term: str, location: str
) -> Tuple[List[BusinessTile], bool]:
    """Apply the term and location filters with location fallback.

    Returns the matching businesses sorted by name and whether the
    location constraint was dropped.
    """
    results = [b for b in businesses if matches_term(b, term) and matches_location(b, location)]
    fallback = False
    if not results and term and location:
        results = [b for b in businesses if matches_term(b, term)]
        fallback = bool(results)
    return sort_by_name(results), fallback


class SearchService:
    """Search entry point used by the search results view."""

    @classmethod
    async def search_businesses(cls, term: str = "", location: str = "") -> SearchResults:
        term = (term or "").strip()
        location = (location or "").strip()
        try:
            docs = await BusinessService.fetch_all_documents()
        except sqlite3.Error:
            logger.exception("Error fetching search results for %r in %r", term, location)
            return SearchResults(term=term, location=location, error=SEARCH_ERROR)

        results, fallback = filter_businesses(collect_tiles(docs), term, location)
        if fallback:
            logger.info("No results for %r in %r; showing all locations", term, location)
        return SearchResults(
            businesses=results,
            count=len(results),
            term=term,
            location=location,
            location_fallback=fallback,
        )
