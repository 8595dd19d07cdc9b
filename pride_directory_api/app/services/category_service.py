"""
Category grid for the landing page.

Counts are recomputed from a full scan of the business collection on
every request.  A business may list its categories in the
``categories`` array or, for older records, in a single ``category``
field; the array wins when both exist.  Each business counts at most
once per category and names outside the static list are ignored.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Dict, Iterable

from pride_directory_api.app.core.db import Document
from pride_directory_api.app.data.categories import CATEGORIES, CATEGORY_NAMES, find_category
from pride_directory_api.app.schemas.category import CategoryGrid, CategoryRead
from pride_directory_api.app.services.business_service import BusinessService

logger = logging.getLogger(__name__)


def count_categories(docs: Iterable[Document]) -> Dict[str, int]:
    """Number of documents listing each known category name."""
    counts = {name: 0 for name in CATEGORY_NAMES}
    for doc in docs:
        categories = doc.data.get("categories")
        if isinstance(categories, list):
            listed = {c for c in categories if isinstance(c, str)}
        else:
            legacy = doc.data.get("category")
            listed = {legacy} if isinstance(legacy, str) else set()
        for name in listed:
            if name in counts:
                counts[name] += 1
    return counts


class CategoryService:
    """Read-only access to the static category list."""

    @classmethod
    async def list_categories(cls) -> CategoryGrid:
        """All categories in display order with their business counts."""
        error = None
        try:
            counts = count_categories(await BusinessService.fetch_all_documents())
        except sqlite3.Error:
            logger.exception("Error fetching category counts")
            counts = {}
            error = "Failed to load category counts"
        categories = [CategoryRead(**c, count=counts.get(str(c["name"]), 0)) for c in CATEGORIES]
        return CategoryGrid(categories=categories, error=error)

    @classmethod
    async def get_category(cls, name: str) -> CategoryRead:
        """Look up a category by name, case-insensitively.

        Raises ``ValueError`` if there is no such category.
        """
        category = find_category(name)
        if category is None:
            raise ValueError("Category not found")
        return CategoryRead(**category)
