"""Tests for category counts and lookups."""

import asyncio
import sqlite3

import pytest

from pride_directory_api.app.core.db import Document
from pride_directory_api.app.data.categories import CATEGORIES, get_category_color
from pride_directory_api.app.services.business_service import BusinessService
from pride_directory_api.app.services.category_service import CategoryService, count_categories


def test_count_categories_over_lists():
    counts = count_categories(
        [
            Document(id="1", data={"categories": ["Retail & Shopping"]}),
            Document(id="2", data={"categories": ["Retail & Shopping", "Beauty & Personal Care"]}),
        ]
    )
    assert counts["Retail & Shopping"] == 2
    assert counts["Beauty & Personal Care"] == 1
    assert counts["Automotive"] == 0
    assert len(counts) == len(CATEGORIES)


def test_count_categories_legacy_field_and_unknown_names():
    counts = count_categories(
        [
            Document(id="1", data={"category": "Automotive"}),
            Document(id="2", data={"categories": ["Automotive", "Automotive", "Time Travel"]}),
            Document(id="3", data={"categories": [], "category": "Automotive"}),
        ]
    )
    assert counts["Automotive"] == 2
    assert "Time Travel" not in counts


def test_list_categories_counts_from_store(add_business):
    add_business("Shop", categories=["Retail & Shopping"])
    add_business("Salon", categories=["Retail & Shopping", "Beauty & Personal Care"])

    grid = asyncio.run(CategoryService.list_categories())

    counts = {c.name: c.count for c in grid.categories}
    assert grid.error is None
    assert [c.id for c in grid.categories] == list(range(1, 15))
    assert counts["Retail & Shopping"] == 2
    assert counts["Beauty & Personal Care"] == 1
    assert counts["Real Estate"] == 0


def test_list_categories_store_failure(monkeypatch):
    async def broken(cls):
        raise sqlite3.OperationalError("no such table: businesses")

    monkeypatch.setattr(BusinessService, "fetch_all_documents", classmethod(broken))
    grid = asyncio.run(CategoryService.list_categories())
    assert grid.error == "Failed to load category counts"
    assert all(c.count == 0 for c in grid.categories)


def test_get_category_is_case_insensitive():
    category = asyncio.run(CategoryService.get_category("home services"))
    assert category.id == 4
    with pytest.raises(ValueError):
        asyncio.run(CategoryService.get_category("Nope"))


def test_get_category_color():
    assert get_category_color("Automotive") == "bg-red-100 text-red-800"
    assert get_category_color("Unknown") == "bg-gray-100 text-gray-800"
