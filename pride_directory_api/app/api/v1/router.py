"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When a new domain is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import businesses, categories, events, search, users

router = APIRouter()

router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(businesses.router, prefix="/businesses", tags=["businesses"])
router.include_router(search.router, prefix="/search", tags=["search"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(users.router, prefix="/users", tags=["users"])
