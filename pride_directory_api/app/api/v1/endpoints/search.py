"""
Search endpoint for API v1.
"""

from fastapi import APIRouter, Query

from pride_directory_api.app.schemas.business import SearchResults
from pride_directory_api.app.services.search_service import SearchService

router = APIRouter()


@router.get("/", response_model=SearchResults)
async def search_businesses(
    q: str = Query("", description="Text matched against name, categories and description"),
    location: str = Query("", description="Text matched against \"city, state\""),
) -> SearchResults:
    """Search businesses by free text and location.

    - **q** - case-insensitive substring of the name, a category or the description.
    - **location** - case-insensitive substring of ``"city, state"``.

    When both are given and nothing matches both, results for **q**
    alone are returned with ``location_fallback`` set.
    """
    return await SearchService.search_businesses(term=q, location=location)
