"""
Business endpoints for API v1.

Listing views answer with HTTP 200 even when the store fails; the body
then carries an ``error`` message and no tiles.  The detail view uses
404 for unknown businesses and redirects to the canonical slug,
including when the slug is missing.
Submitting a listing requires a bearer token.
"""

import logging
import sqlite3
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from pride_directory_api.app.core.security import get_current_user, get_optional_user
from pride_directory_api.app.schemas.business import (
    BusinessCreate,
    BusinessDetail,
    BusinessListing,
    BusinessSubmitted,
    FeaturedBusinesses,
)
from pride_directory_api.app.services.business_service import (
    DETAIL_ERROR,
    SUBMIT_ERROR,
    BusinessService,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/featured", response_model=FeaturedBusinesses)
async def list_featured_businesses() -> FeaturedBusinesses:
    """Newest listings for the landing page.

    The store is retried with a growing delay before an error is
    reported, so this request can take several seconds when the store
    is unavailable.
    """
    return await BusinessService.list_featured_businesses()


async def _load_business(business_id: str) -> BusinessDetail:
    try:
        return await BusinessService.get_business(business_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except sqlite3.Error as e:
        logger.exception("Error fetching business %s", business_id)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=DETAIL_ERROR) from e


@router.get("/mine", response_model=BusinessListing)
async def list_my_businesses(current_user: dict = Depends(get_current_user)) -> BusinessListing:
    """Listings submitted by the authenticated user, pending ones included."""
    return await BusinessService.list_user_businesses(current_user)


def _canonical_redirect(request: Request, business_id: str, slug: str) -> RedirectResponse:
    url = request.url_for("get_business_with_slug", business_id=business_id, slug=slug)
    return RedirectResponse(url=str(url), status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/{business_id}", response_class=RedirectResponse, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
async def get_business(business_id: str, request: Request):
    """Redirect to the canonical ``/{business_id}/{slug}`` URL of a business."""
    detail = await _load_business(business_id)
    return _canonical_redirect(request, business_id, detail.business.slug)


@router.get("/{business_id}/{slug}", response_model=BusinessDetail)
async def get_business_with_slug(business_id: str, slug: str, request: Request):
    """Retrieve a business by ID and slug.

    A stale or mistyped slug answers with a temporary redirect to the
    canonical URL.
    """
    detail = await _load_business(business_id)
    if slug != detail.business.slug:
        return _canonical_redirect(request, business_id, detail.business.slug)
    return detail


@router.post("/", response_model=BusinessSubmitted, status_code=status.HTTP_201_CREATED)
async def submit_business(
    business: BusinessCreate,
    current_user: Optional[dict] = Depends(get_optional_user),
) -> BusinessSubmitted:
    """Submit a new listing for review.

    The listing is stored as ``pending`` and unverified, owned by the
    authenticated user.  Without a token the request fails with 401 and
    nothing is stored.
    """
    try:
        return await BusinessService.submit_business(business, current_user)
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except sqlite3.Error as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SUBMIT_ERROR) from e
