"""
Category endpoints for API v1.

The category list is static; only the business counts and the
per-category listings come from the store.  Category names in paths are
matched case-insensitively.
"""

from fastapi import APIRouter, HTTPException, status

from pride_directory_api.app.schemas.business import CategoryBusinesses
from pride_directory_api.app.schemas.category import CategoryGrid, CategoryRead
from pride_directory_api.app.services.business_service import BusinessService
from pride_directory_api.app.services.category_service import CategoryService

router = APIRouter()


@router.get("/", response_model=CategoryGrid)
async def list_categories() -> CategoryGrid:
    """Return every category with the number of businesses listing it."""
    return await CategoryService.list_categories()


@router.get("/{category_name}", response_model=CategoryRead)
async def get_category(category_name: str) -> CategoryRead:
    try:
        return await CategoryService.get_category(category_name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("/{category_name}/businesses", response_model=CategoryBusinesses)
async def list_category_businesses(category_name: str) -> CategoryBusinesses:
    """Businesses in a category, sorted by name.  Unknown categories give 404."""
    try:
        return await BusinessService.list_category_businesses(category_name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
