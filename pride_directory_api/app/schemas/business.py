"""
Pydantic models for business listings.

``BusinessTile`` is the normalised, display-ready shape every listing
view returns.  The listing models wrap a list of tiles together with
the inline ``error`` message a client shows instead of failing, and
per-view flags such as ``location_fallback``.  ``BusinessCreate`` is
the listing submission form.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from pride_directory_api.app.data.categories import find_category, find_category_by_id
from pride_directory_api.app.schemas.category import CategoryRead


class BusinessTile(BaseModel):
    id: str
    business_name: str = Field(..., examples=["Rainbow Bakery"])
    categories: List[str] = Field(default_factory=lambda: ["Uncategorized"])
    description: str = ""
    city: str = ""
    state: str = ""
    cover_image: str = ""
    rating: Optional[float] = None
    rating_count: Optional[int] = None
    verified: bool = False
    welcome_lgbtq: bool = False
    lgbtq_friendly_staff: bool = False
    lgbtq_owned: bool = False
    safe_environment: bool = False
    slug: str = ""
    created_at: Optional[str] = None


class SocialMedia(BaseModel):
    facebook: str = ""
    twitter: str = ""
    instagram: str = ""
    linkedin: str = ""


class BusinessRead(BusinessTile):
    """Full business record shown on the detail page."""

    website: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    zip_code: str = ""
    social_media: SocialMedia = Field(default_factory=SocialMedia)
    status: Optional[str] = None
    tier: Optional[str] = None


class BusinessListing(BaseModel):
    businesses: List[BusinessTile] = Field(default_factory=list)
    count: int = 0
    error: Optional[str] = None


class FeaturedBusinesses(BusinessListing):
    """Newest listings for the landing page.

    ``retries`` is the number of re-fetches performed after a failed
    first attempt.
    """

    retries: int = 0


class CategoryBusinesses(BusinessListing):
    category: CategoryRead


class SearchResults(BusinessListing):
    term: str = ""
    location: str = ""
    location_fallback: bool = False


class BusinessDetail(BaseModel):
    business: BusinessRead
    related: List[BusinessTile] = Field(default_factory=list)


class BusinessCreate(BaseModel):
    """Listing submission form.

    ``category`` accepts a category name (any case) or its numeric id
    and is normalised to the canonical name.
    """

    business_name: str = Field(..., examples=["Rainbow Bakery"])
    category: str = Field(..., examples=["Restaurants & Food Services"])
    description: str = Field(..., examples=["Queer-owned neighbourhood bakery"])
    website: str = ""
    phone: str
    email: str
    address: str
    city: str
    state: str
    zip_code: str
    social_media: SocialMedia = Field(default_factory=SocialMedia)

    @field_validator(
        "business_name", "description", "phone", "email", "address", "city", "state", "zip_code"
    )
    @classmethod
    def require_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("This field is required")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        local, _, domain = v.partition("@")
        if not local or "." not in domain or " " in v:
            raise ValueError("Please enter a valid email address")
        return v

    @field_validator("category")
    @classmethod
    def resolve_category(cls, v: str) -> str:
        v = v.strip()
        category = find_category_by_id(int(v)) if v.isdigit() else find_category(v)
        if category is None:
            raise ValueError(f"Unknown category {v!r}")
        return str(category["name"])


class BusinessSubmitted(BaseModel):
    id: str
    status: str
    verified: bool
    message: Optional[str] = None

