"""
Business logic for business listings.

Every listing view follows the same pipeline: query the store,
normalise each raw document into a ``BusinessTile`` (dropping records
without a usable name), deduplicate by document id and sort.  The
helpers below implement those steps once; the ``BusinessService``
methods differ only in the store query and the final ordering.

Store failures never escape a listing method.  They are logged and
returned as an inline ``error`` with an empty list.  The featured
listing is the one view that retries before giving up.
"""

from __future__ import annotations

import asyncio
import logging
import re
import sqlite3
import unicodedata
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from pride_directory_api.app.core.config import settings
from pride_directory_api.app.core.db import Document, get_connection, insert_document, load_document
from pride_directory_api.app.data.categories import (
    DEFAULT_IMAGE,
    UNCATEGORIZED,
    find_category,
    get_category_image,
)
from pride_directory_api.app.schemas.business import (
    BusinessCreate,
    BusinessDetail,
    BusinessListing,
    BusinessRead,
    BusinessSubmitted,
    BusinessTile,
    CategoryBusinesses,
    FeaturedBusinesses,
    SocialMedia,
)
from pride_directory_api.app.schemas.category import CategoryRead

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load businesses"
DETAIL_ERROR = "Failed to load business details"
SUBMIT_ERROR = "Failed to submit business listing"
AUTH_ERROR = "You must be signed in to list a business"

# Tiers that do not show competitors on their detail page.
NO_RELATED_TIERS = {"premium", "elite"}

_SLUG_RE = re.compile(r"[^a-z0-9]+")
DEFAULT_SLUG = "business"


def make_slug(name: str) -> str:
    """URL slug for a business name: ``"Rainbow Café & Bar"`` -> ``"rainbow-cafe-bar"``.

    Names with no ASCII letters or digits get ``DEFAULT_SLUG`` so the
    canonical URL always has a non-empty last segment.
    """
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return _SLUG_RE.sub("-", folded.lower()).strip("-") or DEFAULT_SLUG


def name_sort_key(name: str) -> Tuple[str, str]:
    """Collation key approximating a locale-aware comparison.

    Accents and case are ignored first; the raw name breaks ties so the
    order is total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def timestamp_millis(value: Any) -> int:
    """Milliseconds since the epoch for an ISO timestamp, or 0 if unusable."""
    if not isinstance(value, str) or not value:
        return 0
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return 0
    return int(parsed.timestamp() * 1000)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _number(value: Any) -> Optional[float]:
    # bool is an int subclass but never a rating
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def document_categories(data: Dict[str, Any]) -> List[str]:
    """Category names of a document: the list field, else the legacy single field."""
    categories = data.get("categories")
    if isinstance(categories, list):
        return [c for c in categories if isinstance(c, str)]
    legacy = data.get("category")
    return [legacy if isinstance(legacy, str) and legacy else UNCATEGORIZED]


def cover_image_for(cover_image: str, categories: Sequence[str]) -> str:
    if cover_image:
        return cover_image
    if categories:
        return get_category_image(categories[0])
    return DEFAULT_IMAGE


def normalize_business(doc: Document) -> Optional[BusinessTile]:
    """Map a raw business document to a tile, or ``None`` if it has no name."""
    return _normalize(doc, BusinessTile)


def normalize_business_detail(doc: Document) -> Optional[BusinessRead]:
    data = doc.data
    social = data.get("socialMedia") if isinstance(data.get("socialMedia"), dict) else {}
    return _normalize(
        doc,
        BusinessRead,
        website=_text(data.get("website")),
        phone=_text(data.get("phone")),
        email=_text(data.get("email")),
        address=_text(data.get("address")),
        zip_code=_text(data.get("zipCode")),
        social_media=SocialMedia(**{k: _text(social.get(k)) for k in SocialMedia.model_fields}),
        status=data.get("status") if isinstance(data.get("status"), str) else None,
        tier=data.get("tier") if isinstance(data.get("tier"), str) else None,
    )


def _normalize(doc: Document, model, **extra):
    data = doc.data
    name = data.get("businessName")
    if not isinstance(name, str) or not name.strip():
        return None
    categories = document_categories(data)
    rating_count = _number(data.get("ratingCount"))
    return model(
        id=doc.id,
        business_name=name,
        categories=categories,
        description=_text(data.get("description")),
        city=_text(data.get("city")),
        state=_text(data.get("state")),
        cover_image=cover_image_for(_text(data.get("coverImage")), categories),
        rating=_number(data.get("rating")),
        rating_count=int(rating_count) if rating_count is not None else None,
        verified=bool(data.get("verified", False)),
        welcome_lgbtq=bool(data.get("welcomeLGBTQ", False)),
        lgbtq_friendly_staff=bool(data.get("lgbtqFriendlyStaff", False)),
        lgbtq_owned=bool(data.get("lgbtqOwned", False)),
        safe_environment=bool(data.get("safeEnvironment", False)),
        slug=make_slug(name),
        created_at=doc.created_at,
        **extra,
    )


def collect_tiles(docs: Iterable[Document]) -> List[BusinessTile]:
    """Normalise documents and deduplicate by id.

    The keyed map is filled in document order, so a later duplicate
    replaces an earlier one but keeps the earlier position.
    """
    tiles: Dict[str, BusinessTile] = {}
    for doc in docs:
        tile = normalize_business(doc)
        if tile is not None:
            tiles[doc.id] = tile
    return list(tiles.values())


def sort_by_name(tiles: List[BusinessTile]) -> List[BusinessTile]:
    return sorted(tiles, key=lambda t: name_sort_key(t.business_name))


def _category_match_sql(count: int) -> str:
    """WHERE fragment matching documents that list any of ``count`` category names."""
    placeholders = ", ".join("?" * count)
    return (
        "((json_type(businesses.data, '$.categories') = 'array' AND EXISTS ("
        "SELECT 1 FROM json_each(businesses.data, '$.categories') AS c "
        f"WHERE c.value IN ({placeholders})))"
        " OR (json_type(businesses.data, '$.categories') IS NOT 'array'"
        f" AND json_extract(businesses.data, '$.category') IN ({placeholders})))"
    )


class BusinessService:
    """Read and write operations on the ``businesses`` collection."""

    @classmethod
    async def fetch_all_documents(cls) -> List[Document]:
        """Read every business document.  Store errors propagate."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, data, created_at FROM businesses ORDER BY rowid"
            ).fetchall()
            return [load_document(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def fetch_category_documents(cls, category_names: Sequence[str], exclude_id: Optional[str] = None) -> List[Document]:
        """Read documents listing any of ``category_names``."""
        names = list(category_names)
        if not names:
            return []
        query = f"SELECT id, data, created_at FROM businesses WHERE {_category_match_sql(len(names))}"
        params: List[Any] = names + names
        if exclude_id is not None:
            query += " AND id != ?"
            params.append(exclude_id)
        query += " ORDER BY rowid"
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [load_document(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_category_businesses(cls, category_name: str) -> CategoryBusinesses:
        """Businesses in one category, sorted by name.

        Raises ``ValueError`` if the category is not in the static list.
        """
        category = find_category(category_name)
        if category is None:
            raise ValueError("Category not found")
        category_read = CategoryRead(**category)
        try:
            docs = await cls.fetch_category_documents([category_read.name])
        except sqlite3.Error:
            logger.exception("Error fetching businesses for category %s", category_read.name)
            return CategoryBusinesses(category=category_read, error=LOAD_ERROR)
        tiles = sort_by_name(collect_tiles(docs))
        return CategoryBusinesses(category=category_read, businesses=tiles, count=len(tiles))

    @classmethod
    async def _fetch_recent_documents(cls, limit: int) -> List[Document]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, data, created_at FROM businesses ORDER BY created_at DESC LIMIT ?",
                (limit,),
            ).fetchall()
            return [load_document(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    async def _sleep(seconds: float) -> None:
        await asyncio.sleep(seconds)

    @classmethod
    async def list_featured_businesses(cls) -> FeaturedBusinesses:
        """Newest listings for the landing page, retried on store failure.

        After a failed attempt ``n`` (1-based) the fetch is repeated after
        ``n * featured_retry_backoff_seconds``, at most
        ``featured_retry_limit`` times.  Tiles are re-sorted by creation
        time; a tile without a parseable timestamp sorts last and keeps
        its fetch position.
        """
        retries = 0
        while True:
            try:
                docs = await cls._fetch_recent_documents(settings.featured_query_limit)
                break
            except sqlite3.Error:
                logger.exception("Error fetching featured businesses (attempt %d)", retries + 1)
                if retries >= settings.featured_retry_limit:
                    return FeaturedBusinesses(error=LOAD_ERROR, retries=retries)
                retries += 1
                delay = settings.featured_retry_backoff_seconds * retries
                logger.info("Retrying featured businesses in %.1f seconds", delay)
                await cls._sleep(delay)

        tiles = collect_tiles(docs)
        tiles.sort(key=lambda t: timestamp_millis(t.created_at), reverse=True)
        tiles = tiles[: settings.featured_limit]
        return FeaturedBusinesses(businesses=tiles, count=len(tiles), retries=retries)

    @classmethod
    async def get_business(cls, business_id: str) -> BusinessDetail:
        """Retrieve a business with up to ``related_limit`` related listings.

        Raises ``ValueError`` if the document does not exist or has no
        name.  Store errors propagate to the caller.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, data, created_at FROM businesses WHERE id = ?",
                (business_id,),
            ).fetchone()
        finally:
            conn.close()
        business = normalize_business_detail(load_document(row)) if row else None
        if business is None:
            raise ValueError("Business not found")

        related: List[BusinessTile] = []
        if (business.tier or "").lower() not in NO_RELATED_TIERS:
            docs = await cls.fetch_category_documents(business.categories, exclude_id=business.id)
            related = collect_tiles(docs)[: settings.related_limit]
        return BusinessDetail(business=business, related=related)

    @classmethod
    async def list_user_businesses(cls, current_user: Optional[dict]) -> BusinessListing:
        """Listings submitted by ``current_user``, sorted by name.

        Pending listings are included; nameless records are dropped as in
        every other listing.  Raises ``PermissionError`` without an
        identity.
        """
        if not current_user or current_user.get("user_id") is None:
            raise PermissionError("You must be signed in to view your listings")
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, data, created_at FROM businesses "
                "WHERE json_extract(data, '$.userId') = ? ORDER BY rowid",
                (str(current_user["user_id"]),),
            ).fetchall()
            docs = [load_document(row) for row in rows]
        except sqlite3.Error:
            logger.exception("Error fetching listings of user %s", current_user.get("sub"))
            return BusinessListing(error=LOAD_ERROR)
        finally:
            conn.close()
        tiles = sort_by_name(collect_tiles(docs))
        return BusinessListing(businesses=tiles, count=len(tiles))

    @classmethod
    async def submit_business(cls, data: BusinessCreate, current_user: Optional[dict]) -> BusinessSubmitted:
        """Create a pending, unverified listing owned by ``current_user``.

        Raises ``PermissionError`` when there is no authenticated identity
        (nothing is written) and re-raises ``sqlite3.Error`` on a failed
        insert.
        """
        if not current_user or current_user.get("user_id") is None:
            raise PermissionError(AUTH_ERROR)

        document = {
            "businessName": data.business_name,
            "category": data.category,
            "categories": [data.category],
            "description": data.description,
            "website": data.website.strip(),
            "phone": data.phone,
            "email": data.email,
            "address": data.address,
            "city": data.city,
            "state": data.state,
            "zipCode": data.zip_code,
            "socialMedia": data.social_media.model_dump(),
            "userId": str(current_user["user_id"]),
            "status": "pending",
            "verified": False,
        }
        conn = get_connection()
        try:
            doc_id = insert_document(conn.cursor(), "businesses", document)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            logger.exception("Error submitting business listing '%s'", data.business_name)
            raise
        finally:
            conn.close()
        logger.info("User %s submitted business %s (%s)", current_user.get("sub"), doc_id, data.business_name)
        return BusinessSubmitted(
            id=doc_id,
            status="pending",
            verified=False,
            message="Your listing has been submitted for review",
        )
