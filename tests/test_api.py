"""Tests for the HTTP surface."""

import sqlite3

import pytest

from pride_directory_api.app.core.db import get_connection
from pride_directory_api.app.services import business_service, event_service


def _business_count():
    conn = get_connection()
    try:
        return conn.execute("SELECT COUNT(*) FROM businesses").fetchone()[0]
    finally:
        conn.close()


@pytest.fixture
def listing_form():
    return {
        "business_name": "Rainbow Bakery",
        "category": "Restaurants & Food Services",
        "description": "Fresh bread and pastries",
        "phone": "555-123-4567",
        "email": "hello@rainbow.example",
        "address": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "social_media": {"instagram": "@rainbowbakery"},
    }


@pytest.fixture
def auth_headers(client):
    response = client.post(
        "/api/v1/users/",
        json={"email": "Owner@Example.com", "password": "correct horse", "full_name": "Sam Owner"},
    )
    assert response.status_code == 201
    response = client.post("/api/v1/users/login", json={"email": "owner@example.com", "password": "correct horse"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert "version" in data


def test_category_grid(client, add_business):
    add_business("Shop", categories=["Retail & Shopping"])
    response = client.get("/api/v1/categories/")
    assert response.status_code == 200
    categories = response.json()["categories"]
    assert len(categories) == 14
    retail = next(c for c in categories if c["name"] == "Retail & Shopping")
    assert retail["count"] == 1


def test_category_page(client, add_business):
    add_business("B Corp", categories=["Automotive"])
    add_business("A Corp", categories=["Automotive"])
    response = client.get("/api/v1/categories/automotive/businesses")
    assert response.status_code == 200
    data = response.json()
    assert data["category"]["name"] == "Automotive"
    assert [b["business_name"] for b in data["businesses"]] == ["A Corp", "B Corp"]


def test_unknown_category_is_not_found(client):
    response = client.get("/api/v1/categories/spaceships/businesses")
    assert response.status_code == 404
    assert response.json()["detail"] == "Category not found"
    assert client.get("/api/v1/categories/spaceships").status_code == 404


def test_search_with_location_fallback(client, add_business):
    add_business("Sweet Rolls Bakery", city="Portland", state="OR")
    add_business("Hardware Hub", city="Portland", state="OR")
    response = client.get("/api/v1/search/", params={"q": "bakery", "location": "Nowhereville"})
    assert response.status_code == 200
    data = response.json()
    assert data["location_fallback"] is True
    assert [b["business_name"] for b in data["businesses"]] == ["Sweet Rolls Bakery"]


def test_featured_endpoint(client, add_business):
    add_business("Old", created_at="2024-01-01T00:00:00.000Z")
    add_business("New", created_at="2025-01-01T00:00:00.000Z")
    response = client.get("/api/v1/businesses/featured")
    assert response.status_code == 200
    data = response.json()
    assert data["error"] is None
    assert [b["business_name"] for b in data["businesses"]] == ["New", "Old"]


def test_business_detail_redirects_to_canonical_slug(client, add_business):
    business_id = add_business("Queer Coffee Co")
    response = client.get(f"/api/v1/businesses/{business_id}/old-name", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"].endswith(f"/api/v1/businesses/{business_id}/queer-coffee-co")

    response = client.get(f"/api/v1/businesses/{business_id}/queer-coffee-co")
    assert response.status_code == 200
    assert response.json()["business"]["slug"] == "queer-coffee-co"


def test_business_detail_not_found(client):
    response = client.get("/api/v1/businesses/missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Business not found"


def test_submit_without_token_is_rejected(client, listing_form):
    response = client.post("/api/v1/businesses/", json=listing_form)
    assert response.status_code == 401
    assert response.json()["detail"] == "You must be signed in to list a business"
    assert _business_count() == 0


def test_submit_with_invalid_token_is_rejected(client, listing_form):
    response = client.post("/api/v1/businesses/", json=listing_form, headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert _business_count() == 0


def test_submit_listing(client, listing_form, auth_headers):
    response = client.post("/api/v1/businesses/", json=listing_form, headers=auth_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["verified"] is False

    detail = client.get(f"/api/v1/businesses/{data['id']}").json()["business"]
    assert detail["status"] == "pending"
    assert detail["categories"] == ["Restaurants & Food Services"]
    assert detail["social_media"]["instagram"] == "@rainbowbakery"
    assert detail["zip_code"] == "62701"


def test_submit_missing_required_field(client, listing_form, auth_headers):
    listing_form["phone"] = "  "
    response = client.post("/api/v1/businesses/", json=listing_form, headers=auth_headers)
    assert response.status_code == 422
    assert _business_count() == 0


def test_duplicate_registration_conflicts(client, auth_headers):
    response = client.post("/api/v1/users/", json={"email": "owner@example.com", "password": "another pass"})
    assert response.status_code == 409


def test_login_with_wrong_password(client, auth_headers):
    response = client.post("/api/v1/users/login", json={"email": "owner@example.com", "password": "wrong pass"})
    assert response.status_code == 401


def test_current_user(client, auth_headers):
    response = client.get("/api/v1/users/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "owner@example.com"
    assert client.get("/api/v1/users/me").status_code == 401


def test_event_endpoints(client, add_event):
    event_id = add_event("Pride Parade", date="2099-06-28", price="5")
    response = client.get("/api/v1/events/upcoming")
    assert response.status_code == 200
    assert [e["title"] for e in response.json()["events"]] == ["Pride Parade"]

    response = client.get(f"/api/v1/events/{event_id}")
    assert response.status_code == 200
    assert response.json()["price_label"] == "$5.00"
    assert client.get("/api/v1/events/missing").status_code == 404


def test_business_detail_without_slug_redirects(client, add_business):
    business_id = add_business("Queer Coffee Co")
    response = client.get(f"/api/v1/businesses/{business_id}", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"].endswith(f"/api/v1/businesses/{business_id}/queer-coffee-co")


@pytest.mark.parametrize("name", ["東京ラーメン", "!!!", "🌈"])
def test_business_detail_name_without_ascii_slug(client, add_business, name):
    business_id = add_business(name)
    response = client.get(f"/api/v1/businesses/{business_id}/anything", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"].endswith(f"/api/v1/businesses/{business_id}/business")

    response = client.get(f"/api/v1/businesses/{business_id}/business")
    assert response.status_code == 200
    assert response.json()["business"]["business_name"] == name


def _broken_connection():
    raise sqlite3.OperationalError("unable to open database file")


def test_business_detail_store_failure(client, add_business, monkeypatch):
    business_id = add_business("Queer Coffee Co")
    monkeypatch.setattr(business_service, "get_connection", _broken_connection)
    response = client.get(f"/api/v1/businesses/{business_id}/queer-coffee-co")
    assert response.status_code == 503
    assert response.json()["detail"] == "Failed to load business details"


def test_event_detail_store_failure(client, add_event, monkeypatch):
    event_id = add_event("Pride Parade", date="2099-06-28")
    monkeypatch.setattr(event_service, "get_connection", _broken_connection)
    response = client.get(f"/api/v1/events/{event_id}")
    assert response.status_code == 503
    assert response.json()["detail"] == "Failed to load event details"


def test_my_listings(client, listing_form, auth_headers, add_business):
    add_business("Someone Else's Shop", userId="999")
    client.post("/api/v1/businesses/", json=listing_form, headers=auth_headers)
    client.post("/api/v1/businesses/", json={**listing_form, "business_name": "Aardvark Books"}, headers=auth_headers)

    response = client.get("/api/v1/businesses/mine", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert [b["business_name"] for b in data["businesses"]] == ["Aardvark Books", "Rainbow Bakery"]


def test_my_listings_requires_token(client):
    assert client.get("/api/v1/businesses/mine").status_code == 401
