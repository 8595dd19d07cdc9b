"""
Static category reference list.

Categories are configuration, not store content: the list is fixed,
ordered by ``id`` and never written to.  Businesses refer to categories
by ``name``.
"""

from typing import Dict, List, Optional

DEFAULT_COLOR = "bg-gray-100 text-gray-800"
DEFAULT_IMAGE = "https://images.unsplash.com/photo-1486406146926-c627a92ad1ab?auto=format&fit=crop&q=80&w=1920"
UNCATEGORIZED = "Uncategorized"

CATEGORIES: List[Dict[str, object]] = [
    {
        "id": 1,
        "name": "Restaurants & Food Services",
        "description": "Restaurants, cafes, catering services, food trucks, and specialty food shops",
        "image": "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-orange-100 text-orange-800",
    },
    {
        "id": 2,
        "name": "Retail & Shopping",
        "description": "Boutiques, stores, markets, and specialty retail shops",
        "image": "https://images.unsplash.com/photo-1441986300917-64674bd600d8?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-blue-100 text-blue-800",
    },
    {
        "id": 3,
        "name": "Health & Medical Services",
        "description": "Healthcare providers, clinics, therapists, and wellness centers",
        "image": "https://images.unsplash.com/photo-1631217868264-e5b90bb7e133?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-green-100 text-green-800",
    },
    {
        "id": 4,
        "name": "Home Services",
        "description": "Plumbing, HVAC, electricians, and home maintenance services",
        "image": "https://images.unsplash.com/photo-1581578731548-c64695cc6952?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-yellow-100 text-yellow-800",
    },
    {
        "id": 5,
        "name": "Automotive",
        "description": "Auto repair, dealerships, car washes, and automotive services",
        "image": "https://images.unsplash.com/photo-1487754180451-c456f719a1fc?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-red-100 text-red-800",
    },
    {
        "id": 6,
        "name": "Beauty & Personal Care",
        "description": "Salons, barbershops, spas, and beauty services",
        "image": "https://images.unsplash.com/photo-1560066984-138dadb4c035?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-pink-100 text-pink-800",
    },
    {
        "id": 7,
        "name": "Professional Services",
        "description": "Lawyers, accountants, consultants, and business services",
        "image": "https://images.unsplash.com/photo-1454165804606-c3d57bc86b40?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-indigo-100 text-indigo-800",
    },
    {
        "id": 8,
        "name": "Real Estate",
        "description": "Real estate agents, property management, and housing services",
        "image": "https://images.unsplash.com/photo-1560518883-ce09059eeffa?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-cyan-100 text-cyan-800",
    },
    {
        "id": 9,
        "name": "Hotels & Hospitality",
        "description": "Hotels, motels, bed & breakfasts, and hospitality services",
        "image": "https://images.unsplash.com/photo-1566073771259-6a8506099945?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-purple-100 text-purple-800",
    },
    {
        "id": 10,
        "name": "Entertainment & Nightlife",
        "description": "Bars, clubs, theaters, and entertainment venues",
        "image": "https://images.unsplash.com/photo-1516450360452-9312f5e86fc7?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-rose-100 text-rose-800",
    },
    {
        "id": 11,
        "name": "Education & Training",
        "description": "Schools, tutoring services, and vocational training centers",
        "image": "https://images.unsplash.com/photo-1524178232363-1fb2b075b655?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-amber-100 text-amber-800",
    },
    {
        "id": 12,
        "name": "Fitness & Recreation",
        "description": "Gyms, yoga studios, and sports facilities",
        "image": "https://images.unsplash.com/photo-1534438327276-14e5300c3a48?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-lime-100 text-lime-800",
    },
    {
        "id": 13,
        "name": "Recreation or Sports Organization",
        "description": "Sports clubs, teams, leagues, and recreational organizations",
        "image": "https://images.unsplash.com/photo-1461896836934-ffe607ba8211?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-emerald-100 text-emerald-800",
    },
    {
        "id": 14,
        "name": "Community Organization",
        "description": "Nonprofits, charities, NGOs, and social service organizations",
        "image": "https://images.unsplash.com/photo-1559027615-cd4628902d4a?auto=format&fit=crop&q=80&w=1920",
        "color": "bg-teal-100 text-teal-800",
    },
]

CATEGORY_NAMES: List[str] = [str(c["name"]) for c in CATEGORIES]


def find_category(name: Optional[str]) -> Optional[Dict[str, object]]:
    """Return the category whose name matches ``name`` case-insensitively."""
    if not name:
        return None
    wanted = name.strip().lower()
    for category in CATEGORIES:
        if str(category["name"]).lower() == wanted:
            return category
    return None


def find_category_by_id(category_id: int) -> Optional[Dict[str, object]]:
    for category in CATEGORIES:
        if category["id"] == category_id:
            return category
    return None


def get_category_color(name: str) -> str:
    category = find_category(name)
    return str(category["color"]) if category else DEFAULT_COLOR


def get_category_image(name: str) -> str:
    category = find_category(name)
    return str(category["image"]) if category else DEFAULT_IMAGE
