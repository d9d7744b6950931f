from __future__ import annotations

from copy import deepcopy
from typing import Any

# Content a freshly added section starts with; stored content is layered on top.
SECTION_DEFAULTS: dict[str, dict[str, Any]] = {
    "hero": {
        "title": "Welcome to my store",
        "subtitle": "Discover my favorite products",
        "image": "",
        "buttonText": "Shop Now",
        "buttonLink": "#products",
    },
    "featured-products": {"title": "Featured Products", "productIds": [], "layout": "grid", "columns": 3},
    "category-showcase": {"title": "Shop by Category", "categories": [], "layout": "grid"},
    "testimonials": {"title": "What Our Customers Say", "testimonials": []},
    "newsletter": {
        "title": "Subscribe to our newsletter",
        "description": "Get the latest updates and exclusive offers",
        "buttonText": "Subscribe",
    },
    "social-feed": {"title": "Follow Us", "platform": "instagram", "username": "", "postCount": 6},
    "brand-showcase": {"title": "Brands I Love", "brands": [], "layout": "carousel"},
    "faq": {"title": "Frequently Asked Questions", "faqs": []},
    "contact": {"title": "Contact Us", "email": "", "phone": "", "address": "", "showMap": False},
    "custom-html": {"html": ""},
}

SECTION_TYPES = tuple(SECTION_DEFAULTS)


def section_defaults(section_type: str) -> dict[str, Any]:
    return deepcopy(SECTION_DEFAULTS.get(section_type, {}))
