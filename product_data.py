"""
Static and generated input values for the products tests.
"""
import random
import time
from urllib.parse import urlparse

# Sample product data for creates
SAMPLE_PRODUCT = {
    "title": "Test Product",
    "description": "This is a test product for API testing",
    "price": 99.99,
    "discountPercentage": 10.5,
    "rating": 4.5,
    "stock": 100,
    "brand": "Test Brand",
    "category": "smartphones",
}

# Full-ish update (PUT)
PRODUCT_UPDATE = {
    "title": "Updated Product Title",
    "price": 149.99,
    "rating": 4.8,
}

# Single-field update (PATCH)
PARTIAL_UPDATE = {
    "price": 199.99,
}

# Negative testing
INVALID_PRODUCT = {
    "title": "",
    "price": -10,
}

TEST_CATEGORIES = [
    "smartphones",
    "laptops",
    "fragrances",
    "skin-care",
    "groceries",
]

SEARCH_QUERIES = {
    "valid": "phone",
    "noResults": "xyznonexistent123",
    "partial": "sam",
    "multiWord": "iPhone 13",
}

SPECIAL_CHARACTERS = ["@", "#", "$", "%", "&", "*"]

LONG_QUERY = "a" * 200

KNOWN_PRODUCT_IDS = {
    "valid": 1,
    "invalid": 999999,
    "boundary": 0,
}

PAGINATION_DATA = {
    "defaultLimit": 30,
    "customLimit": 10,
    "largeLimit": 100,
    "skipFirst": 10,
    "skipSecond": 20,
}

RESPONSE_TIME_THRESHOLD_MS = 2000

_ADJECTIVES = ["Amazing", "Premium", "Professional", "Deluxe", "Ultimate"]
_NOUNS = ["Gadget", "Device", "Product", "Item", "Tool"]


def random_product_title() -> str:
    """e.g. 'Deluxe Gadget 1718000000000'; the timestamp keeps titles unique per run."""
    return f"{random.choice(_ADJECTIVES)} {random.choice(_NOUNS)} {int(time.time() * 1000)}"


def random_price(min_price: float = 10, max_price: float = 1000) -> float:
    return round(random.uniform(min_price, max_price), 2)


def random_stock(min_stock: int = 0, max_stock: int = 200) -> int:
    return random.randint(min_stock, max_stock)


def random_rating() -> float:
    return round(random.uniform(0, 5), 1)


def build_product_payload(**overrides) -> dict:
    """SAMPLE_PRODUCT with a fresh title/price, then any explicit overrides."""
    payload = {
        **SAMPLE_PRODUCT,
        "title": random_product_title(),
        "price": random_price(),
    }
    payload.update(overrides)
    return payload


def is_valid_url(url) -> bool:
    if not isinstance(url, str):
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def sanitize_string(value: str) -> str:
    return value.strip().lower()


def is_response_time_acceptable(response_time_ms: float, threshold: float = RESPONSE_TIME_THRESHOLD_MS) -> bool:
    return response_time_ms < threshold
