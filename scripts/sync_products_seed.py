#!/usr/bin/env python3
"""
Refresh the emulator catalogue (data/products.json) from the live products API.

Usage:
  python scripts/sync_products_seed.py

Optional env vars:
  BASE_URL=https://dummyjson.com
  SEED_CATEGORIES=beauty,fragrances,groceries,home-decoration,laptops,skin-care,smartphones
  OUTPUT_PATH=data/products.json
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import requests

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

import schemas  # noqa: E402
from schema_validator import SchemaValidationError, validate_response_schema  # noqa: E402

# Fields the emulator and the assertions rely on; the live API carries many more.
KEPT_FIELDS = (
    "id", "title", "description", "price", "discountPercentage", "rating",
    "stock", "brand", "category", "thumbnail", "images",
)

# Every category the scenario tests filter or search on; each is pulled whole.
DEFAULT_CATEGORIES = "beauty,fragrances,groceries,home-decoration,laptops,skin-care,smartphones"


def fetch_category(base_url: str, slug: str) -> list[dict]:
    """Fetch every product of one category (limit=0 lifts the page size)."""
    resp = requests.get(
        f"{base_url.rstrip('/')}/products/category/{slug}",
        params={"limit": 0},
        headers={"Accept": "application/json"},
        timeout=30,
    )
    resp.raise_for_status()

    data = resp.json()
    if not isinstance(data, dict) or not isinstance(data.get("products"), list):
        raise RuntimeError(f"Listing for '{slug}' missing 'products'. Got: {str(data)[:200]}")
    if not data["products"]:
        raise RuntimeError(f"Category '{slug}' is empty on the live service")
    return data["products"]


def fetch_products(base_url: str, categories: list[str]) -> list[dict]:
    products = []
    for slug in categories:
        products.extend(fetch_category(base_url, slug))
    return products


def trim_product(product: dict) -> dict:
    return {key: product[key] for key in KEPT_FIELDS if key in product}


def build_seed(products: list[dict]) -> dict:
    """Trim every product, validate it against the product contract and wrap it as a listing."""
    trimmed = [trim_product(p) for p in sorted(products, key=lambda p: p["id"])]
    for product in trimmed:
        validate_response_schema(product, schemas.product)
    return {"products": trimmed, "total": len(trimmed), "skip": 0, "limit": len(trimmed)}


def write_file(path: Path, seed: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(seed, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def main() -> int:
    base_url = os.getenv("BASE_URL", "https://dummyjson.com")
    categories = [c.strip() for c in os.getenv("SEED_CATEGORIES", DEFAULT_CATEGORIES).split(",") if c.strip()]
    output_path = Path(os.getenv("OUTPUT_PATH", str(ROOT / "data" / "products.json")))

    try:
        seed = build_seed(fetch_products(base_url, categories))
        write_file(output_path, seed)

        print(f"✅ Fetched {seed['total']} products from {base_url}")
        print(f"✅ Wrote: {output_path}")
        return 0

    except requests.RequestException as e:
        print(f"❌ HTTP error calling {base_url}: {e}", file=sys.stderr)
        return 2
    except SchemaValidationError as e:
        print(f"❌ Live product breaks the product contract:\n{e}", file=sys.stderr)
        return 3
    except (RuntimeError, KeyError, ValueError) as e:
        print(f"❌ Failed to build the seed: {e}", file=sys.stderr)
        return 4


if __name__ == "__main__":
    raise SystemExit(main())


"""
Why this exists:

The local emulator answers from a frozen copy of the catalogue, so the suite runs
offline and deterministically. When the live service changes its data, this script
pulls every product of the categories the tests rely on, checks each one against
data/schemas/product.schema.json and rewrites the snapshot. A product that breaks
the contract aborts the sync instead of landing in the seed.
"""
