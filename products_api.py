"""
Client for the DummyJSON products endpoints.

ProductsAPI drives an httpx.Client and AsyncProductsAPI an httpx.AsyncClient;
both expose the same operations and return api_helpers.ApiResponse envelopes.
The create/replace/patch/delete calls are simulated by the server and never
persisted, so nothing here assumes a later read reflects a write.
"""
from typing import Any, Dict, List, Optional, TypedDict, Union
from urllib.parse import quote

import httpx

from api_helpers import ApiResponse, build_async_client, build_client, make_request, make_request_async


class Product(TypedDict, total=False):
    id: int
    title: str
    description: str
    price: float
    discountPercentage: float
    rating: float
    stock: int
    brand: str
    category: str
    thumbnail: str
    images: List[str]


class ProductsResponse(TypedDict):
    products: List[Product]
    total: int
    skip: int
    limit: int


class Category(TypedDict):
    slug: str
    name: str
    url: str


CategoryRef = Union[str, Category, Dict[str, Any]]


def category_slug(category: CategoryRef) -> str:
    """Canonical identifier of a category: slug, else name, else the string itself."""
    if isinstance(category, str):
        return category
    return category.get("slug") or category.get("name") or ""


# (method, path, params, json) for every operation, shared by both clients.
def _list_products(limit: int, skip: int):
    return "GET", "/products", {"limit": limit, "skip": skip}, None


def _get_product(product_id):
    return "GET", f"/products/{product_id}", None, None


def _search_products(query: str):
    return "GET", "/products/search", {"q": query}, None


def _list_categories():
    return "GET", "/products/categories", None, None


def _list_category_slugs():
    return "GET", "/products/category-list", None, None


def _list_by_category(category: CategoryRef):
    return "GET", f"/products/category/{quote(category_slug(category), safe='')}", None, None


def _create_product(payload: dict):
    return "POST", "/products/add", None, payload


def _replace_product(product_id, payload: dict):
    return "PUT", f"/products/{product_id}", None, payload


def _patch_product(product_id, payload: dict):
    return "PATCH", f"/products/{product_id}", None, payload


def _delete_product(product_id):
    return "DELETE", f"/products/{product_id}", None, None


class ProductsAPI:
    """Synchronous products client. One instance per test; not shared."""

    def __init__(self, client: Optional[httpx.Client] = None, base_url: Optional[str] = None):
        self.client = client or build_client(base_url)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.client.close()

    def _send(self, method, path, params, json) -> ApiResponse:
        return make_request(self.client, method, path, params=params, json=json)

    def list_products(self, limit: int = 30, skip: int = 0) -> ApiResponse:
        """Get a page of products (server defaults: limit=30, skip=0)."""
        return self._send(*_list_products(limit, skip))

    def get_product(self, product_id) -> ApiResponse:
        """Get one product. An unknown id comes back as a non-2xx envelope."""
        return self._send(*_get_product(product_id))

    def search_products(self, query: str) -> ApiResponse:
        return self._send(*_search_products(query))

    def list_categories(self) -> ApiResponse:
        return self._send(*_list_categories())

    def list_category_slugs(self) -> ApiResponse:
        return self._send(*_list_category_slugs())

    def list_by_category(self, category: CategoryRef) -> ApiResponse:
        return self._send(*_list_by_category(category))

    def create_product(self, payload: dict) -> ApiResponse:
        return self._send(*_create_product(payload))

    def replace_product(self, product_id, payload: dict) -> ApiResponse:
        return self._send(*_replace_product(product_id, payload))

    def patch_product(self, product_id, payload: dict) -> ApiResponse:
        return self._send(*_patch_product(product_id, payload))

    def delete_product(self, product_id) -> ApiResponse:
        return self._send(*_delete_product(product_id))


class AsyncProductsAPI:
    """Awaitable products client with the same operations as ProductsAPI."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, base_url: Optional[str] = None):
        self.client = client or build_async_client(base_url)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self.client.aclose()

    async def _send(self, method, path, params, json) -> ApiResponse:
        return await make_request_async(self.client, method, path, params=params, json=json)

    async def list_products(self, limit: int = 30, skip: int = 0) -> ApiResponse:
        return await self._send(*_list_products(limit, skip))

    async def get_product(self, product_id) -> ApiResponse:
        return await self._send(*_get_product(product_id))

    async def search_products(self, query: str) -> ApiResponse:
        return await self._send(*_search_products(query))

    async def list_categories(self) -> ApiResponse:
        return await self._send(*_list_categories())

    async def list_category_slugs(self) -> ApiResponse:
        return await self._send(*_list_category_slugs())

    async def list_by_category(self, category: CategoryRef) -> ApiResponse:
        return await self._send(*_list_by_category(category))

    async def create_product(self, payload: dict) -> ApiResponse:
        return await self._send(*_create_product(payload))

    async def replace_product(self, product_id, payload: dict) -> ApiResponse:
        return await self._send(*_replace_product(product_id, payload))

    async def patch_product(self, product_id, payload: dict) -> ApiResponse:
        return await self._send(*_patch_product(product_id, payload))

    async def delete_product(self, product_id) -> ApiResponse:
        return await self._send(*_delete_product(product_id))
