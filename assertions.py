"""
Reusable checks over already-fetched product data.

Every helper is synchronous and side-effect free apart from raising
AssertionError (via PyHamcrest) with a reason naming the broken rule.
"""
from datetime import datetime
from typing import Iterable, Mapping

from hamcrest import (
    all_of,
    any_of,
    assert_that,
    contains_string,
    equal_to,
    greater_than,
    greater_than_or_equal_to,
    has_key,
    has_length,
    instance_of,
    is_,
    is_not,
    less_than_or_equal_to,
    matches_regexp,
    not_none,
)

from products_api import CategoryRef, category_slug

URL_PATTERN = r"^https?://.+"


def _integer():
    # bool is an int subclass; JSON true/false never count as numbers here
    return all_of(instance_of(int), is_not(instance_of(bool)))


def _number():
    return all_of(any_of(instance_of(int), instance_of(float)), is_not(instance_of(bool)))


def _non_empty_string():
    return all_of(instance_of(str), has_length(greater_than(0)))


def _number_between(low, high):
    return all_of(_number(), greater_than_or_equal_to(low), less_than_or_equal_to(high))


def assert_valid_product(product: Mapping) -> None:
    """Assert that a product has all required fields with sane values."""
    assert_that(product, all_of(not_none(), instance_of(dict)), "product must be a JSON object")
    pid = product.get("id")
    label = f"product {pid}"

    assert_that(pid, all_of(_integer(), greater_than(0)), f"{label}: id must be a positive integer")
    assert_that(product.get("title"), _non_empty_string(), f"{label}: title must be a non-empty string")
    assert_that(product.get("description"), _non_empty_string(),
                f"{label}: description must be a non-empty string")
    assert_that(product.get("price"), all_of(_number(), greater_than(0)),
                f"{label}: price must be a positive number")
    assert_that(product.get("discountPercentage"), _number_between(0, 100),
                f"{label}: discountPercentage must be within 0-100")
    assert_that(product.get("rating"), _number_between(0, 5), f"{label}: rating must be within 0-5")
    assert_that(product.get("stock"), all_of(_integer(), greater_than_or_equal_to(0)),
                f"{label}: stock must be a non-negative integer")
    # Brand is optional in some products
    if product.get("brand") is not None:
        assert_that(product["brand"], _non_empty_string(), f"{label}: brand, when present, must be non-empty")
    assert_that(product.get("category"), _non_empty_string(), f"{label}: category must be a non-empty string")
    assert_that(product.get("thumbnail"), all_of(instance_of(str), matches_regexp(URL_PATTERN)),
                f"{label}: thumbnail must be an http(s) URL")
    assert_that(product.get("images"), instance_of(list), f"{label}: images must be a list")
    for image in product["images"]:
        assert_that(image, all_of(instance_of(str), matches_regexp(URL_PATTERN)),
                    f"{label}: every image must be an http(s) URL")


def assert_valid_products_response(response: Mapping) -> None:
    """
    Assert that a listing envelope is well formed and non-empty overall.

    Not for deliberately empty results (no-match searches): those assert
    emptiness directly because total > 0 is part of this check.
    """
    assert_that(response, all_of(not_none(), instance_of(dict)), "listing must be a JSON object")
    assert_that(response.get("products"), instance_of(list), "listing.products must be a list")
    assert_that(response.get("total"), all_of(_integer(), greater_than(0)), "listing.total must be > 0")
    assert_that(response.get("skip"), all_of(_integer(), greater_than_or_equal_to(0)),
                "listing.skip must be >= 0")
    assert_that(response.get("limit"), all_of(_integer(), greater_than(0)), "listing.limit must be > 0")
    assert_that(len(response["products"]), less_than_or_equal_to(response["limit"]),
                "listing must not return more products than its limit")


def assert_pagination(response: Mapping, expected_skip: int, expected_limit: int) -> None:
    assert_that(response.get("skip"), equal_to(expected_skip), "listing.skip must echo the requested skip")
    assert_that(response.get("limit"), equal_to(expected_limit), "listing.limit must echo the requested limit")
    assert_that(len(response.get("products", [])), less_than_or_equal_to(expected_limit),
                "page must not exceed the requested limit")


def assert_products_in_category(products: Iterable[Mapping], category: CategoryRef) -> None:
    """Every product must carry exactly the requested category (case-sensitive)."""
    expected = category_slug(category)
    for product in products:
        assert_that(product.get("category"), equal_to(expected),
                    f"product {product.get('id')} is outside category '{expected}'")


def assert_products_match_search(products: Iterable[Mapping], search_term: str) -> None:
    """Each product must contain the term in its title, description or brand (case-insensitive)."""
    term = search_term.lower()
    for product in products:
        fields = (product.get("title"), product.get("description"), product.get("brand"))
        matched = any(isinstance(value, str) and term in value.lower() for value in fields)
        assert_that(matched, is_(True),
                    f"product {product.get('id')} ({product.get('title')!r}) does not mention '{search_term}'")


def assert_products_match(actual: Mapping, expected: Mapping) -> None:
    """
    Assert that every field present in `expected` has the same value in `actual`.

    Presence, not truthiness, decides what is checked: {"price": 0} is compared,
    a key that is absent from `expected` is not.
    """
    for field, value in expected.items():
        assert_that(actual, has_key(field), f"response is missing updated field '{field}'")
        assert_that(actual[field], equal_to(value), f"field '{field}' was not applied")


def assert_valid_category(category: CategoryRef) -> None:
    """A category is either a trimmed non-empty string or a {slug, name, url} record."""
    if isinstance(category, str):
        assert_that(category, has_length(greater_than(0)), "category name must not be empty")
        assert_that(category.strip(), equal_to(category), "category name must not have surrounding spaces")
        return

    assert_that(category, instance_of(dict), "category must be a string or an object")
    for field in ("slug", "name", "url"):
        assert_that(category.get(field), _non_empty_string(), f"category.{field} must be a non-empty string")


def assert_deleted_product(result: Mapping, product_id: int) -> None:
    assert_that(result.get("id"), equal_to(product_id), "deleted product id must match the request")
    assert_that(result.get("isDeleted"), is_(True), "isDeleted must be true")
    deleted_on = result.get("deletedOn")
    assert_that(deleted_on, instance_of(str), "deletedOn must be a string")
    try:
        datetime.fromisoformat(deleted_on)
    except ValueError:
        raise AssertionError(f"deletedOn is not an ISO-8601 timestamp: {deleted_on!r}") from None


def assert_json_content_type(headers: Mapping[str, str]) -> None:
    assert_that(headers.get("content-type", ""), contains_string("application/json"),
                "response must be served as application/json")
