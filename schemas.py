"""
JSON Schema contracts for the products API.

The documents live in data/schemas/*.schema.json so they can be shared with
other tooling; they are loaded once here and treated as read-only afterwards.
"""
from types import MappingProxyType

from load_data import load_schema_documents

_DOCUMENTS = load_schema_documents()

product = _DOCUMENTS["product"]

products_response = _DOCUMENTS["products_response"]

category = _DOCUMENTS["category"]

deleted_product = _DOCUMENTS["deleted_product"]

ALL = MappingProxyType(_DOCUMENTS)
