"""Catalog lookup used while authoring combos.

A combo is transacted as an existing catalog product. The catalog is only
consulted to offer and check that link; combo pricing never reads catalog
prices.
"""

import json
from pathlib import Path
from typing import Protocol

from .models import CatalogProduct


class CatalogLookup(Protocol):
    def get_product(self, product_id: str) -> CatalogProduct | None: ...

    def list_products(self) -> list[CatalogProduct]: ...


class JsonCatalog:
    def __init__(self, products: list[CatalogProduct]) -> None:
        self._products = list(products)
        self._by_id = {product.id: product for product in self._products}

    def get_product(self, product_id: str) -> CatalogProduct | None:
        return self._by_id.get(product_id)

    def list_products(self) -> list[CatalogProduct]:
        return list(self._products)

    @classmethod
    def from_dict(cls, data: dict) -> "JsonCatalog":
        """Load from a dictionary shaped like `{"products": [...]}`."""
        return cls([CatalogProduct(**item) for item in data.get("products", [])])

    @classmethod
    def from_json_file(cls, path: str | Path) -> "JsonCatalog":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)
