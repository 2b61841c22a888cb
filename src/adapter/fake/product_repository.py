"""In-memory implementation of ProductRepository for testing."""

import itertools
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from domain.model.product import PRODUCT_FIELDS, Product


class FakeProductRepository:
    def __init__(self):
        self.store: dict[int, Product] = {}
        self._ids = itertools.count(1)

    async def create(self, fields: dict[str, Any]) -> Product:
        now = datetime.now(timezone.utc)
        attrs = {k: v for k, v in fields.items() if k in PRODUCT_FIELDS}
        product = Product(id=next(self._ids), created_at=now, updated_at=now, **attrs)
        self.store[product.id] = product
        return replace(product)

    async def save(self, product: Product) -> Product:
        stored = replace(product, updated_at=datetime.now(timezone.utc))
        self.store[product.id] = stored
        return replace(stored)

    async def remove(self, product: Product) -> None:
        self.store.pop(product.id, None)

    async def get_by_id(self, product_id: int) -> Product | None:
        product = self.store.get(product_id)
        return replace(product) if product else None

    async def find_all(self) -> list[Product]:
        return [replace(p) for p in self.store.values()]
