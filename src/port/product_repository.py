"""Port definition for ProductRepository."""

from typing import Any, Protocol

from domain.model.product import Product


class ProductRepository(Protocol):
    async def create(self, fields: dict[str, Any]) -> Product: ...

    async def save(self, product: Product) -> Product: ...

    async def remove(self, product: Product) -> None: ...

    async def get_by_id(self, product_id: int) -> Product | None: ...

    async def find_all(self) -> list[Product]: ...
