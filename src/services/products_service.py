"""Products service: catalog CRUD."""

import logging
from typing import Any

from domain.model.errors import ProductNotFoundError
from domain.model.product import PRODUCT_FIELDS, Product
from port.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductsService:
    def __init__(self, repo: ProductRepository):
        self.repo = repo

    async def create(self, fields: dict[str, Any]) -> Product:
        product = await self.repo.create(fields)
        logger.info("Product created", extra={"productId": product.id})
        return product

    async def find_all(self) -> list[Product]:
        return await self.repo.find_all()

    async def find_one(self, product_id: int) -> Product:
        product = await self.repo.get_by_id(product_id)
        if not product:
            raise ProductNotFoundError()
        return product

    async def update(self, product_id: int, fields: dict[str, Any]) -> Product:
        """Merge the catalog fields present in ``fields`` onto the stored product."""
        product = await self.find_one(product_id)
        for name in PRODUCT_FIELDS:
            if name in fields:
                setattr(product, name, fields[name])
        return await self.repo.save(product)

    async def remove(self, product_id: int) -> None:
        product = await self.find_one(product_id)
        await self.repo.remove(product)
        logger.info("Product removed", extra={"productId": product_id})
