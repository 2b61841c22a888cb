"""MongoDB implementation of ProductRepository."""

from datetime import datetime, timezone
from logging import getLogger
from typing import Any

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from adapter.mongodb import PRODUCTS_COLLECTION_NAME
from adapter.mongodb.sequences import next_id
from domain.model.product import PRODUCT_FIELDS, Product

logger = getLogger(__name__)


class MongoProductRepository:
    def __init__(self, db: AsyncDatabase):
        self.db = db
        self.collection = db[PRODUCTS_COLLECTION_NAME]

    async def ensure_indexes(self) -> bool:
        """Create indexes for products collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            await create_index_safe(self.collection, [('created_at', -1)], 'idx_products_created_at')
            return True
        except Exception as e:
            logger.error("Failed to create products indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Product:
        return Product(
            id=doc['_id'],
            name=doc['name'],
            price=doc['price'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            description=doc.get('description'),
            stock=doc.get('stock', 0),
        )

    # ── write operations ─────────────────────────────────────

    async def create(self, fields: dict[str, Any]) -> Product:
        try:
            now = datetime.now(timezone.utc)
            attrs = {k: v for k, v in fields.items() if k in PRODUCT_FIELDS}
            product = Product(
                id=await next_id(self.db, PRODUCTS_COLLECTION_NAME),
                created_at=now,
                updated_at=now,
                **attrs,
            )
            await self.collection.insert_one(self._to_document(product))
            return product
        except PyMongoError as e:
            logger.error("Failed to create product", extra={"error": str(e)})
            raise

    async def save(self, product: Product) -> Product:
        try:
            product.updated_at = datetime.now(timezone.utc)
            await self.collection.replace_one({'_id': product.id}, self._to_document(product))
            return product
        except PyMongoError as e:
            logger.error("Failed to save product", extra={"productId": product.id, "error": str(e)})
            raise

    async def remove(self, product: Product) -> None:
        try:
            await self.collection.delete_one({'_id': product.id})
        except PyMongoError as e:
            logger.error("Failed to remove product", extra={"productId": product.id, "error": str(e)})
            raise

    # ── read operations ──────────────────────────────────────

    async def get_by_id(self, product_id: int) -> Product | None:
        try:
            doc = await self.collection.find_one({'_id': product_id})
        except PyMongoError as e:
            logger.error("Failed to get product by ID", extra={"productId": product_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    async def find_all(self) -> list[Product]:
        try:
            docs = await self.collection.find({}).sort('_id', 1).to_list()
        except PyMongoError as e:
            logger.error("Failed to list products", extra={"error": str(e)})
            raise
        return [self._to_domain(doc) for doc in docs]

    @staticmethod
    def _to_document(product: Product) -> dict:
        return {
            '_id': product.id,
            'name': product.name,
            'price': product.price,
            'description': product.description,
            'stock': product.stock,
            'created_at': product.created_at,
            'updated_at': product.updated_at,
        }
