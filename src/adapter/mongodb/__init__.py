from adapter.mongodb.connection import (
    COUNTERS_COLLECTION_NAME,
    DATABASE_NAME,
    PRODUCTS_COLLECTION_NAME,
    USERS_COLLECTION_NAME,
)

__all__ = [
    "COUNTERS_COLLECTION_NAME",
    "DATABASE_NAME",
    "PRODUCTS_COLLECTION_NAME",
    "USERS_COLLECTION_NAME",
]
