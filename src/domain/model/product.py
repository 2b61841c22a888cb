from dataclasses import dataclass
from datetime import datetime

# Catalog attributes a caller may set; id and timestamps belong to the store.
PRODUCT_FIELDS = ('name', 'price', 'description', 'stock')


@dataclass
class Product:
    """Domain model representing a catalog product."""
    id: int
    name: str
    price: float
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    stock: int = 0
