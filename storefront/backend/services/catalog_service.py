# storefront/backend/services/catalog_service.py
"""
In-memory product catalogue for the development backend.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from storefront.schemas.product_schema import Product


def _seed_products() -> List[Product]:
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return [
        Product(
            id="p-1001", name="Air Runner 90", brand="Nike", price=120.0, category="sneakers",
            image="https://cdn.seekon.local/products/air-runner-90.jpg",
            sizes=["40", "41", "42", "43", "44"], colors=["black", "white"],
            is_featured=True,
        ),
        Product(
            id="p-1002", name="Court Classic", brand="Adidas", price=95.0, category="sneakers",
            image="https://cdn.seekon.local/products/court-classic.jpg",
            sizes=["39", "40", "41", "42"], colors=["white", "green"],
            is_flash_sale=True, flash_sale_price=71.25,
            sale_start_time=now - timedelta(hours=1), sale_end_time=now + timedelta(days=2),
        ),
        Product(
            id="p-2001", name="Essential Hoodie", brand="Seekon", price=60.0, category="apparel",
            image="https://cdn.seekon.local/products/essential-hoodie.jpg",
            sizes=["S", "M", "L", "XL"], colors=["grey", "black"],
            new_product=True,
        ),
        Product(
            id="p-2002", name="Track Jacket", brand="Puma", price=80.0, category="apparel",
            image="https://cdn.seekon.local/products/track-jacket.jpg",
            sizes=["M", "L"], colors=["navy"], discount=15,
        ),
        Product(
            id="p-3001", name="Canvas Tote", brand="Seekon", price=25.0, category="accessories",
            image="https://cdn.seekon.local/products/canvas-tote.jpg",
            colors=["natural"],
        ),
    ]


class CatalogService:
    """Read-only product catalogue, seeded at start-up."""

    def __init__(self, products: Optional[List[Product]] = None):
        seed = products if products is not None else _seed_products()
        self._products: Dict[str, Product] = {product.id: product for product in seed}

    def list_products(
        self,
        category: Optional[str] = None,
        brand: Optional[str] = None,
        is_flash_sale: Optional[bool] = None,
    ) -> List[Product]:
        products = list(self._products.values())
        if category:
            products = [p for p in products if (p.category or "").lower() == category.lower()]
        if brand:
            products = [p for p in products if (p.brand or "").lower() == brand.lower()]
        if is_flash_sale is not None:
            products = [p for p in products if p.is_flash_sale == is_flash_sale]
        return products

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._products.get(str(product_id))

    def upsert(self, product: Product) -> Product:
        self._products[product.id] = product
        return product
