# storefront/client/products.py
"""
Catalogue reads: GET /api/products and GET /api/products/{id}.
"""

from typing import Any, List

from pydantic import ValidationError

from storefront.client.http import ApiClient
from storefront.core.exceptions import InvalidResponseError
from storefront.schemas.product_schema import Product


class ProductGateway:
    """Product endpoints of the REST API."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def list_products(self, **filters: Any) -> List[Product]:
        """
        Lists products. Filters (category, brand, ...) go in the query string;
        None values are dropped. Accepts `{products: [...]}` or a bare list.
        """
        params = {k: v for k, v in filters.items() if v is not None}
        data = await self.api.get(
            "/products", params=params or None, default_error="Failed to load products", context="getProducts"
        )
        raw = data.get("products", []) if isinstance(data, dict) else data
        if not isinstance(raw, list):
            raise InvalidResponseError("Invalid product list returned by server", data)
        try:
            return [Product.model_validate(item) for item in raw]
        except ValidationError as e:
            raise InvalidResponseError("Invalid product returned by server", data) from e

    async def get_product(self, product_id: str) -> Product:
        data = await self.api.get(
            f"/products/{product_id}", default_error="Failed to load product", context="getProduct"
        )
        raw = data.get("product", data) if isinstance(data, dict) else data
        try:
            return Product.model_validate(raw)
        except ValidationError as e:
            raise InvalidResponseError("Invalid product returned by server", data) from e
