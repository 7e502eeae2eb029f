# storefront/backend/api/v1/endpoints/products.py
"""
Catalogue endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storefront.backend.api import deps

router = APIRouter()


@router.get("")
async def list_products(
    category: Optional[str] = None,
    brand: Optional[str] = None,
    is_flash_sale: Optional[bool] = Query(default=None, alias="isFlashSale"),
    services: deps.BackendServices = Depends(deps.get_services),
):
    """Lists products, optionally filtered by category, brand or flash sale flag."""
    products = services.catalog.list_products(category=category, brand=brand, is_flash_sale=is_flash_sale)
    return {"success": True, "products": [product.to_wire() for product in products]}


@router.get("/{product_id}")
async def get_product(product_id: str, services: deps.BackendServices = Depends(deps.get_services)):
    product = services.catalog.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return {"success": True, "product": product.to_wire()}
