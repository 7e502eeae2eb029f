# storefront/backend/api/v1/endpoints/cart.py
"""
Cart endpoints.

The user comes from the bearer token, never from the URL. Clients send only
product id, size, color and quantity; name, brand, image and price are taken
from the catalogue. Every endpoint answers with the whole recomputed cart.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.backend.api import deps
from storefront.backend.services.cart_service import CartNotFoundError
from storefront.schemas.cart_schema import CartItemChange, CartItemRef, CartResponse
from storefront.schemas.product_schema import Product
from storefront.schemas.user_schema import User

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate_variant(product: Product, item: CartItemRef) -> None:
    if item.size is not None and product.sizes and item.size not in product.sizes:
        raise HTTPException(status_code=400, detail=f"Size {item.size} is not available for {product.name}")
    if item.color is not None and product.colors and item.color not in product.colors:
        raise HTTPException(status_code=400, detail=f"Color {item.color} is not available for {product.name}")


@router.get("", response_model=CartResponse)
async def get_cart(
    user: User = Depends(deps.get_current_user),
    services: deps.BackendServices = Depends(deps.get_services),
):
    """Returns the current user's cart."""
    return CartResponse(cart=services.carts.get_cart(user.id))


@router.post("/add", response_model=CartResponse)
async def add_item_to_cart(
    item: CartItemChange,
    user: User = Depends(deps.get_current_user),
    services: deps.BackendServices = Depends(deps.get_services),
):
    """Adds a product to the cart; an existing line gets its quantity increased."""
    product = services.catalog.get_product(item.product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    _validate_variant(product, item)

    try:
        cart = services.carts.add_product_to_cart(user.id, product, item.size, item.color, item.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Cart {user.id}: +{item.quantity} {product.id} ({item.size}/{item.color})")
    return CartResponse(message="Item added to cart", cart=cart)


@router.patch("/update", response_model=CartResponse)
async def update_cart_item(
    item: CartItemChange,
    user: User = Depends(deps.get_current_user),
    services: deps.BackendServices = Depends(deps.get_services),
):
    """Sets the quantity of a line; zero removes it."""
    try:
        cart = services.carts.update_quantity(user.id, item.product_id, item.size, item.color, item.quantity)
    except CartNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CartResponse(message="Cart updated", cart=cart)


@router.delete("/remove", response_model=CartResponse)
async def remove_item_from_cart(
    item: CartItemRef,
    user: User = Depends(deps.get_current_user),
    services: deps.BackendServices = Depends(deps.get_services),
):
    """Removes one line from the cart."""
    try:
        cart = services.carts.remove_product_from_cart(user.id, item.product_id, item.size, item.color)
    except CartNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CartResponse(message="Item removed from cart", cart=cart)


@router.delete("/clear", response_model=CartResponse)
async def clear_cart(
    user: User = Depends(deps.get_current_user),
    services: deps.BackendServices = Depends(deps.get_services),
):
    """Empties the cart."""
    return CartResponse(message="Cart cleared", cart=services.carts.clear_cart(user.id))
