# storefront/client/cart_gateway.py
"""
Network operations on the authenticated user's cart.

Every operation needs a stored token (otherwise it fails before any request
is made) and returns the full cart as recomputed by the server. Callers
replace their local cart with it; nothing is merged client side. The backend
identifies the user from the token, so no user id goes in the URL.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from storefront.client.http import ApiClient
from storefront.core.exceptions import InvalidResponseError
from storefront.schemas.cart_schema import Cart, CartItemChange, CartItemRef

logger = logging.getLogger(__name__)


class CartGateway:
    """Cart endpoints of the REST API."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def fetch_cart(self) -> Cart:
        """GET /api/cart"""
        data = await self.api.get(
            "/cart", auth_required=True, default_error="Failed to fetch cart", context="fetchCart"
        )
        return self._parse_cart(data)

    async def add_item(
        self, product_id: str, size: Optional[str] = None, color: Optional[str] = None, quantity: int = 1
    ) -> Cart:
        """
        POST /api/cart/add

        Only the line identity and quantity are sent; the server looks up
        name, brand, image and price itself.
        """
        body = CartItemChange(product_id=product_id, size=size, color=color, quantity=quantity)
        data = await self.api.post(
            "/cart/add",
            json=body.to_wire(),
            auth_required=True,
            default_error="Failed to add to cart",
            context="addToCart",
        )
        return self._parse_cart(data)

    async def update_quantity(
        self, product_id: str, size: Optional[str], color: Optional[str], quantity: int
    ) -> Cart:
        """PATCH /api/cart/update"""
        body = CartItemChange(product_id=product_id, size=size, color=color, quantity=quantity)
        data = await self.api.patch(
            "/cart/update",
            json=body.to_wire(),
            auth_required=True,
            default_error="Failed to update quantity",
            context="updateQuantity",
        )
        return self._parse_cart(data)

    async def remove_item(self, product_id: str, size: Optional[str] = None, color: Optional[str] = None) -> Cart:
        """DELETE /api/cart/remove"""
        body = CartItemRef(product_id=product_id, size=size, color=color)
        data = await self.api.delete(
            "/cart/remove",
            json=body.to_wire(),
            auth_required=True,
            default_error="Failed to remove from cart",
            context="removeFromCart",
        )
        return self._parse_cart(data)

    async def clear_cart(self) -> Cart:
        """DELETE /api/cart/clear"""
        data = await self.api.delete(
            "/cart/clear", auth_required=True, default_error="Failed to clear cart", context="clearCart"
        )
        return self._parse_cart(data)

    @staticmethod
    def _parse_cart(data: Any) -> Cart:
        """Takes the `cart` field of the response; missing fields mean empty."""
        payload = data.get("cart") if isinstance(data, dict) else None
        try:
            return Cart.model_validate(payload or {})
        except ValidationError as e:
            logger.error(f"Unexpected cart payload: {e}")
            raise InvalidResponseError("Invalid cart returned by server", payload) from e
