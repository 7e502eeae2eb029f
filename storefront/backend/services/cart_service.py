# storefront/backend/services/cart_service.py
"""
Shopping cart service for the development backend.

Carts live in memory, one per user id. A line is identified by
(product_id, size, color); adding an existing line increases its quantity.
Totals are recomputed from the lines every time the cart is read.
"""

from typing import Dict, Optional

from storefront.schemas.cart_schema import Cart, CartItem, CartItemKey, make_key
from storefront.schemas.product_schema import Product


class CartNotFoundError(LookupError):
    """The requested line is not in the cart."""


class CartService:
    """
    Manages users' carts in memory.
    """
    def __init__(self):
        self._carts: Dict[str, Dict[CartItemKey, CartItem]] = {}

    def _get_cart_lines(self, user_id: str) -> Dict[CartItemKey, CartItem]:
        return self._carts.setdefault(str(user_id), {})

    def add_product_to_cart(
        self, user_id: str, product: Product, size: Optional[str], color: Optional[str], quantity: int = 1
    ) -> Cart:
        """
        Adds a product to a user's cart.
        If the line already exists, its quantity is increased.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be at least 1")

        lines = self._get_cart_lines(user_id)
        key = make_key(product.id, size, color)

        if key in lines:
            current = lines[key]
            lines[key] = current.model_copy(update={"quantity": current.quantity + quantity})
        else:
            lines[key] = CartItem(
                product_id=product.id,
                name=product.name,
                brand=product.brand,
                price=product.effective_price,
                image=product.image,
                size=size,
                color=color,
                quantity=quantity,
            )
        return self.get_cart(user_id)

    def update_quantity(
        self, user_id: str, product_id: str, size: Optional[str], color: Optional[str], quantity: int
    ) -> Cart:
        """Sets the quantity of a line; zero or less removes it."""
        lines = self._get_cart_lines(user_id)
        key = make_key(product_id, size, color)
        if key not in lines:
            raise CartNotFoundError("Item not found in cart")

        if quantity <= 0:
            del lines[key]
        else:
            lines[key] = lines[key].model_copy(update={"quantity": quantity})
        return self.get_cart(user_id)

    def remove_product_from_cart(
        self, user_id: str, product_id: str, size: Optional[str], color: Optional[str]
    ) -> Cart:
        """Removes a line from a user's cart."""
        lines = self._get_cart_lines(user_id)
        key = make_key(product_id, size, color)
        if key not in lines:
            raise CartNotFoundError("Item not found in cart")
        del lines[key]
        return self.get_cart(user_id)

    def clear_cart(self, user_id: str) -> Cart:
        """Empties a user's cart."""
        self._carts[str(user_id)] = {}
        return self.get_cart(user_id)

    def get_cart(self, user_id: str) -> Cart:
        """Cart contents with totals computed from the lines."""
        items = list(self._get_cart_lines(user_id).values())
        return Cart(
            items=items,
            total_items=sum(item.quantity for item in items),
            total_price=round(sum(item.subtotal for item in items), 2),
        )
