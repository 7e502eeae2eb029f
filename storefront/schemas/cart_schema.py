# storefront/schemas/cart_schema.py
"""
Pydantic schemas for the shopping cart.

A cart line is identified by (product_id, size, color); the same product in
another size or color is a separate line.
"""

from typing import List, Optional, Tuple

from pydantic import Field, field_validator

from storefront.schemas.base import CamelModel, coerce_str

CartItemKey = Tuple[str, Optional[str], Optional[str]]


def make_key(product_id: str, size: Optional[str], color: Optional[str]) -> CartItemKey:
    """Builds the identity key of a cart line."""
    return (str(product_id), coerce_str(size), color)


# ========================================
# CART CONTENTS
# ========================================

class CartItem(CamelModel):
    """One line of the cart as computed by the server."""
    product_id: str
    name: str = ""
    brand: Optional[str] = None
    price: float = 0.0
    image: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    quantity: int = 1

    @field_validator("product_id", "size", mode="before")
    @classmethod
    def _numbers_as_text(cls, value):
        return coerce_str(value)

    @property
    def key(self) -> CartItemKey:
        return make_key(self.product_id, self.size, self.color)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class Cart(CamelModel):
    """Full state of the cart. The server is the authority on the totals."""
    items: List[CartItem] = Field(default_factory=list)
    total_items: int = 0
    total_price: float = 0.0

    @field_validator("items", mode="before")
    @classmethod
    def _null_items(cls, value):
        return value or []

    @field_validator("total_items", "total_price", mode="before")
    @classmethod
    def _null_totals(cls, value):
        return value or 0

    def find(self, product_id: str, size: Optional[str] = None, color: Optional[str] = None) -> Optional[CartItem]:
        key = make_key(product_id, size, color)
        return next((item for item in self.items if item.key == key), None)

    @property
    def is_empty(self) -> bool:
        return not self.items


# ========================================
# REQUEST BODIES
# ========================================

class CartItemRef(CamelModel):
    """Body identifying a line (remove)."""
    product_id: str
    size: Optional[str] = None
    color: Optional[str] = None

    @field_validator("product_id", "size", mode="before")
    @classmethod
    def _numbers_as_text(cls, value):
        return coerce_str(value)


class CartItemChange(CartItemRef):
    """Body for add and update. Price, name and image are never sent."""
    quantity: int = 1


class CartResponse(CamelModel):
    """Envelope returned by every cart endpoint."""
    success: bool = True
    message: Optional[str] = None
    cart: Cart = Field(default_factory=Cart)
