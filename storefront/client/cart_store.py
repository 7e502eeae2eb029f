# storefront/client/cart_store.py
"""
Client-side cart state.

The store is a read-through cache of the server cart: items and totals only
ever change by applying a cart returned by the gateway (or by `reset()` on
logout). There is no local add/remove path that could drift from the server.

Each operation goes pending -> fulfilled | rejected:
- pending:   is_loading = True, error cleared
- fulfilled: items and totals replaced with the server cart
- rejected:  cart left as it was, error set to the failure message

Overlapping operations are not sequenced: each applies its response when it
resolves, so the last one to resolve wins. Results that arrive after
`reset()` are dropped.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from pydantic import BaseModel, Field

from storefront.client.cart_gateway import CartGateway
from storefront.core.exceptions import StorefrontError
from storefront.schemas.cart_schema import Cart, CartItem, make_key
from storefront.schemas.product_schema import Product

logger = logging.getLogger(__name__)


class CartState(BaseModel):
    """Snapshot of the cart as the UI sees it."""
    items: List[CartItem] = Field(default_factory=list)
    total_items: int = 0
    total_price: float = 0.0
    is_open: bool = False
    is_loading: bool = False
    error: Optional[str] = None


Listener = Callable[[CartState], None]


class CartStore:
    """Holds the cart state and dispatches gateway operations."""

    def __init__(self, gateway: CartGateway):
        self.gateway = gateway
        self._state = CartState()
        self._listeners: List[Listener] = []
        self._pending = 0
        self._generation = 0

    # ========================================
    # READS
    # ========================================

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> List[CartItem]:
        return self._state.items

    @property
    def badge_count(self) -> int:
        """Number shown on the navbar cart icon."""
        return self._state.total_items

    def find(self, product_id: str, size: Optional[str] = None, color: Optional[str] = None) -> Optional[CartItem]:
        key = make_key(product_id, size, color)
        return next((item for item in self._state.items if item.key == key), None)

    def quantity_of(self, product_id: str, size: Optional[str] = None, color: Optional[str] = None) -> int:
        item = self.find(product_id, size, color)
        return item.quantity if item else 0

    # ========================================
    # SUBSCRIPTIONS
    # ========================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Calls `listener(state)` after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self._state)

    # ========================================
    # UI FLAGS
    # ========================================

    def open(self) -> None:
        self._set(is_open=True)

    def close(self) -> None:
        self._set(is_open=False)

    def toggle(self) -> None:
        self._set(is_open=not self._state.is_open)

    def reset(self) -> None:
        """
        Empties the cart locally (logout). Server state is untouched.

        Operations still in flight are not cancelled, but their results are
        not applied.
        """
        self._generation += 1
        self._set(items=[], total_items=0, total_price=0.0, error=None)

    # ========================================
    # SERVER OPERATIONS
    # ========================================

    async def fetch(self) -> Optional[Cart]:
        return await self._run("fetchCart", self.gateway.fetch_cart)

    async def add_item(
        self, product_id: str, size: Optional[str] = None, color: Optional[str] = None, quantity: int = 1
    ) -> Optional[Cart]:
        return await self._run("addToCart", lambda: self.gateway.add_item(product_id, size, color, quantity))

    async def add_product(
        self, product: Product, size: Optional[str] = None, color: Optional[str] = None, quantity: int = 1
    ) -> Optional[Cart]:
        """Adds a catalogue product; only its id travels to the server."""
        return await self.add_item(product.id, size, color, quantity)

    async def update_quantity(
        self, product_id: str, size: Optional[str], color: Optional[str], quantity: int
    ) -> Optional[Cart]:
        return await self._run(
            "updateQuantity", lambda: self.gateway.update_quantity(product_id, size, color, quantity)
        )

    async def remove_item(
        self, product_id: str, size: Optional[str] = None, color: Optional[str] = None
    ) -> Optional[Cart]:
        return await self._run("removeFromCart", lambda: self.gateway.remove_item(product_id, size, color))

    async def clear(self) -> Optional[Cart]:
        return await self._run("clearCart", self.gateway.clear_cart)

    async def _run(self, name: str, operation: Callable[[], Awaitable[Cart]]) -> Optional[Cart]:
        """
        Runs one gateway call through pending/fulfilled/rejected.

        Returns the applied cart, or None when the call failed (the message
        is then in `state.error`). A call that resolves after `reset()` is
        dropped and returns None.
        """
        changes = {}
        generation = self._generation
        self._pending += 1
        logger.debug(f"{name}: pending ({self._pending} in flight)")
        self._set(is_loading=True, error=None)
        try:
            cart = await operation()
            if generation != self._generation:
                logger.debug(f"{name}: dropped, cart was reset while in flight")
                return None
            changes = {"items": list(cart.items), "total_items": cart.total_items, "total_price": cart.total_price}
            logger.debug(f"{name}: fulfilled ({cart.total_items} items)")
            return cart
        except StorefrontError as e:
            if generation != self._generation:
                return None
            logger.warning(f"{name}: rejected - {e.message}")
            changes = {"error": e.message}
            return None
        finally:
            self._pending -= 1
            self._set(is_loading=self._pending > 0, **changes)
