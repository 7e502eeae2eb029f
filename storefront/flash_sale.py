# storefront/flash_sale.py
"""
Flash sale timing and product selection.

Every countdown in the storefront (home banner, flash sale page, product
cards) goes through `time_left`, so they all agree on when a sale ends.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, NamedTuple, Optional, Union

from storefront.schemas.product_schema import Product

logger = logging.getLogger(__name__)

TimeLike = Union[datetime, str]

SORT_KEYS = ("ending-soon", "price-low", "price-high", "discount")


class Countdown(NamedTuple):
    days: int
    hours: int
    minutes: int
    seconds: int
    expired: bool


EXPIRED = Countdown(0, 0, 0, 0, True)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_datetime(value: TimeLike) -> datetime:
    """Parses ISO strings (a trailing Z included); naive values are taken as UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def time_left(end_time: TimeLike, now: Optional[TimeLike] = None) -> Countdown:
    """
    Time remaining until `end_time`, floored to whole seconds.

    At or after the end time every field is 0 and `expired` is True.
    """
    difference = to_datetime(end_time) - (to_datetime(now) if now is not None else utcnow())
    if difference <= timedelta(0):
        return EXPIRED

    total_seconds = difference // timedelta(seconds=1)
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return Countdown(days, hours, minutes, seconds, False)


def format_countdown(countdown: Countdown) -> str:
    """DD:HH:MM:SS"""
    return ":".join(f"{value:02d}" for value in countdown[:4])


# ========================================
# PRODUCT SELECTION
# ========================================

def is_flash_sale_product(product: Product, now: Optional[TimeLike] = None) -> bool:
    """
    A product is on flash sale when it is flagged as such or carries a
    flash price below its regular price, and `now` lies inside its sale
    window (if it has one).
    """
    flagged = product.is_flash_sale or product.on_flash_sale
    discounted = bool(product.flash_sale_price) and 0 < product.flash_sale_price < product.price
    if not (flagged or discounted):
        return False

    current = to_datetime(now) if now is not None else utcnow()
    if product.sale_start_time and current < to_datetime(product.sale_start_time):
        return False
    if product.sale_end_time and current >= to_datetime(product.sale_end_time):
        return False
    return True


def flash_sale_products(products: Iterable[Product], now: Optional[TimeLike] = None) -> List[Product]:
    return [product for product in products if is_flash_sale_product(product, now)]


def sale_price(product: Product) -> float:
    return product.flash_sale_price or product.price


def discount_percent(product: Product) -> float:
    if product.price <= 0:
        return 0.0
    return (product.price - sale_price(product)) / product.price * 100


def total_savings(products: Iterable[Product]) -> float:
    return sum(product.price - sale_price(product) for product in products)


def sort_flash_sale(products: Iterable[Product], sort_by: str = "ending-soon") -> List[Product]:
    """
    Sorts flash sale products. Unknown keys keep the input order.

    - ending-soon: earliest sale end first (no end time last)
    - price-low / price-high: by sale price
    - discount: biggest discount first
    """
    products = list(products)
    if sort_by == "ending-soon":
        far_future = datetime.max.replace(tzinfo=timezone.utc)
        return sorted(
            products,
            key=lambda p: to_datetime(p.sale_end_time) if p.sale_end_time else far_future,
        )
    if sort_by == "price-low":
        return sorted(products, key=sale_price)
    if sort_by == "price-high":
        return sorted(products, key=sale_price, reverse=True)
    if sort_by == "discount":
        return sorted(products, key=discount_percent, reverse=True)
    return products


# ========================================
# LIVE COUNTDOWN
# ========================================

async def watch_countdown(
    end_time: TimeLike,
    on_tick: Callable[[Countdown], None],
    *,
    interval: float = 1.0,
    clock: Callable[[], datetime] = utcnow,
) -> Countdown:
    """
    Calls `on_tick` with the remaining time every `interval` seconds.

    Returns after the first expired tick. Cancel the task to stop earlier.
    """
    while True:
        countdown = time_left(end_time, now=clock())
        on_tick(countdown)
        if countdown.expired:
            logger.debug(f"Countdown to {end_time} finished")
            return countdown
        await asyncio.sleep(interval)
