# storefront/schemas/product_schema.py
"""
Pydantic schemas for catalogue products.

The backend is Mongo-backed, so products may carry `_id` instead of `id`.
Fields this client does not know about are kept as extras.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from storefront.schemas.base import CamelModel, coerce_str


class Product(CamelModel):
    """A product as returned by GET /api/products."""
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    brand: Optional[str] = None
    price: float
    image: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    discount: float = 0

    is_featured: bool = False
    new_product: bool = False

    # Flash sale
    is_flash_sale: bool = False
    on_flash_sale: bool = False
    flash_sale_price: Optional[float] = None
    sale_start_time: Optional[datetime] = None
    sale_end_time: Optional[datetime] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value):
        return coerce_str(value)

    @field_validator("sizes", mode="before")
    @classmethod
    def _sizes_as_text(cls, value):
        return [coerce_str(size) for size in value or []]

    @field_validator("sale_start_time", "sale_end_time", mode="before")
    @classmethod
    def _empty_time(cls, value):
        return value or None

    @property
    def effective_price(self) -> float:
        """Price the shopper pays: the flash price while the sale window is open."""
        from storefront.flash_sale import is_flash_sale_product

        if self.flash_sale_price and 0 < self.flash_sale_price < self.price and is_flash_sale_product(self):
            return self.flash_sale_price
        return self.price
