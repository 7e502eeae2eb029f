# storefront/schemas/base.py
"""
Shared Pydantic base for the wire models.

The backend speaks camelCase JSON; Python code uses snake_case attributes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self, **kwargs: Any) -> dict:
        """Serialize with camelCase keys, as the backend expects."""
        return self.model_dump(by_alias=True, mode="json", **kwargs)


def coerce_str(value: Any) -> Any:
    """Sizes and ids sometimes arrive as numbers (e.g. size 42)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value
