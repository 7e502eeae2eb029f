# storefront/client/site_settings.py
"""
Site-wide settings: the home page hero and the global flash sale switch.
"""

from typing import Any

from pydantic import ValidationError

from storefront.client.http import ApiClient
from storefront.core.exceptions import InvalidResponseError
from storefront.schemas.settings_schema import FlashSaleSettings, HomeSettings


class SiteSettingsGateway:
    """Settings endpoints of the REST API."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def get_home_settings(self) -> HomeSettings:
        data = await self.api.get(
            "/settings/home", default_error="Failed to load home settings", context="getHomeSettings"
        )
        return self._validate(HomeSettings, data)

    async def update_home_settings(self, home: HomeSettings) -> HomeSettings:
        data = await self.api.put(
            "/settings/home",
            json=home.to_wire(),
            auth_required=True,
            admin=True,
            default_error="Failed to update",
            context="updateHomeSettings",
        )
        return self._validate(HomeSettings, data)

    async def get_flash_sale_settings(self) -> FlashSaleSettings:
        data = await self.api.get(
            "/settings/flash-sale", default_error="Failed to load flash sale settings", context="getFlashSale"
        )
        return self._validate(FlashSaleSettings, data)

    async def update_flash_sale_settings(self, flash_sale: FlashSaleSettings) -> FlashSaleSettings:
        data = await self.api.put(
            "/settings/flash-sale",
            json=flash_sale.to_wire(),
            auth_required=True,
            admin=True,
            default_error="Failed to update flash sale settings",
            context="updateFlashSale",
        )
        return self._validate(FlashSaleSettings, data)

    @staticmethod
    def _validate(model, data: Any):
        # Settings documents are sometimes wrapped as {"key": ..., "value": {...}}
        if isinstance(data, dict) and isinstance(data.get("value"), dict):
            data = data["value"]
        try:
            return model.model_validate(data or {})
        except ValidationError as e:
            raise InvalidResponseError("Invalid settings returned by server", data) from e
