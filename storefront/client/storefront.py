# storefront/client/storefront.py
"""
One object wiring the HTTP client, the gateways and the client-side stores
together, the way the storefront UI uses them.
"""

from typing import Optional

import httpx

from storefront.client.auth import AuthGateway, UserSession
from storefront.client.cart_gateway import CartGateway
from storefront.client.cart_store import CartStore
from storefront.client.http import ApiClient
from storefront.client.products import ProductGateway
from storefront.client.site_settings import SiteSettingsGateway
from storefront.client.token_store import TokenStore
from storefront.client.uploads import UploadGateway
from storefront.core.config import Settings


class StorefrontClient:
    """
    Entry point for applications.

    Example:
        async with StorefrontClient() as shop:
            await shop.session.login("me@seekon.com", "secret")
            await shop.cart.add_item("p-1", size="42", color="black")
            print(shop.cart.state.total_price)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        token_store: Optional[TokenStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api = ApiClient(settings=settings, token_store=token_store, transport=transport)
        self.cart_gateway = CartGateway(self.api)
        self.cart = CartStore(self.cart_gateway)
        self.auth = AuthGateway(self.api, cart_store=self.cart)
        self.session = UserSession(self.auth)
        self.products = ProductGateway(self.api)
        self.site_settings = SiteSettingsGateway(self.api)
        self.uploads = UploadGateway(self.api)

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.api.aclose()
