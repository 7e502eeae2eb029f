# storefront/client/http.py
"""
HTTP client shared by every gateway.

Wraps an httpx.AsyncClient pointed at `{API_URL}/api`, attaches the bearer
token from the token store and turns failures into StorefrontError
subclasses carrying the server's message.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from storefront.client.token_store import TokenStore
from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import (
    ApiRequestError,
    AuthenticationRequiredError,
    InvalidResponseError,
    TransportError,
)

logger = logging.getLogger(__name__)

_NO_JSON = object()


class ApiClient:
    """
    Async client for the storefront REST API.

    Use it as an async context manager, or call `aclose()` when done.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        token_store: Optional[TokenStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or default_settings
        self.token_store = token_store if token_store is not None else TokenStore()
        self._client = httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=httpx.Timeout(self.settings.REQUEST_TIMEOUT),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token_store.token)

    def _headers(self, auth_required: bool, admin: bool) -> Dict[str, str]:
        token = self.token_store.admin_token if admin else self.token_store.token
        if not token:
            if auth_required:
                raise AuthenticationRequiredError()
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        files: Any = None,
        auth_required: bool = False,
        admin: bool = False,
        default_error: str = "Something went wrong",
        context: Optional[str] = None,
    ) -> Any:
        """
        Sends a request and returns the decoded JSON body.

        Shopper calls send `token`; `admin=True` (admin screens, token
        validation) prefers `adminToken` and falls back to `token`.

        Raises:
            AuthenticationRequiredError: auth_required and no token stored;
                nothing is sent.
            ApiRequestError: non-2xx status. The message is the body's
                `message`, or `default_error`.
            TransportError: the request could not be completed (connection,
                timeout, redirect loop, undecodable body).
            InvalidResponseError: a 2xx response whose body is not JSON.
        """
        context = context or f"{method} {path}"
        headers = self._headers(auth_required, admin)

        try:
            response = await self._client.request(
                method, path, json=json, params=params, files=files, headers=headers
            )
        except httpx.RequestError as e:
            message = str(e) or e.__class__.__name__
            logger.error(f"API Error ({context}): {message}")
            raise TransportError(message) from e

        data = self._decode(response)

        if response.is_error:
            message = self._error_message(response, data, default_error)
            logger.error(f"API Error ({context}): {response.status_code} - {message}")
            raise ApiRequestError(message, response.status_code, None if data is _NO_JSON else data)

        if data is _NO_JSON:
            logger.error(f"API Error ({context}): response is not JSON")
            raise InvalidResponseError("Invalid response from server")

        return data

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return _NO_JSON
        try:
            return response.json()
        except ValueError:
            return _NO_JSON

    @staticmethod
    def _error_message(response: httpx.Response, data: Any, default_error: str) -> str:
        if data is _NO_JSON:
            return response.reason_phrase or f"Server error ({response.status_code})"
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return default_error

    # Shortcuts

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)
