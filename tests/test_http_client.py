"""
Tests for the shared HTTP client: bearer header, error messages and
transport failures. The server side is faked with httpx.MockTransport.
"""
import httpx
import pytest

from storefront.client.http import ApiClient
from storefront.client.token_store import TokenStore
from storefront.core.exceptions import (
    ApiRequestError,
    AuthenticationRequiredError,
    ErrorCode,
    InvalidResponseError,
    TransportError,
)


def make_api(settings, handler, token=None) -> ApiClient:
    store = TokenStore({"token": token} if token else None)
    return ApiClient(settings=settings, token_store=store, transport=httpx.MockTransport(handler))


class TestRequestBasics:
    """Happy path behaviour."""

    async def test_base_url_and_bearer_header(self, test_settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"ok": True})

        async with make_api(test_settings, handler, token="tok-1") as api:
            data = await api.get("/products", params={"category": "sneakers"})

        assert data == {"ok": True}
        assert seen["url"] == "http://testserver/api/products?category=sneakers"
        assert seen["auth"] == "Bearer tok-1"

    async def test_no_header_without_token(self, test_settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=[])

        async with make_api(test_settings, handler) as api:
            assert await api.get("/products") == []

        assert seen["auth"] is None

    async def test_admin_calls_fall_back_to_admin_token(self, test_settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={})

        api = ApiClient(
            settings=test_settings,
            token_store=TokenStore({"adminToken": "adm"}),
            transport=httpx.MockTransport(handler),
        )
        await api.put("/settings/home", json={}, auth_required=True, admin=True)
        with pytest.raises(AuthenticationRequiredError):
            await api.get("/cart", auth_required=True)
        await api.aclose()

        assert seen["auth"] == "Bearer adm"

    async def test_admin_calls_prefer_admin_token(self, test_settings):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers.get("Authorization"))
            return httpx.Response(200, json={})

        api = ApiClient(
            settings=test_settings,
            token_store=TokenStore({"token": "shopper", "adminToken": "adm"}),
            transport=httpx.MockTransport(handler),
        )
        await api.get("/cart", auth_required=True)
        await api.get("/auth/me", auth_required=True, admin=True)
        await api.aclose()

        assert seen == ["Bearer shopper", "Bearer adm"]


class TestErrorMessages:
    """
    Failed requests raise StorefrontError subclasses whose message is what
    the user should see.
    """

    async def test_server_message_is_used(self, test_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"success": False, "message": "Product not found"})

        async with make_api(test_settings, handler) as api:
            with pytest.raises(ApiRequestError) as exc_info:
                await api.get("/products/x", default_error="Failed to load product")

        error = exc_info.value
        assert error.message == "Product not found"
        assert error.status_code == 404
        assert error.code is ErrorCode.REQUEST_FAILED
        assert error.payload == {"success": False, "message": "Product not found"}

    async def test_default_message_when_body_has_none(self, test_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"success": False})

        async with make_api(test_settings, handler, token="t") as api:
            with pytest.raises(ApiRequestError) as exc_info:
                await api.delete("/cart/clear", auth_required=True, default_error="Failed to clear cart")

        assert exc_info.value.message == "Failed to clear cart"

    async def test_non_json_error_uses_reason_phrase(self, test_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad gateway</html>")

        async with make_api(test_settings, handler) as api:
            with pytest.raises(ApiRequestError) as exc_info:
                await api.get("/products")

        assert exc_info.value.message == "Bad Gateway"
        assert exc_info.value.payload is None

    async def test_non_json_success_is_invalid(self, test_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="OK")

        async with make_api(test_settings, handler) as api:
            with pytest.raises(InvalidResponseError):
                await api.get("/products")

    async def test_transport_error(self, test_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with make_api(test_settings, handler, token="t") as api:
            with pytest.raises(TransportError) as exc_info:
                await api.get("/cart", auth_required=True)

        assert exc_info.value.message == "Connection refused"
        assert exc_info.value.code is ErrorCode.TRANSPORT_ERROR

    @pytest.mark.parametrize(
        "error_class, message",
        [
            (httpx.DecodingError, "Error -3 while decompressing data"),
            (httpx.TooManyRedirects, "Exceeded maximum allowed redirects."),
            (httpx.ReadTimeout, "timed out"),
        ],
    )
    async def test_every_request_failure_is_a_transport_error(self, test_settings, error_class, message):
        def handler(request: httpx.Request) -> httpx.Response:
            raise error_class(message, request=request)

        async with make_api(test_settings, handler, token="t") as api:
            with pytest.raises(TransportError) as exc_info:
                await api.get("/cart", auth_required=True)

        assert exc_info.value.message == message
        assert exc_info.value.code is ErrorCode.TRANSPORT_ERROR

    async def test_missing_token_raises_before_sending(self, test_settings):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={})

        async with make_api(test_settings, handler) as api:
            with pytest.raises(AuthenticationRequiredError):
                await api.post("/cart/add", json={}, auth_required=True)

        assert calls == []

    async def test_failures_are_logged_with_context(self, test_settings, caplog):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"message": "Quantity must be at least 1"})

        async with make_api(test_settings, handler, token="t") as api:
            with pytest.raises(ApiRequestError):
                await api.post("/cart/add", json={}, auth_required=True, context="addToCart")

        assert "API Error (addToCart): 400 - Quantity must be at least 1" in caplog.text


class TestErrorSerialization:
    def test_to_dict(self):
        error = ApiRequestError("Failed to fetch cart", 503)

        assert error.to_dict() == {
            "code": "REQUEST_FAILED",
            "message": "Failed to fetch cart",
            "context": {"status_code": 503},
        }
        assert str(error) == "Failed to fetch cart"
