"""
Authentication tests: token storage, validation, logout and the
client-side user session.
"""
import httpx
import pytest

from storefront.client.auth import AuthGateway
from storefront.client.http import ApiClient
from storefront.client.token_store import ADMIN_TOKEN_KEY, TOKEN_KEY, TokenStore
from storefront.core.exceptions import ApiRequestError, AuthenticationRequiredError

SHOPPER_EMAIL = "shopper@seekon.com"
SHOPPER_PASSWORD = "secret123"


class TestLoginAndRegister:
    """A successful login or registration stores the token under both keys."""

    async def test_register_stores_token(self, shop, token_store):
        user = await shop.auth.register("Shopper", SHOPPER_EMAIL, SHOPPER_PASSWORD)

        assert user.email == SHOPPER_EMAIL
        assert user.role == "user"
        assert token_store.get_item(TOKEN_KEY)
        assert token_store.get_item(TOKEN_KEY) == token_store.get_item(ADMIN_TOKEN_KEY)

    async def test_login_with_seeded_admin(self, shop):
        user = await shop.auth.login("admin@seekon.com", "admin1234")

        assert user.is_admin
        assert shop.api.is_authenticated

    async def test_wrong_password(self, logged_in_shop):
        logged_in_shop.auth.logout()

        with pytest.raises(ApiRequestError) as exc_info:
            await logged_in_shop.auth.login(SHOPPER_EMAIL, "wrong-password")

        assert exc_info.value.message == "Invalid email or password"
        assert exc_info.value.status_code == 401
        assert not logged_in_shop.api.is_authenticated

    async def test_duplicate_registration(self, logged_in_shop):
        with pytest.raises(ApiRequestError) as exc_info:
            await logged_in_shop.auth.register("Again", SHOPPER_EMAIL, SHOPPER_PASSWORD)

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "User already exists"

    async def test_unsuccessful_body_without_error_status(self, test_settings):
        """A 200 answer without success/token is still a failed login."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": False})

        store = TokenStore()
        api = ApiClient(settings=test_settings, token_store=store, transport=httpx.MockTransport(handler))

        with pytest.raises(ApiRequestError) as exc_info:
            await AuthGateway(api).login(SHOPPER_EMAIL, SHOPPER_PASSWORD)

        assert exc_info.value.message == "Login failed"
        assert store.token is None
        await api.aclose()


class TestValidateToken:
    """GET /auth/me with the stored token."""

    async def test_valid_token(self, logged_in_shop):
        user = await logged_in_shop.auth.validate_token()

        assert user.email == SHOPPER_EMAIL

    async def test_no_token(self, shop):
        with pytest.raises(AuthenticationRequiredError) as exc_info:
            await shop.auth.validate_token()

        assert exc_info.value.message == "No token found"

    async def test_rejected_token_is_cleared(self, shop, token_store):
        token_store.save_token("stale-token")

        with pytest.raises(ApiRequestError) as exc_info:
            await shop.auth.validate_token()

        assert exc_info.value.status_code == 401
        assert token_store.get_item(TOKEN_KEY) is None
        assert token_store.get_item(ADMIN_TOKEN_KEY) is None

    async def test_admin_token_alone_is_enough(self, test_settings):
        """
        Validates:
        - A session holding only adminToken can still be validated
        - The request carries that token
        """
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={
                "success": True,
                "user": {"_id": "u-1", "name": "Admin", "email": "admin@seekon.com", "role": "admin"},
            })

        api = ApiClient(
            settings=test_settings,
            token_store=TokenStore({ADMIN_TOKEN_KEY: "adm"}),
            transport=httpx.MockTransport(handler),
        )
        user = await AuthGateway(api).validate_token()

        assert user.role == "admin"
        assert seen["auth"] == "Bearer adm"
        await api.aclose()


class TestLogout:
    """Logout ends the session and empties the local cart."""

    async def test_logout_clears_token_and_cart(self, logged_in_shop, token_store):
        await logged_in_shop.cart.add_item("p-1001", "42", "black")
        assert logged_in_shop.cart.badge_count == 1

        logged_in_shop.auth.logout()

        assert token_store.token is None
        assert logged_in_shop.cart.items == []
        assert logged_in_shop.cart.badge_count == 0

    async def test_cart_is_kept_on_server(self, logged_in_shop):
        await logged_in_shop.cart.add_item("p-1001", "42", "black", 2)
        logged_in_shop.auth.logout()

        await logged_in_shop.auth.login(SHOPPER_EMAIL, SHOPPER_PASSWORD)
        fetched = await logged_in_shop.cart.fetch()

        assert fetched.total_items == 2


class TestPasswordAndVerification:
    """Reset and verification flows against the in-memory backend."""

    async def test_reset_password(self, logged_in_shop, app):
        token = app.state.services.auth.create_reset_token(SHOPPER_EMAIL)

        await logged_in_shop.auth.reset_password(token, "new-secret")
        logged_in_shop.auth.logout()

        user = await logged_in_shop.auth.login(SHOPPER_EMAIL, "new-secret")
        assert user.email == SHOPPER_EMAIL

    async def test_reset_with_bad_token(self, shop):
        with pytest.raises(ApiRequestError) as exc_info:
            await shop.auth.reset_password("nope", "new-secret")

        assert exc_info.value.message == "Invalid or expired reset token"

    async def test_forgot_password_always_succeeds(self, shop):
        data = await shop.auth.forgot_password("nobody@seekon.com")

        assert data["success"] is True

    async def test_verify_email_then_resend_refused(self, logged_in_shop, app):
        token = app.state.services.auth.create_verification_token(SHOPPER_EMAIL)

        data = await logged_in_shop.auth.verify_email(token)
        assert data["success"] is True

        with pytest.raises(ApiRequestError) as exc_info:
            await logged_in_shop.auth.resend_verification(SHOPPER_EMAIL)
        assert exc_info.value.message == "Email is already verified"


class TestUserSession:
    """
    The session records failures in its state instead of raising.
    """

    async def test_login_sets_user(self, logged_in_shop):
        session = logged_in_shop.session
        logged_in_shop.auth.logout()

        user = await session.login(SHOPPER_EMAIL, SHOPPER_PASSWORD)

        assert user is not None
        assert session.state.is_authenticated is True
        assert session.state.user.email == SHOPPER_EMAIL
        assert session.state.is_loading is False

    async def test_failed_login_records_error(self, shop):
        assert await shop.session.login(SHOPPER_EMAIL, "whatever") is None

        assert shop.session.state.error == "Invalid email or password"
        assert shop.session.state.is_authenticated is False

        shop.session.clear_error()
        assert shop.session.state.error is None

    async def test_missing_token_is_not_an_error(self, shop):
        assert await shop.session.validate_token() is None

        assert shop.session.state.error is None
        assert shop.session.state.is_authenticated is False

    async def test_validate_restores_user(self, logged_in_shop):
        user = await logged_in_shop.session.validate_token()

        assert user.email == SHOPPER_EMAIL
        assert logged_in_shop.session.state.is_authenticated is True

    async def test_logout_resets_state(self, logged_in_shop):
        session = logged_in_shop.session
        await session.validate_token()

        session.logout()

        assert session.state.user is None
        assert session.state.is_authenticated is False
        assert logged_in_shop.api.is_authenticated is False

    async def test_password_flows_report_success(self, shop):
        assert await shop.session.forgot_password(SHOPPER_EMAIL) is True
        assert await shop.session.reset_password("bad-token", "another1") is False
        assert shop.session.state.error == "Invalid or expired reset token"

    async def test_theme(self, shop):
        session = shop.session
        assert session.state.theme == "light"

        session.toggle_theme()
        assert session.state.theme == "dark"

        session.set_theme("light")
        assert session.state.theme == "light"

        with pytest.raises(ValueError):
            session.set_theme("blue")
