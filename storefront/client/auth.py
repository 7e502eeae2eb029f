# storefront/client/auth.py
"""
Authentication against /api/auth and the client-side user session.

A successful login or registration stores the bearer token under both
`token` and `adminToken`. Logging out removes both and empties the cart
store, since the cart belongs to the user who owned the token.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from storefront.client.cart_store import CartStore
from storefront.client.http import ApiClient
from storefront.core.exceptions import (
    ApiRequestError,
    AuthenticationRequiredError,
    InvalidResponseError,
    StorefrontError,
)
from storefront.schemas.user_schema import AuthResponse, LoginRequest, RegisterRequest, User

logger = logging.getLogger(__name__)

T = TypeVar("T")

NO_TOKEN_MESSAGE = "No token found"


class AuthGateway:
    """Auth endpoints of the REST API."""

    def __init__(self, api: ApiClient, cart_store: Optional[CartStore] = None):
        self.api = api
        self.cart_store = cart_store

    async def login(self, email: str, password: str) -> User:
        body = LoginRequest(email=email, password=password)
        data = await self.api.post("/auth/login", json=body.to_wire(), default_error="Login failed", context="login")
        return self._start_session(data, "Login failed")

    async def register(self, name: str, email: str, password: str) -> User:
        body = RegisterRequest(name=name, email=email, password=password)
        data = await self.api.post(
            "/auth/register", json=body.to_wire(), default_error="Registration failed", context="register"
        )
        return self._start_session(data, "Registration failed")

    async def validate_token(self) -> User:
        """
        GET /api/auth/me with the stored token.

        A token the server rejects is removed from the store.
        """
        if not self.api.token_store.admin_token:
            raise AuthenticationRequiredError(NO_TOKEN_MESSAGE)
        try:
            data = await self.api.get(
                "/auth/me", auth_required=True, admin=True, default_error="Invalid token", context="me"
            )
        except ApiRequestError:
            self.api.token_store.clear_token()
            raise
        response = self._parse(data)
        if not response.success or response.user is None:
            raise ApiRequestError(response.message or "Token validation failed")
        return response.user

    async def forgot_password(self, email: str) -> Dict[str, Any]:
        return await self.api.post(
            "/auth/forgot-password",
            json={"email": email},
            default_error="Failed to send password reset email",
            context="forgotPassword",
        )

    async def reset_password(self, token: str, password: str) -> Dict[str, Any]:
        return await self.api.post(
            f"/auth/reset-password/{quote(token, safe='')}",
            json={"password": password},
            default_error="Failed to reset password",
            context="resetPassword",
        )

    async def verify_email(self, token: str) -> Dict[str, Any]:
        return await self.api.get(
            f"/auth/verify-email/{quote(token, safe='')}",
            default_error="Email verification failed",
            context="verifyEmail",
        )

    async def resend_verification(self, email: str) -> Dict[str, Any]:
        return await self.api.post(
            "/auth/resend-verification",
            json={"email": email},
            default_error="Failed to resend verification email",
            context="resendVerification",
        )

    def logout(self) -> None:
        self.api.token_store.clear_token()
        if self.cart_store is not None:
            self.cart_store.reset()
        logger.info("Logged out")

    def _start_session(self, data: Any, default_error: str) -> User:
        response = self._parse(data)
        if not response.success or not response.token or response.user is None:
            raise ApiRequestError(response.message or default_error)
        self.api.token_store.save_token(response.token)
        logger.info(f"Signed in as {response.user.email}")
        return response.user

    @staticmethod
    def _parse(data: Any) -> AuthResponse:
        try:
            return AuthResponse.model_validate(data)
        except ValidationError as e:
            raise InvalidResponseError("Invalid auth response from server", data) from e


# ========================================
# USER SESSION STATE
# ========================================

class UserState(BaseModel):
    user: Optional[User] = None
    is_authenticated: bool = False
    is_loading: bool = False
    error: Optional[str] = None
    theme: str = "light"


class UserSession:
    """
    Who is signed in, as the UI sees it.

    Operations never raise StorefrontError; failures land in `state.error`.
    """

    def __init__(self, auth: AuthGateway):
        self.auth = auth
        self.state = UserState()

    def _set(self, **changes) -> None:
        self.state = self.state.model_copy(update=changes)

    async def _run(self, operation: Callable[[], Awaitable[T]]) -> Optional[T]:
        self._set(is_loading=True, error=None)
        try:
            result = await operation()
        except StorefrontError as e:
            self._set(is_loading=False, error=e.message)
            return None
        self._set(is_loading=False)
        return result

    def _signed_in(self, user: Optional[User]) -> Optional[User]:
        if user is not None:
            self._set(user=user, is_authenticated=True, error=None)
        return user

    async def login(self, email: str, password: str) -> Optional[User]:
        return self._signed_in(await self._run(lambda: self.auth.login(email, password)))

    async def register(self, name: str, email: str, password: str) -> Optional[User]:
        return self._signed_in(await self._run(lambda: self.auth.register(name, email, password)))

    async def validate_token(self) -> Optional[User]:
        user = await self._run(self.auth.validate_token)
        if user is None:
            # Not being logged in is not an error
            error = None if self.state.error == NO_TOKEN_MESSAGE else self.state.error
            self._set(user=None, is_authenticated=False, error=error)
            return None
        return self._signed_in(user)

    async def forgot_password(self, email: str) -> bool:
        return await self._run(lambda: self.auth.forgot_password(email)) is not None

    async def reset_password(self, token: str, password: str) -> bool:
        return await self._run(lambda: self.auth.reset_password(token, password)) is not None

    async def verify_email(self, token: str) -> bool:
        return await self._run(lambda: self.auth.verify_email(token)) is not None

    async def resend_verification(self, email: str) -> bool:
        return await self._run(lambda: self.auth.resend_verification(email)) is not None

    def logout(self) -> None:
        self.auth.logout()
        self._set(user=None, is_authenticated=False, error=None)

    def clear_error(self) -> None:
        self._set(error=None)

    def toggle_theme(self) -> None:
        self._set(theme="dark" if self.state.theme == "light" else "light")

    def set_theme(self, theme: str) -> None:
        if theme not in ("light", "dark"):
            raise ValueError(f"Unknown theme: {theme}")
        self._set(theme=theme)
