# storefront/core/exceptions.py
"""
Errors raised by the storefront client.

Two categories reach the user: "authentication required" (no token stored)
and "request failed" (the server rejected the call or it never arrived).
Each error carries the message shown to the user.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Error codes for the client."""
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    REQUEST_FAILED = "REQUEST_FAILED"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class StorefrontError(Exception):
    """Base exception for all storefront client errors."""

    def __init__(self, code: ErrorCode, message: str, context: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code.value, "message": self.message, "context": self.context}


class AuthenticationRequiredError(StorefrontError):
    """No bearer token is stored; raised before any network call."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(ErrorCode.AUTHENTICATION_REQUIRED, message)


class ApiRequestError(StorefrontError):
    """The backend answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(ErrorCode.REQUEST_FAILED, message, {"status_code": status_code})


class TransportError(StorefrontError):
    """The request never completed (connection refused, timeout, ...)."""

    def __init__(self, message: str):
        super().__init__(ErrorCode.TRANSPORT_ERROR, message)


class InvalidResponseError(StorefrontError):
    """The response body does not have the expected shape."""

    def __init__(self, message: str, payload: Any = None):
        self.payload = payload
        super().__init__(ErrorCode.INVALID_RESPONSE, message)
