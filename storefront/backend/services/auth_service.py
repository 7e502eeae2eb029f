# storefront/backend/services/auth_service.py
"""
User accounts and bearer tokens for the development backend.

Accounts and tokens are kept in memory. Passwords are hashed with passlib;
tokens are opaque random strings.
"""

import logging
import secrets
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

from passlib.context import CryptContext
from pydantic import BaseModel

from storefront.schemas.user_schema import User

logger = logging.getLogger(__name__)

# Create the context once and reuse it
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class AccountExistsError(ValueError):
    pass


class StoredUser(BaseModel):
    user: User
    password_hash: str
    is_verified: bool = False


class AuthService:
    """Registers users, checks passwords and maps tokens to users."""

    def __init__(self):
        self._users: Dict[str, StoredUser] = {}  # by lower-cased email
        self._tokens: Dict[str, str] = {}  # token -> email
        self._reset_tokens: Dict[str, str] = {}
        self._verification_tokens: Dict[str, str] = {}

    def register(self, name: str, email: str, password: str, role: str = "user") -> User:
        key = email.lower()
        if key in self._users:
            raise AccountExistsError("User already exists")
        user = User(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            role=role,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._users[key] = StoredUser(user=user, password_hash=pwd_context.hash(password))
        self._verification_tokens[secrets.token_urlsafe(24)] = key
        logger.info(f"Registered {email} ({role})")
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        stored = self._users.get(email.lower())
        if stored is None:
            return None
        if not pwd_context.verify(password, stored.password_hash):
            return None
        return stored.user

    def issue_token(self, user: User) -> str:
        token = secrets.token_urlsafe(32)
        self._tokens[token] = user.email.lower()
        return token

    def user_for_token(self, token: str) -> Optional[User]:
        email = self._tokens.get(token)
        if email is None or email not in self._users:
            return None
        return self._users[email].user

    def revoke_token(self, token: str) -> None:
        self._tokens.pop(token, None)

    # Password reset and e-mail verification. Nothing is mailed; the
    # tokens are returned so callers (and tests) can use them.

    def create_reset_token(self, email: str) -> Optional[str]:
        key = email.lower()
        if key not in self._users:
            return None
        token = secrets.token_urlsafe(24)
        self._reset_tokens[token] = key
        return token

    def reset_password(self, token: str, password: str) -> bool:
        key = self._reset_tokens.pop(token, None)
        if key is None or key not in self._users:
            return False
        stored = self._users[key]
        self._users[key] = stored.model_copy(update={"password_hash": pwd_context.hash(password)})
        # Existing sessions end with the password change
        self._tokens = {t: e for t, e in self._tokens.items() if e != key}
        return True

    def create_verification_token(self, email: str) -> Optional[str]:
        key = email.lower()
        if key not in self._users:
            return None
        token = secrets.token_urlsafe(24)
        self._verification_tokens[token] = key
        return token

    def verify_email(self, token: str) -> bool:
        key = self._verification_tokens.pop(token, None)
        if key is None or key not in self._users:
            return False
        self._users[key] = self._users[key].model_copy(update={"is_verified": True})
        return True

    def is_verified(self, email: str) -> bool:
        stored = self._users.get(email.lower())
        return bool(stored and stored.is_verified)
