# storefront/backend/api/deps.py
"""
FastAPI dependencies for the development backend.

The in-memory services live on `app.state.services`, so every app created
by `create_app()` has its own data and tests do not leak into each other.
"""

from typing import Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict

from storefront.backend.services.auth_service import AuthService
from storefront.backend.services.cart_service import CartService
from storefront.backend.services.catalog_service import CatalogService
from storefront.backend.services.settings_service import SettingsService
from storefront.core.config import Settings
from storefront.schemas.settings_schema import UploadedImage
from storefront.schemas.user_schema import User

_bearer = HTTPBearer(auto_error=False)


class BackendServices(BaseModel):
    """Everything the endpoints share."""
    settings: Settings
    auth: AuthService
    catalog: CatalogService
    carts: CartService
    site: SettingsService
    uploads: Dict[str, UploadedImage] = {}

    model_config = ConfigDict(arbitrary_types_allowed=True)


def get_services(request: Request) -> BackendServices:
    return request.app.state.services


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    services: BackendServices = Depends(get_services),
) -> User:
    """Resolves the bearer token to a user; 401 otherwise."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, no token")
    user = services.auth.user_for_token(credentials.credentials)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, token failed")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user
