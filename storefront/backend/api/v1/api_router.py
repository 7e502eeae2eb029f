# storefront/backend/api/v1/api_router.py
"""
Main router of the development backend.

Registers every domain router under the paths the storefront calls.
"""

from fastapi import APIRouter

from storefront.backend.api.v1.endpoints import auth, cart, products, settings, upload

# ========================================
# MAIN ROUTER
# ========================================

api_router = APIRouter()

# ========================================
# DOMAIN ROUTERS
# ========================================

# AUTH: register, login, current user, password reset
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])

# PRODUCTS: catalogue listing and detail
api_router.include_router(products.router, prefix="/products", tags=["Products"])

# CART: per-user cart identified by the bearer token
api_router.include_router(cart.router, prefix="/cart", tags=["Cart"])

# SETTINGS: home hero and flash sale switch
api_router.include_router(settings.router, prefix="/settings", tags=["Settings"])

# UPLOAD: product and hero images
api_router.include_router(upload.router, prefix="/upload", tags=["Upload"])
