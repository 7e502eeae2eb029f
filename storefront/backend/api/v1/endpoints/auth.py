# storefront/backend/api/v1/endpoints/auth.py
"""
Authentication endpoints: register, login, current user, password reset
and e-mail verification.
"""

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import EmailStr

from storefront.backend.api import deps
from storefront.backend.services.auth_service import AccountExistsError
from storefront.schemas.user_schema import AuthResponse, LoginRequest, RegisterRequest, User

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(payload: RegisterRequest, services: deps.BackendServices = Depends(deps.get_services)):
    try:
        user = services.auth.register(payload.name, payload.email, payload.password)
    except AccountExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    token = services.auth.issue_token(user)
    return AuthResponse(success=True, message="Registration successful", token=token, user=user)


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, services: deps.BackendServices = Depends(deps.get_services)):
    user = services.auth.authenticate(payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    token = services.auth.issue_token(user)
    return AuthResponse(success=True, message="Login successful", token=token, user=user)


@router.get("/me", response_model=AuthResponse)
async def me(user: User = Depends(deps.get_current_user)):
    return AuthResponse(success=True, user=user)


@router.post("/forgot-password")
async def forgot_password(
    email: EmailStr = Body(..., embed=True), services: deps.BackendServices = Depends(deps.get_services)
):
    # Same answer whether or not the account exists
    services.auth.create_reset_token(email)
    return {"success": True, "message": "If that email is registered, a reset link has been sent"}


@router.post("/reset-password/{token}")
async def reset_password(
    token: str,
    password: str = Body(..., embed=True, min_length=6),
    services: deps.BackendServices = Depends(deps.get_services),
):
    if not services.auth.reset_password(token, password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired reset token")
    return {"success": True, "message": "Password has been reset"}


@router.get("/verify-email/{token}")
async def verify_email(token: str, services: deps.BackendServices = Depends(deps.get_services)):
    if not services.auth.verify_email(token):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired verification token")
    return {"success": True, "message": "Email verified"}


@router.post("/resend-verification")
async def resend_verification(
    email: EmailStr = Body(..., embed=True), services: deps.BackendServices = Depends(deps.get_services)
):
    if services.auth.is_verified(email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is already verified")
    services.auth.create_verification_token(email)
    return {"success": True, "message": "Verification email sent"}
