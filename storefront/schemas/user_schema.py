# storefront/schemas/user_schema.py
"""
Pydantic schemas for users and authentication.
"""

from typing import Optional

from pydantic import AliasChoices, ConfigDict, EmailStr, Field, field_validator

from storefront.schemas.base import CamelModel, coerce_str


class User(CamelModel):
    """Authenticated user profile."""
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    email: EmailStr
    role: str = "user"
    avatar: Optional[str] = Field(default=None, validation_alias=AliasChoices("avatar", "profilePhoto"))
    phone_number: str = ""
    address: str = ""
    created_at: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value):
        return coerce_str(value)

    @field_validator("role", "phone_number", "address", mode="before")
    @classmethod
    def _null_text(cls, value, info):
        if value:
            return value
        return "user" if info.field_name == "role" else ""

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)


class AuthResponse(CamelModel):
    """Envelope of login, register and me."""
    success: bool = False
    message: Optional[str] = None
    token: Optional[str] = None
    user: Optional[User] = None
