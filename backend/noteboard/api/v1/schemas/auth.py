from __future__ import annotations

from pydantic import EmailStr, Field

from noteboard.core.models.base import AppBaseModel
from noteboard.core.models.user import MIN_PASSWORD_LENGTH


class SignInRequest(AppBaseModel):
    """Request to sign in with email and password."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class RegisterRequest(AppBaseModel):
    """Request to create an account."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, description="User's password")
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    date_of_birth: str | None = Field(default=None, description="ISO date, as entered")


class ProfileUpdate(AppBaseModel):
    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    date_of_birth: str | None = None


class PasswordChange(AppBaseModel):
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
