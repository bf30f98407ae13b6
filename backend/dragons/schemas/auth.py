"""
Auth Schema Definitions

Pydantic models for the register/login/refresh endpoints.
"""

from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, model_validator

from dragons.schemas.user import UserPublic

PASSWORD_MIN_LENGTH = 6
USERNAME_MIN_LENGTH = 3


class RegisterRequest(BaseModel):
    """
    Registration body.

    Every field is optional at the type level so that the checks below can
    report the first problem with a precise message, in a fixed order.
    """

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName", max_length=100)

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def check_fields(self) -> "RegisterRequest":
        if self.username is not None:
            self.username = self.username.strip()
        if self.email is not None:
            self.email = self.email.strip().lower()

        if not self.username:
            raise ValueError("Username is required")
        if not self.email:
            raise ValueError("Email is required")
        if not self.password:
            raise ValueError("Password is required")
        try:
            validate_email(self.email, check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("Invalid email format")
        if len(self.password) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
        if len(self.username) < USERNAME_MIN_LENGTH:
            raise ValueError(f"Username must be at least {USERNAME_MIN_LENGTH} characters long")
        return self


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode="after")
    def check_fields(self) -> "LoginRequest":
        if not self.email or not self.password:
            raise ValueError("Please provide both email and password")
        self.email = self.email.strip().lower()
        return self


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., alias="refreshToken")

    class Config:
        populate_by_name = True


class TokenResponse(BaseModel):
    """Tokens plus the authenticated user, returned by register and login."""

    msg: Optional[str] = None
    success: bool = True
    token: str
    refresh_token: str
    user: UserPublic
