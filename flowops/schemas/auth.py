"""
Auth-related Pydantic schemas for request/response validation.
"""
from pydantic import BaseModel, EmailStr, Field, field_validator

from flowops.schemas.user import UserResponse


class UserRegister(BaseModel):
    """
    Schema for self-registration.

    Role, status and the system-admin flag are not accepted here; anything
    extra in the payload is ignored and the account starts pending/employee.
    """
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6, max_length=72)
    establishment: str = Field(min_length=1, max_length=255)
    phone_number: str | None = Field(default=None, max_length=50)

    @field_validator("name", "username", "establishment")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class UserLogin(BaseModel):
    """Schema for user login request."""
    username_or_email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("username_or_email", "password")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()


class Token(BaseModel):
    """Schema for token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


class TokenRefresh(BaseModel):
    """Schema for token refresh request."""
    refresh_token: str
