"""
User account schemas.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from flowops.models.enums import Role, UserStatus


class UserResponse(BaseModel):
    """User as returned by the API (never includes the password hash)."""
    id: UUID
    name: str
    email: str
    username: str
    role: Role
    status: UserStatus
    establishment: str
    phone_number: Optional[str] = None
    is_system_admin: bool = False
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Direct account creation by a system admin; the account starts active."""
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6, max_length=72)
    role: Role = Role.EMPLOYEE
    establishment: str = Field(min_length=1, max_length=255)
    phone_number: Optional[str] = Field(default=None, max_length=50)

    model_config = ConfigDict(use_enum_values=True)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(default=None, max_length=50)
    establishment: Optional[str] = Field(default=None, min_length=1, max_length=255)
    role: Optional[Role] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=72)

    model_config = ConfigDict(use_enum_values=True)


class ApproveRequest(BaseModel):
    """Role to grant on approval; defaults to the applicant's current role."""
    role: Optional[Role] = None
