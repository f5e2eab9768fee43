"""
Pydantic schemas for accounts and sessions.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator


class AccountBase(BaseModel):
    """Base account schema."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Login email")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are matched case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class AccountCreate(AccountBase):
    """Schema for signing up."""

    password: str = Field(..., min_length=8, max_length=128)


class AccountResponse(AccountBase):
    """Public view of an account; the password hash is never exposed."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    """Credentials for a session."""

    email: str
    password: str


class Token(BaseModel):
    """Session token returned on login."""

    access_token: str
    token_type: str = "bearer"
