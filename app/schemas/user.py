"""
Pydantic schemas for user registration and token login.
"""

from pydantic import BaseModel, EmailStr, Field

from app.schemas.base import CamelModel


class UserRegisterRequest(CamelModel):
    """Request schema for user registration."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class TokenRequest(BaseModel):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str
