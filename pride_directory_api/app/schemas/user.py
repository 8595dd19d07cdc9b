"""
Pydantic models for user accounts.

Users only exist to give a listing submission an owner: they register
with an e‑mail and password and exchange them for a bearer token.
Passwords are never returned through the API.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class UserBase(BaseModel):
    email: str = Field(..., examples=["owner@example.com"])
    full_name: Optional[str] = Field(None, examples=["Alex Rivera"])


class UserCreate(UserBase):
    """Schema for registering a user."""

    password: str = Field(..., min_length=8, examples=["strongpassword"])

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Please enter a valid email address")
        return v


class UserLogin(BaseModel):
    email: str
    password: str


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
    disabled: bool = False

    model_config = {
        "from_attributes": True,
    }


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
