"""User model definitions."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    """Base user fields."""

    email: EmailStr
    first_name: str = ""
    last_name: str = ""
    profile_image_url: Optional[str] = None


class UserCreate(UserBase):
    """Registration payload."""

    password: str = Field(min_length=8)


class User(UserBase):
    """User without credentials (for API responses)."""

    id: str = Field(alias="_id", serialization_alias="id")
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
