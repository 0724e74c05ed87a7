"""Bucket list item model definitions."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ItemStatus(str, Enum):
    """Bucket list item states."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class Priority(str, Enum):
    """Bucket list item priorities."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Categories offered by the UI; the category field itself is free-form.
SUGGESTED_CATEGORIES = (
    "Travel",
    "Adventure",
    "Personal Growth",
    "Career",
    "Education",
    "Relationships",
    "Health",
    "Finance",
    "Creativity",
    "Skill",
    "Other",
)


class BucketItemBase(BaseModel):
    """Base bucket list item fields."""

    title: str
    description: Optional[str] = None
    status: ItemStatus = ItemStatus.NOT_STARTED
    category: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    tags: list[str] = Field(default_factory=list)
    target_date: Optional[date] = None
    completion_date: Optional[date] = None
    image_url: Optional[str] = None


class BucketItemCreate(BucketItemBase):
    """Item creation model."""

    title: str = Field(min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class BucketItemUpdate(BaseModel):
    """Item update model - all fields optional."""

    title: Optional[str] = Field(default=None, min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    status: Optional[ItemStatus] = None
    category: Optional[str] = None
    priority: Optional[Priority] = None
    tags: Optional[list[str]] = None
    target_date: Optional[date] = None
    completion_date: Optional[date] = None
    image_url: Optional[str] = None


class BucketItem(BucketItemBase):
    """Full bucket list item with store-managed fields."""

    id: int = Field(alias="_id", serialization_alias="id")
    owner_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
