"""
Product model as stored and returned by the API
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now():
    """Helper function for Pydantic default_factory to get current UTC time"""
    return datetime.now(timezone.utc)


class Product(BaseModel):
    """Persisted product; JSON field names are camelCase"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: float
    is_visible: bool = Field(default=True, alias="isVisible")
    created_at: Optional[datetime] = Field(default_factory=utc_now, alias="createdAt")
    updated_at: Optional[datetime] = Field(default_factory=utc_now, alias="updatedAt")
