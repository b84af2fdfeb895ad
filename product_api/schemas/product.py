"""
Schemas for product payloads.

Bodies reach these only after the route's validation rules passed; the
schemas fix the stored types (text fields as str, price as a finite float).
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


def scalar_to_str(value: Any) -> Any:
    """Numbers and booleans are stored as their JSON text"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class ProductCreate(BaseModel):
    """Schema for creating a new product"""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., allow_inf_nan=False)

    @field_validator("name", "description", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return scalar_to_str(v)


class ProductUpdate(BaseModel):
    """Schema for updating an existing product; only fields sent are applied"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, allow_inf_nan=False)
    is_visible: Optional[StrictBool] = Field(None, alias="isVisible")

    @field_validator("name", "description", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return scalar_to_str(v)

    def changes(self) -> Dict[str, Any]:
        """Fields present in the payload, keyed by their stored names"""
        return self.model_dump(exclude_unset=True, by_alias=True)
