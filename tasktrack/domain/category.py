"""Category domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Category(BaseModel):
    """Category data transfer object."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Unique category ID from database")
    name: str = Field(..., description="Category name")
    description: str | None = Field(default=None, description="Optional free-text description")
    owner_id: str = Field(..., description="User who created the category")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Category":
        return cls.model_validate(record)
