"""Pydantic models for request payloads.

Every field is optional at this layer so that missing, blank or mistyped
values reach the services, which reject them with field-tagged errors. Task
fields are untyped so that an update can report a missing task before it
looks at the body.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CategoryCreate(BaseModel):
    """Payload for creating a category."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str | None = Field(default=None, description="Category name (required by the service)")
    description: str | None = Field(default=None, description="Optional description")


class TaskInput(BaseModel):
    """Payload for creating or fully replacing a task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Any = Field(default=None, description="Task title (required by the service)")
    resume: Any = Field(default=None, description="Short summary (required by the service)")
    description: Any = Field(default=None, description="Rich-text body, opaque to the service")
    category_id: Any = Field(default=None, description="Category reference")
    priority: Any = Field(default=None, description="One of highest/high/medium/low/lowest")
    due_date: Any = Field(default=None, description="Due date (YYYY-MM-DD)")
    due_time: Any = Field(default=None, description="Due time of day (HH:MM)")
