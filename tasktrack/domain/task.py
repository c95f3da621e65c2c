"""Task domain models and enums."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tasktrack.core.due_dates import is_overdue


class Priority(StrEnum):
    """Task priority, ordered from most to least urgent."""

    HIGHEST = "highest"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    LOWEST = "lowest"


class Task(BaseModel):
    """Task data transfer object.

    ``due_date`` holds the composed due instant and ``due_time`` the time of
    day as the client supplied it. ``overdue`` is never stored; it is filled
    in by :meth:`from_record` against the caller's notion of now.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Unique task ID from database")
    title: str = Field(..., description="Task title")
    resume: str = Field(..., description="Short summary shown on task cards")
    description: Any = Field(default=None, description="Rich-text body, stored and returned verbatim")
    category_id: str | None = Field(default=None, description="Referenced category (may dangle)")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")
    due_date: datetime | None = Field(default=None, description="Composed due instant")
    due_time: str | None = Field(default=None, description="Due time of day (HH:MM) as supplied")
    owner_id: str = Field(..., description="User who created the task")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")
    overdue: bool = Field(default=False, description="Derived: due instant lies in the past")

    @classmethod
    def from_record(cls, record: dict[str, Any], *, now: datetime) -> "Task":
        """Build a task from a stored record, deriving ``overdue`` at ``now``."""
        due_at = datetime.fromisoformat(record["due_at"]) if record.get("due_at") else None
        return cls(
            id=record["id"],
            title=record["title"],
            resume=record["resume"],
            description=record.get("description"),
            category_id=record.get("category_id"),
            priority=record.get("priority") or Priority.MEDIUM,
            due_date=due_at,
            due_time=record.get("due_time"),
            owner_id=record["owner_id"],
            created=record["created"],
            updated=record["updated"],
            overdue=is_overdue(due_at, now),
        )
