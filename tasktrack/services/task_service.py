"""Task service for owner-scoped CRUD, due date composition and derived status."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime, tzinfo
from typing import Any

from tasktrack.core.db_client import Database
from tasktrack.core.due_dates import compose_due_at, parse_due_date, parse_due_time
from tasktrack.core.errors import NotFound, ValidationError
from tasktrack.core.logging import log_with_user_context, span
from tasktrack.core.ownership import owned
from tasktrack.domain.create_models import TaskInput
from tasktrack.domain.task import Priority, Task


logger = logging.getLogger(__name__)

COLLECTION = "tasks"
NOT_FOUND_MESSAGE = "Task not found or does not belong to the user"


def _text_field(value: Any, field: str) -> str | None:
    """Return a stripped string, treating empty and whitespace-only strings as absent.

    Raises:
        ValidationError: If the value is present but not a string
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid value for '{field}': expected a string", field=field)
    return value.strip() or None


def parse_priority(value: Any) -> Priority:
    """Parse a priority name, defaulting to medium when absent.

    Raises:
        ValidationError: If the value is not one of the five priorities
    """
    text = _text_field(value, "priority")
    if text is None:
        return Priority.MEDIUM
    try:
        return Priority(text.lower())
    except ValueError as e:
        allowed = ", ".join(p.value for p in Priority)
        raise ValidationError(f"Invalid priority '{value}'. Use one of: {allowed}", field="priority") from e


def build_task_fields(payload: TaskInput, *, tz: tzinfo) -> dict[str, Any]:
    """Validate a create/replace payload and return the fields to store.

    Every stored field is present in the result, so a replace clears
    whatever the payload leaves out.

    Args:
        payload: Incoming task payload
        tz: Zone in which the due date and time are interpreted

    Returns:
        Column values for the tasks collection (owner excluded)

    Raises:
        ValidationError: Tagged with the offending field
    """
    title = _text_field(payload.title, "title")
    if title is None:
        raise ValidationError("Title is required", field="title")

    resume = _text_field(payload.resume, "resume")
    if resume is None:
        raise ValidationError("Resume is required", field="resume")

    raw_date = _text_field(payload.due_date, "dueDate")
    raw_time = _text_field(payload.due_time, "dueTime")

    if raw_time is not None and raw_date is None:
        raise ValidationError("Due date is required when a time is set", field="dueDate")

    due_date = None
    if raw_date is not None:
        try:
            due_date = parse_due_date(raw_date)
        except ValueError as e:
            raise ValidationError(str(e), field="dueDate") from e

    due_time = None
    if raw_time is not None:
        try:
            due_time = parse_due_time(raw_time)
        except ValueError as e:
            raise ValidationError(str(e), field="dueTime") from e

    due_at = compose_due_at(due_date, due_time, tz)
    priority = parse_priority(payload.priority)

    return {
        "title": title,
        "resume": resume,
        "description": payload.description,
        "category_id": _text_field(payload.category_id, "categoryId"),
        "priority": priority.value,
        "due_at": due_at.isoformat() if due_at is not None else None,
        "due_time": due_time.strftime("%H:%M") if due_time is not None else None,
    }


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(UTC)


async def list_tasks(
    *,
    db: Database,
    user_id: str,
    now: datetime | None = None,
    priorities: Iterable[Priority] | None = None,
    category_id: str | None = None,
) -> list[Task]:
    """Return the user's tasks with ``overdue`` computed at ``now``.

    Args:
        db: Database handle
        user_id: Authenticated user
        now: Reference time for the overdue flag (defaults to current UTC time)
        priorities: Only return tasks with one of these priorities
        category_id: Only return tasks referencing this category

    Returns:
        Tasks in creation order
    """
    with span("task_service.list_tasks"):
        where: dict[str, Any] = {}
        wanted = sorted({Priority(p).value for p in priorities or ()})
        if wanted:
            where["priority"] = wanted
        if category_id:
            where["category_id"] = category_id

        records = await owned(db, COLLECTION, user_id).find(**where)
        reference = _now(now)

        logger.debug("Retrieved %d tasks", len(records), extra={"user_id": user_id})
        return [Task.from_record(record, now=reference) for record in records]


async def get_task(*, db: Database, user_id: str, task_id: str, now: datetime | None = None) -> Task:
    """Fetch one of the user's tasks.

    Raises:
        NotFound: If the task does not exist or belongs to another user
    """
    with span("task_service.get_task"):
        record = await owned(db, COLLECTION, user_id).get(task_id)
        if record is None:
            raise NotFound(NOT_FOUND_MESSAGE)
        return Task.from_record(record, now=_now(now))


async def create_task(
    *,
    db: Database,
    user_id: str,
    payload: TaskInput,
    tz: tzinfo,
    now: datetime | None = None,
) -> Task:
    """Validate and store a new task owned by the user.

    Validation runs before anything is written.

    Raises:
        ValidationError: If the payload is invalid
    """
    with span("task_service.create_task"):
        fields = build_task_fields(payload, tz=tz)
        record = await owned(db, COLLECTION, user_id).insert(fields)

        log_with_user_context(
            logger,
            "info",
            "task_created",
            user_id=user_id,
            task_id=record["id"],
            priority=fields["priority"],
            has_due_date=fields["due_at"] is not None,
        )
        return Task.from_record(record, now=_now(now))


async def update_task(
    *,
    db: Database,
    user_id: str,
    task_id: str,
    payload: TaskInput,
    tz: tzinfo,
    now: datetime | None = None,
) -> Task:
    """Replace every editable field of one of the user's tasks.

    Fields missing from the payload are cleared, not kept. The write itself
    matches on id and owner, so a task deleted in the meantime still ends in
    NotFound rather than a partial write.

    Raises:
        NotFound: If the task does not exist or belongs to another user
        ValidationError: If the payload is invalid
    """
    with span("task_service.update_task"):
        tasks = owned(db, COLLECTION, user_id)
        if await tasks.get(task_id) is None:
            raise NotFound(NOT_FOUND_MESSAGE)

        fields = build_task_fields(payload, tz=tz)
        record = await tasks.replace(task_id, fields)
        if record is None:
            raise NotFound(NOT_FOUND_MESSAGE)

        log_with_user_context(logger, "info", "task_updated", user_id=user_id, task_id=task_id)
        return Task.from_record(record, now=_now(now))


async def delete_task(*, db: Database, user_id: str, task_id: str) -> None:
    """Delete one of the user's tasks.

    Raises:
        NotFound: If the task does not exist or belongs to another user
    """
    with span("task_service.delete_task"):
        deleted = await owned(db, COLLECTION, user_id).delete(task_id)
        if not deleted:
            raise NotFound(NOT_FOUND_MESSAGE)
        log_with_user_context(logger, "info", "task_deleted", user_id=user_id, task_id=task_id)
