"""Task endpoints."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from tasktrack.core.config import Settings, constants
from tasktrack.core.db_client import Database
from tasktrack.domain.create_models import TaskInput
from tasktrack.domain.task import Task
from tasktrack.interface.auth import get_current_user_id
from tasktrack.interface.dependencies import get_app_settings, get_db
from tasktrack.services import task_service


router = APIRouter(prefix="/tasks", tags=["tasks"])


def _task_body(task: Task) -> dict:
    return task.model_dump(mode="json", by_alias=True)


@router.get("")
async def list_tasks(
    priority: list[str] | None = Query(default=None, description="Only tasks with these priorities"),
    category_id: str | None = Query(default=None, alias="categoryId", description="Only tasks in this category"),
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> JSONResponse:
    """List the caller's tasks, each with a freshly computed overdue flag."""
    priorities = [task_service.parse_priority(p) for p in priority or [] if p.strip()]
    tasks = await task_service.list_tasks(
        db=db,
        user_id=user_id,
        priorities=priorities,
        category_id=category_id,
    )
    return JSONResponse(
        content={"success": True, "tasks": [_task_body(t) for t in tasks]},
        status_code=constants.HTTP_OK,
    )


@router.post("")
async def create_task(
    payload: TaskInput,
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
    app_settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """Create a task owned by the caller."""
    task = await task_service.create_task(db=db, user_id=user_id, payload=payload, tz=app_settings.tzinfo)
    return JSONResponse(
        content={"success": True, "task": _task_body(task)},
        status_code=constants.HTTP_CREATED,
    )


@router.get("/{task_id}")
async def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> JSONResponse:
    """Fetch one of the caller's tasks."""
    task = await task_service.get_task(db=db, user_id=user_id, task_id=task_id)
    return JSONResponse(content={"success": True, "task": _task_body(task)}, status_code=constants.HTTP_OK)


@router.put("/{task_id}")
async def update_task(
    task_id: str,
    payload: TaskInput,
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
    app_settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """Replace one of the caller's tasks. Omitted fields are cleared."""
    task = await task_service.update_task(
        db=db,
        user_id=user_id,
        task_id=task_id,
        payload=payload,
        tz=app_settings.tzinfo,
    )
    return JSONResponse(content={"success": True, "task": _task_body(task)}, status_code=constants.HTTP_OK)


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> JSONResponse:
    """Delete one of the caller's tasks."""
    await task_service.delete_task(db=db, user_id=user_id, task_id=task_id)
    return JSONResponse(
        content={"success": True, "message": "Task deleted successfully"},
        status_code=constants.HTTP_OK,
    )
