from tasktrack.services import (
    category_service,
    task_service,
)


__all__ = [
    "category_service",
    "task_service",
]
