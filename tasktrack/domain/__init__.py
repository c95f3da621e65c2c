"""Domain models and DTOs."""

from tasktrack.domain.category import Category
from tasktrack.domain.create_models import CategoryCreate, TaskInput
from tasktrack.domain.task import Priority, Task


__all__ = [
    "Category",
    "CategoryCreate",
    "Priority",
    "Task",
    "TaskInput",
]
