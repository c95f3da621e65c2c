"""Category service for owner-scoped CRUD operations."""

import logging

from tasktrack.core.db_client import Database
from tasktrack.core.errors import NotFound, ValidationError
from tasktrack.core.logging import log_with_user_context, span
from tasktrack.core.ownership import owned
from tasktrack.domain.category import Category


logger = logging.getLogger(__name__)

COLLECTION = "categories"
NOT_FOUND_MESSAGE = "Category not found or does not belong to the user"


async def list_categories(*, db: Database, user_id: str) -> list[Category]:
    """Return every category owned by the user, in creation order."""
    with span("category_service.list_categories"):
        records = await owned(db, COLLECTION, user_id).find()
        logger.debug("Retrieved %d categories", len(records), extra={"user_id": user_id})
        return [Category.from_record(record) for record in records]


async def create_category(
    *,
    db: Database,
    user_id: str,
    name: str | None,
    description: str | None = None,
) -> Category:
    """Create a category for the user.

    Args:
        db: Database handle
        user_id: Authenticated user, recorded as the owner
        name: Category name, must not be blank
        description: Optional description

    Returns:
        The stored category including its generated id

    Raises:
        ValidationError: If the name is missing or blank
    """
    with span("category_service.create_category"):
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Category name is required", field="name")

        record = await owned(db, COLLECTION, user_id).insert({"name": clean_name, "description": description})
        log_with_user_context(logger, "info", "category_created", user_id=user_id, category_id=record["id"])
        return Category.from_record(record)


async def get_category(*, db: Database, user_id: str, category_id: str) -> Category:
    """Fetch one of the user's categories.

    Raises:
        NotFound: If the category does not exist or belongs to another user
    """
    with span("category_service.get_category"):
        record = await owned(db, COLLECTION, user_id).get(category_id)
        if record is None:
            raise NotFound(NOT_FOUND_MESSAGE)
        return Category.from_record(record)


async def delete_category(*, db: Database, user_id: str, category_id: str) -> None:
    """Delete one of the user's categories.

    Tasks referencing the category are left untouched and keep the dangling id.

    Raises:
        NotFound: If the category does not exist or belongs to another user
    """
    with span("category_service.delete_category"):
        deleted = await owned(db, COLLECTION, user_id).delete(category_id)
        if not deleted:
            raise NotFound(NOT_FOUND_MESSAGE)
        log_with_user_context(logger, "info", "category_deleted", user_id=user_id, category_id=category_id)
