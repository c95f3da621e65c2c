"""Unit tests for category_service module."""

import pytest

from tasktrack.core.db_client import Database
from tasktrack.core.errors import NotFound, ValidationError
from tasktrack.services import category_service
from tests.conftest import ALICE_ID, BOB_ID


@pytest.mark.unit
class TestCreateCategory:
    """Tests for create_category function."""

    async def test_create_category_success(self, db: Database):
        category = await category_service.create_category(db=db, user_id=ALICE_ID, name="Work")

        assert category.id
        assert category.name == "Work"
        assert category.description is None
        assert category.owner_id == ALICE_ID

    async def test_create_category_with_description(self, db: Database):
        category = await category_service.create_category(
            db=db,
            user_id=ALICE_ID,
            name="Errands",
            description="Things to pick up in town",
        )

        assert category.description == "Things to pick up in town"

    async def test_name_is_stripped(self, db: Database):
        category = await category_service.create_category(db=db, user_id=ALICE_ID, name="  Work  ")

        assert category.name == "Work"

    @pytest.mark.parametrize("name", [None, "", "   "])
    async def test_blank_name_rejected(self, db: Database, name):
        with pytest.raises(ValidationError, match="Category name is required") as exc_info:
            await category_service.create_category(db=db, user_id=ALICE_ID, name=name)

        assert exc_info.value.field == "name"
        assert await category_service.list_categories(db=db, user_id=ALICE_ID) == []


@pytest.mark.unit
class TestListCategories:
    """Tests for list_categories function."""

    async def test_empty(self, db: Database):
        assert await category_service.list_categories(db=db, user_id=ALICE_ID) == []

    async def test_only_own_categories_in_creation_order(self, db: Database):
        await category_service.create_category(db=db, user_id=ALICE_ID, name="Work")
        await category_service.create_category(db=db, user_id=BOB_ID, name="Bob's stuff")
        await category_service.create_category(db=db, user_id=ALICE_ID, name="Home")

        categories = await category_service.list_categories(db=db, user_id=ALICE_ID)

        assert [c.name for c in categories] == ["Work", "Home"]


@pytest.mark.unit
class TestGetCategory:
    """Tests for get_category function."""

    async def test_get_own_category(self, db: Database):
        created = await category_service.create_category(db=db, user_id=ALICE_ID, name="Work")

        fetched = await category_service.get_category(db=db, user_id=ALICE_ID, category_id=created.id)

        assert fetched == created

    async def test_missing_and_foreign_categories_look_the_same(self, db: Database):
        created = await category_service.create_category(db=db, user_id=ALICE_ID, name="Work")

        with pytest.raises(NotFound) as foreign:
            await category_service.get_category(db=db, user_id=BOB_ID, category_id=created.id)
        with pytest.raises(NotFound) as missing:
            await category_service.get_category(db=db, user_id=BOB_ID, category_id="does-not-exist")

        assert foreign.value.message == missing.value.message


@pytest.mark.unit
class TestDeleteCategory:
    """Tests for delete_category function."""

    async def test_delete_own_category(self, db: Database):
        created = await category_service.create_category(db=db, user_id=ALICE_ID, name="Work")

        await category_service.delete_category(db=db, user_id=ALICE_ID, category_id=created.id)

        assert await category_service.list_categories(db=db, user_id=ALICE_ID) == []

    async def test_delete_twice_raises_not_found(self, db: Database):
        created = await category_service.create_category(db=db, user_id=ALICE_ID, name="Work")
        await category_service.delete_category(db=db, user_id=ALICE_ID, category_id=created.id)

        with pytest.raises(NotFound):
            await category_service.delete_category(db=db, user_id=ALICE_ID, category_id=created.id)

    async def test_cannot_delete_other_users_category(self, db: Database):
        created = await category_service.create_category(db=db, user_id=ALICE_ID, name="Work")

        with pytest.raises(NotFound):
            await category_service.delete_category(db=db, user_id=BOB_ID, category_id=created.id)

        assert len(await category_service.list_categories(db=db, user_id=ALICE_ID)) == 1
