"""Tests for the SQLite database gateway."""

import pytest

from tasktrack.core.db_client import MEMORY_DB, Database, DatabaseError, build_where


@pytest.mark.unit
class TestBuildWhere:
    """Tests for build_where."""

    def test_equality_conditions_joined_with_and(self):
        clause, params = build_where({"owner_id": "u1", "id": "t1"})

        assert clause == "owner_id = ? AND id = ?"
        assert params == ["u1", "t1"]

    def test_list_value_becomes_in(self):
        clause, params = build_where({"priority": ["high", "low"]})

        assert clause == "priority IN (?, ?)"
        assert params == ["high", "low"]

    def test_empty_list_matches_nothing(self):
        clause, params = build_where({"priority": []})

        assert clause == "0"
        assert params == []

    def test_none_matches_null(self):
        clause, params = build_where({"category_id": None})

        assert clause == "category_id IS NULL"
        assert params == []

    def test_empty_mapping_matches_everything(self):
        assert build_where({}) == ("1", [])

    def test_invalid_column_rejected(self):
        with pytest.raises(ValueError, match="Invalid column name"):
            build_where({"id; DROP TABLE tasks": "x"})


def _category(owner_id: str = "u1", name: str = "Work") -> dict:
    return {"owner_id": owner_id, "name": name, "description": None}


def _task(owner_id: str = "u1", **overrides) -> dict:
    data = {
        "owner_id": owner_id,
        "title": "Buy milk",
        "resume": "grocery",
        "description": None,
        "category_id": None,
        "priority": "medium",
        "due_at": None,
        "due_time": None,
    }
    data.update(overrides)
    return data


@pytest.mark.unit
class TestDatabase:
    """Tests for Database CRUD operations."""

    async def test_create_record_assigns_id_and_timestamps(self, db: Database):
        record = await db.create_record(collection="categories", data=_category())

        assert record["id"]
        assert record["name"] == "Work"
        assert record["owner_id"] == "u1"
        assert record["created"]
        assert record["updated"] == record["created"]

    async def test_create_record_generates_unique_ids(self, db: Database):
        first = await db.create_record(collection="categories", data=_category(name="A"))
        second = await db.create_record(collection="categories", data=_category(name="B"))

        assert first["id"] != second["id"]

    async def test_get_first_record(self, db: Database):
        created = await db.create_record(collection="categories", data=_category())

        found = await db.get_first_record(collection="categories", where={"id": created["id"]})

        assert found == created

    async def test_get_first_record_missing_returns_none(self, db: Database):
        assert await db.get_first_record(collection="categories", where={"id": "nope"}) is None

    async def test_list_records_in_insertion_order(self, db: Database):
        for name in ["First", "Second", "Third"]:
            await db.create_record(collection="categories", data=_category(name=name))

        records = await db.list_records(collection="categories")

        assert [r["name"] for r in records] == ["First", "Second", "Third"]

    async def test_list_records_filters(self, db: Database):
        await db.create_record(collection="tasks", data=_task(priority="high"))
        await db.create_record(collection="tasks", data=_task(priority="low"))
        await db.create_record(collection="tasks", data=_task(priority="medium"))
        await db.create_record(collection="tasks", data=_task(owner_id="u2", priority="high"))

        records = await db.list_records(
            collection="tasks",
            where={"owner_id": "u1", "priority": ["high", "low"]},
        )

        assert sorted(r["priority"] for r in records) == ["high", "low"]

    async def test_json_description_round_trips(self, db: Database):
        body = {"ops": [{"insert": "Hello "}, {"insert": "world", "attributes": {"bold": True}}]}

        created = await db.create_record(collection="tasks", data=_task(description=body))
        fetched = await db.get_first_record(collection="tasks", where={"id": created["id"]})

        assert created["description"] == body
        assert fetched["description"] == body

    async def test_string_description_round_trips_verbatim(self, db: Database):
        html = "<p>Remember <strong>oat</strong> milk</p>"

        created = await db.create_record(collection="tasks", data=_task(description=html))

        assert created["description"] == html

    async def test_update_record_matching_condition(self, db: Database):
        created = await db.create_record(collection="categories", data=_category())

        updated = await db.update_record(
            collection="categories",
            where={"id": created["id"], "owner_id": "u1"},
            data={"name": "Home"},
        )

        assert updated is not None
        assert updated["name"] == "Home"
        assert updated["created"] == created["created"]

    async def test_update_record_condition_mismatch_returns_none(self, db: Database):
        created = await db.create_record(collection="categories", data=_category())

        result = await db.update_record(
            collection="categories",
            where={"id": created["id"], "owner_id": "someone-else"},
            data={"name": "Hijacked"},
        )

        assert result is None
        unchanged = await db.get_first_record(collection="categories", where={"id": created["id"]})
        assert unchanged["name"] == "Work"

    async def test_update_record_empty_payload_rejected(self, db: Database):
        with pytest.raises(ValueError, match="Empty update payload"):
            await db.update_record(collection="categories", where={"id": "x"}, data={})

    async def test_delete_record(self, db: Database):
        created = await db.create_record(collection="categories", data=_category())

        assert await db.delete_record(collection="categories", where={"id": created["id"]}) is True
        assert await db.get_first_record(collection="categories", where={"id": created["id"]}) is None

    async def test_delete_record_missing_returns_false(self, db: Database):
        assert await db.delete_record(collection="categories", where={"id": "nope"}) is False

    async def test_invalid_collection_name_rejected(self, db: Database):
        with pytest.raises(ValueError, match="Invalid collection name"):
            await db.list_records(collection="tasks; DROP TABLE tasks")

    async def test_storage_failure_raises_database_error(self, db: Database):
        with pytest.raises(DatabaseError, match="Failed to list records from missing_table"):
            await db.list_records(collection="missing_table")

    async def test_constraint_violation_raises_database_error(self, db: Database):
        with pytest.raises(DatabaseError, match="Failed to create record in tasks"):
            await db.create_record(collection="tasks", data=_task(priority="urgent"))

    async def test_in_memory_database(self):
        database = await Database.open(MEMORY_DB)
        try:
            record = await database.create_record(collection="categories", data=_category())
            assert await database.list_records(collection="categories") == [record]
        finally:
            await database.close()

    async def test_closed_connection_raises_database_error(self, test_settings):
        database = await Database.open(test_settings.sqlite_db_path)
        await database.close()

        with pytest.raises(DatabaseError, match="Failed to list records from tasks"):
            await database.list_records(collection="tasks")
