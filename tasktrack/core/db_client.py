"""SQLite database client wrapper with CRUD operations."""

import asyncio
import json
import logging
import re
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from tasktrack.core import schema


logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"

_IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class DatabaseError(Exception):
    """Raised when the storage engine fails to execute an operation."""


def _validate_identifier(name: str, *, kind: str = "collection") -> None:
    """Validate that a table or column name contains only alphanumeric characters and underscores."""
    if not _IDENTIFIER_PATTERN.match(name):
        msg = f"Invalid {kind} name: {name}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def build_where(where: Mapping[str, Any]) -> tuple[str, list[Any]]:
    """Translate an equality mapping into a SQL WHERE clause and parameter list.

    A list, tuple or set value matches any of its members. ``None`` matches NULL.
    """
    conditions: list[str] = []
    params: list[Any] = []

    for column, value in where.items():
        _validate_identifier(column, kind="column")
        if isinstance(value, list | tuple | set | frozenset):
            members = list(value)
            if not members:
                conditions.append("0")
                continue
            placeholders = ", ".join("?" for _ in members)
            conditions.append(f"{column} IN ({placeholders})")
            params.extend(members)
        elif value is None:
            conditions.append(f"{column} IS NULL")
        else:
            conditions.append(f"{column} = ?")
            params.append(value)

    return " AND ".join(conditions) or "1", params


class Database:
    """Process-wide handle on the SQLite store.

    Opened once at startup and shared by every request. A lock serializes
    statements so concurrent requests never interleave inside one
    execute/fetch/commit sequence on the shared connection.
    """

    def __init__(self, conn: aiosqlite.Connection, *, path: str) -> None:
        self._conn = conn
        self._lock = asyncio.Lock()
        self.path = path

    @classmethod
    async def open(cls, db_path: str | Path) -> "Database":
        """Connect to the database file and make sure the schema exists."""
        path = str(db_path)
        if path != MEMORY_DB:
            resolved = Path(path).resolve()
            resolved.parent.mkdir(parents=True, exist_ok=True)
            path = str(resolved)

        try:
            conn = await aiosqlite.connect(path)
            conn.row_factory = aiosqlite.Row
            if path != MEMORY_DB:
                await conn.execute("PRAGMA journal_mode = WAL")
            await schema.init_db(conn)
        except aiosqlite.Error as e:
            logger.error("open_database_failed", extra={"db_path": path, "error": str(e)})
            msg = f"Failed to open database at {path}: {e}"
            raise DatabaseError(msg) from e

        logger.info("Opened SQLite connection", extra={"db_path": path})
        return cls(conn, path=path)

    async def close(self) -> None:
        """Close the underlying connection."""
        async with self._lock:
            await self._conn.close()
        logger.info("Closed SQLite connection", extra={"db_path": self.path})

    def _encode(self, collection: str, data: Mapping[str, Any]) -> dict[str, Any]:
        json_fields = schema.JSON_FIELDS.get(collection, frozenset())
        encoded: dict[str, Any] = {}
        for key, val in data.items():
            _validate_identifier(key, kind="column")
            if key in json_fields:
                encoded[key] = None if val is None else json.dumps(val)
            elif isinstance(val, datetime):
                encoded[key] = val.isoformat()
            else:
                encoded[key] = val
        return encoded

    def _decode(self, collection: str, row: aiosqlite.Row) -> dict[str, Any]:
        json_fields = schema.JSON_FIELDS.get(collection, frozenset())
        record = {key: row[key] for key in row.keys()}
        for key in json_fields:
            if record.get(key) is not None:
                record[key] = json.loads(record[key])
        return record

    async def create_record(self, *, collection: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a new record and return it with its generated id and timestamps."""
        _validate_identifier(collection)
        now = _utc_timestamp()
        values = self._encode(collection, {**data, "id": uuid.uuid4().hex, "created": now, "updated": now})

        columns_str = ", ".join(values)
        placeholders_str = ", ".join("?" for _ in values)
        query = f"INSERT INTO {collection} ({columns_str}) VALUES ({placeholders_str}) RETURNING *"  # noqa: S608 - identifiers are validated

        try:
            async with self._lock:
                cursor = await self._conn.execute(query, list(values.values()))
                rows = await cursor.fetchall()
                await self._conn.commit()
        except (aiosqlite.Error, ValueError) as e:
            logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to create record in {collection}: {e}"
            raise DatabaseError(msg) from e

        record = self._decode(collection, rows[0])
        logger.info("Created record", extra={"collection": collection, "record_id": record["id"]})
        return record

    async def get_first_record(self, *, collection: str, where: Mapping[str, Any]) -> dict[str, Any] | None:
        """Return the first record matching every condition, or None."""
        _validate_identifier(collection)
        where_clause, params = build_where(where)
        query = f"SELECT * FROM {collection} WHERE {where_clause} LIMIT 1"  # noqa: S608 - identifiers are validated

        try:
            async with self._lock:
                cursor = await self._conn.execute(query, params)
                row = await cursor.fetchone()
        except (aiosqlite.Error, ValueError) as e:
            logger.error("get_first_record_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to get record from {collection}: {e}"
            raise DatabaseError(msg) from e

        if row is None:
            return None
        return self._decode(collection, row)

    async def list_records(
        self,
        *,
        collection: str,
        where: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """List records matching every condition, in insertion order."""
        _validate_identifier(collection)
        where_clause, params = build_where(where or {})
        query = f"SELECT * FROM {collection} WHERE {where_clause} ORDER BY rowid"  # noqa: S608 - identifiers are validated

        try:
            async with self._lock:
                cursor = await self._conn.execute(query, params)
                rows = await cursor.fetchall()
        except (aiosqlite.Error, ValueError) as e:
            logger.error("list_records_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to list records from {collection}: {e}"
            raise DatabaseError(msg) from e

        records = [self._decode(collection, row) for row in rows]
        logger.debug("Listed records", extra={"collection": collection, "count": len(records)})
        return records

    async def update_record(
        self,
        *,
        collection: str,
        where: Mapping[str, Any],
        data: Mapping[str, Any],
    ) -> dict[str, Any] | None:
        """Update the record matching every condition in one statement.

        Returns the updated record, or None when nothing matched.
        """
        if not data:
            msg = "Empty update payload"
            raise ValueError(msg)

        _validate_identifier(collection)
        values = self._encode(collection, {**data, "updated": _utc_timestamp()})
        set_clause = ", ".join(f"{key} = ?" for key in values)
        where_clause, where_params = build_where(where)
        query = f"UPDATE {collection} SET {set_clause} WHERE {where_clause} RETURNING *"  # noqa: S608 - identifiers are validated

        try:
            async with self._lock:
                cursor = await self._conn.execute(query, [*values.values(), *where_params])
                rows = await cursor.fetchall()
                await self._conn.commit()
        except (aiosqlite.Error, ValueError) as e:
            logger.error("update_record_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to update record in {collection}: {e}"
            raise DatabaseError(msg) from e

        if not rows:
            return None

        record = self._decode(collection, rows[0])
        logger.info("Updated record", extra={"collection": collection, "record_id": record["id"]})
        return record

    async def delete_record(self, *, collection: str, where: Mapping[str, Any]) -> bool:
        """Delete records matching every condition. Returns True if anything was removed."""
        _validate_identifier(collection)
        where_clause, params = build_where(where)
        query = f"DELETE FROM {collection} WHERE {where_clause}"  # noqa: S608 - identifiers are validated

        try:
            async with self._lock:
                cursor = await self._conn.execute(query, params)
                await self._conn.commit()
        except (aiosqlite.Error, ValueError) as e:
            logger.error("delete_record_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to delete record from {collection}: {e}"
            raise DatabaseError(msg) from e

        deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Deleted record", extra={"collection": collection})
        return deleted
