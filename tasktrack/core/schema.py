"""SQLite schema management (code-first approach)."""

import logging

import aiosqlite


logger = logging.getLogger(__name__)


# Central list of all collections in the schema
COLLECTIONS = [
    "categories",
    "tasks",
]

# Columns holding arbitrary JSON values, encoded on write and decoded on read
JSON_FIELDS: dict[str, frozenset[str]] = {
    "categories": frozenset(),
    "tasks": frozenset({"description"}),
}

_TABLES = {
    "categories": """
        CREATE TABLE IF NOT EXISTS categories (
            id TEXT PRIMARY KEY,
            owner_id TEXT NOT NULL,
            name TEXT NOT NULL,
            description TEXT,
            created TEXT NOT NULL,
            updated TEXT NOT NULL
        )
    """,
    "tasks": """
        CREATE TABLE IF NOT EXISTS tasks (
            id TEXT PRIMARY KEY,
            owner_id TEXT NOT NULL,
            title TEXT NOT NULL,
            resume TEXT NOT NULL,
            description TEXT,
            category_id TEXT,
            priority TEXT NOT NULL DEFAULT 'medium'
                CHECK (priority IN ('highest', 'high', 'medium', 'low', 'lowest')),
            due_at TEXT,
            due_time TEXT,
            created TEXT NOT NULL,
            updated TEXT NOT NULL
        )
    """,
}

_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_categories_owner ON categories (owner_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_owner ON tasks (owner_id)",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """Create all tables and indexes if they do not exist yet."""
    for collection in COLLECTIONS:
        await conn.execute(_TABLES[collection])
    for statement in _INDEXES:
        await conn.execute(statement)
    await conn.commit()
    logger.info("Schema initialized", extra={"collections": COLLECTIONS})
