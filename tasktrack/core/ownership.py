"""Owner-scoped access to collections.

Every owned record carries an ``owner_id`` column. Services reach those
records only through an :class:`OwnedCollection`, which adds the owner to
every match condition and stamps it on inserts. Reads, replacements and
deletions of another user's record therefore match nothing, exactly as if the
record did not exist.
"""

from collections.abc import Mapping
from typing import Any

from tasktrack.core.db_client import Database


OWNER_FIELD = "owner_id"

# Fields a caller may never overwrite through replace()
_PROTECTED_FIELDS = frozenset({"id", OWNER_FIELD, "created", "updated"})


class OwnedCollection:
    """A view of one collection restricted to a single owner."""

    def __init__(self, db: Database, collection: str, owner_id: str) -> None:
        if not owner_id:
            msg = "owner_id is required for owner-scoped access"
            raise ValueError(msg)
        self._db = db
        self.collection = collection
        self.owner_id = owner_id

    def scope(self, **where: Any) -> dict[str, Any]:
        """Return the match condition with the owner pinned."""
        return {**where, OWNER_FIELD: self.owner_id}

    async def find(self, **where: Any) -> list[dict[str, Any]]:
        return await self._db.list_records(collection=self.collection, where=self.scope(**where))

    async def get(self, record_id: str) -> dict[str, Any] | None:
        return await self._db.get_first_record(collection=self.collection, where=self.scope(id=record_id))

    async def insert(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return await self._db.create_record(collection=self.collection, data={**data, OWNER_FIELD: self.owner_id})

    async def replace(self, record_id: str, data: Mapping[str, Any]) -> dict[str, Any] | None:
        """Overwrite the record's fields in one conditional update.

        Returns None when no record with that id belongs to the owner.
        """
        fields = {key: value for key, value in data.items() if key not in _PROTECTED_FIELDS}
        return await self._db.update_record(
            collection=self.collection,
            where=self.scope(id=record_id),
            data=fields,
        )

    async def delete(self, record_id: str) -> bool:
        return await self._db.delete_record(collection=self.collection, where=self.scope(id=record_id))


def owned(db: Database, collection: str, owner_id: str) -> OwnedCollection:
    """Shortcut used by the services."""
    return OwnedCollection(db, collection, owner_id)
