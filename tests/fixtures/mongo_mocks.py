"""Mocked motor collections and databases for service unit tests"""
from unittest.mock import AsyncMock, MagicMock

COLLECTIONS = ("halls", "coaches", "teams", "training_sessions", "role_coaches")


def make_collection(docs: list[dict] | None = None, count: int | None = None) -> MagicMock:
    """
    Collection whose find() cursor yields ``docs`` and whose write methods are AsyncMocks.

    The cursor supports the sort/skip/limit chain used by the services.
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(docs or []))
    collection.find.return_value = cursor

    collection.find_one = AsyncMock(return_value=None)
    collection.count_documents = AsyncMock(return_value=len(docs or []) if count is None else count)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=0))
    return collection


def make_database(**collections: MagicMock) -> MagicMock:
    """Database whose item access returns the given collections, or empty ones"""
    db = MagicMock()
    db.collections = {name: collections.get(name) or make_collection() for name in COLLECTIONS}
    db.__getitem__ = MagicMock(side_effect=lambda name: db.collections[name])
    return db
