"""Unit tests for the index creation script"""
from unittest.mock import AsyncMock

import pytest
from pymongo.errors import OperationFailure

from scripts.create_indexes import INDEXES, create_index_safe, create_indexes
from tests.fixtures.mongo_mocks import make_database


def index_calls(collection):
    return {call.kwargs["name"]: call for call in collection.create_index.await_args_list}


@pytest.fixture
def mock_db():
    db = make_database()
    for collection in db.collections.values():
        collection.create_index = AsyncMock()
    return db


class TestCreateIndexes:

    @pytest.mark.asyncio
    async def test_creates_every_index(self, mock_db):
        created = await create_indexes(mock_db)

        assert created == sum(len(indexes) for indexes in INDEXES.values())
        halls = index_calls(mock_db.collections["halls"])
        assert halls["hall_name_unique_idx"].args[0] == [("name", 1)]
        assert halls["hall_name_unique_idx"].kwargs["unique"] is True
        teams = index_calls(mock_db.collections["teams"])
        assert teams["team_identity_unique_idx"].args[0] == [("gender", 1), ("category", 1), ("teamNumber", 1)]
        assert set(index_calls(mock_db.collections["role_coaches"])) == {"team_idx", "coach_idx"}

    @pytest.mark.asyncio
    async def test_existing_index_is_skipped(self, mock_db):
        mock_db.collections["halls"].create_index.side_effect = OperationFailure("Index already exists")

        created = await create_indexes(mock_db)

        assert created == sum(len(indexes) for indexes in INDEXES.values()) - 1

    @pytest.mark.asyncio
    async def test_other_failures_propagate(self, mock_db):
        collection = mock_db.collections["teams"]
        collection.create_index.side_effect = OperationFailure("not authorized")

        with pytest.raises(OperationFailure):
            await create_index_safe(collection, [("gender", 1)], name="x")
