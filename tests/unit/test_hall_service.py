"""Unit tests for HallService"""
import pytest
from pymongo.errors import DuplicateKeyError, PyMongoError

from exceptions import (
    DatabaseOperationException,
    ResourceConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from models.entities import Hall
from models.halls import HallCreateRequest, HallUpdateRequest
from services.hall_service import HallService
from tests.fixtures.data_fixtures import create_test_hall_doc
from tests.fixtures.mongo_mocks import make_collection, make_database


def hall_request(name: str = "Gymnase Herrade", model=HallCreateRequest):
    return model(
        name=name,
        address={"street": "1 rue du Stade", "city": "Hoenheim", "postalCode": "67800", "country": "France"},
    )


@pytest.fixture
def mock_db():
    return make_database()


@pytest.fixture
def halls(mock_db):
    return mock_db.collections["halls"]


@pytest.fixture
def hall_service(mock_db):
    return HallService(mock_db)


class TestGetHall:

    @pytest.mark.asyncio
    async def test_found(self, hall_service, halls):
        doc = create_test_hall_doc("h1", name="Gymnase Herrade")
        halls.find_one.return_value = doc

        hall = await hall_service.get_hall("h1")

        assert isinstance(hall, Hall)
        assert hall.id == "h1"
        assert hall.address.postalCode == doc["address"]["postalCode"]
        halls.find_one.assert_awaited_once_with({"_id": "h1"})

    @pytest.mark.asyncio
    async def test_not_found(self, hall_service):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            await hall_service.get_hall("missing")
        assert exc_info.value.details["resource_id"] == "missing"


class TestListHalls:

    @pytest.mark.asyncio
    async def test_page(self):
        docs = [create_test_hall_doc("h2"), create_test_hall_doc("h3")]
        halls = make_collection(docs, count=5)
        service = HallService(make_database(halls=halls))

        page = await service.get_halls_page(page=1, size=2, sort=["address.city,desc"])

        assert [hall.id for hall in page.content] == ["h2", "h3"]
        assert (page.number, page.size, page.total_elements, page.total_pages) == (1, 2, 5, 3)
        halls.find.return_value.sort.assert_called_once_with([("address.city", -1)])
        halls.find.return_value.skip.assert_called_once_with(2)

    @pytest.mark.asyncio
    async def test_unknown_sort_field(self, hall_service):
        with pytest.raises(ValidationException):
            await hall_service.get_halls_page(page=0, size=20, sort=["secret,asc"])

    @pytest.mark.asyncio
    async def test_all(self):
        halls = make_collection([create_test_hall_doc("h1")])
        service = HallService(make_database(halls=halls))

        result = await service.get_all_halls()

        assert [hall.id for hall in result] == ["h1"]
        halls.find.return_value.sort.assert_called_once_with([("name", 1)])


class TestCreateHall:

    @pytest.mark.asyncio
    async def test_success(self, hall_service, halls):
        hall = await hall_service.create_hall(hall_request())

        inserted = halls.insert_one.await_args.args[0]
        assert isinstance(inserted["_id"], str)
        assert inserted["name"] == "Gymnase Herrade"
        assert inserted["address"]["city"] == "Hoenheim"
        assert hall.id == inserted["_id"]

    @pytest.mark.asyncio
    async def test_duplicate_name(self, hall_service, halls):
        halls.find_one.return_value = create_test_hall_doc(name="Gymnase Herrade")

        with pytest.raises(ResourceConflictException) as exc_info:
            await hall_service.create_hall(hall_request())

        assert exc_info.value.status_code == 409
        halls.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_key_race(self, hall_service, halls):
        halls.insert_one.side_effect = DuplicateKeyError("E11000")

        with pytest.raises(ResourceConflictException):
            await hall_service.create_hall(hall_request())

    @pytest.mark.asyncio
    async def test_database_error(self, hall_service, halls):
        halls.insert_one.side_effect = PyMongoError("connection lost")

        with pytest.raises(DatabaseOperationException) as exc_info:
            await hall_service.create_hall(hall_request())
        assert exc_info.value.collection == "halls"


class TestUpdateHall:

    @pytest.mark.asyncio
    async def test_rename(self, hall_service, halls):
        halls.find_one.side_effect = [create_test_hall_doc("h1", name="Old name"), None]

        hall = await hall_service.update_hall("h1", hall_request("New name", HallUpdateRequest))

        assert hall.id == "h1"
        assert hall.name == "New name"
        halls.update_one.assert_awaited_once()
        assert halls.update_one.await_args.args[0] == {"_id": "h1"}
        # uniqueness was checked against the other halls only
        assert halls.find_one.await_args_list[1].args[0] == {"name": "New name", "_id": {"$ne": "h1"}}

    @pytest.mark.asyncio
    async def test_same_name_skips_uniqueness(self, hall_service, halls):
        halls.find_one.return_value = create_test_hall_doc("h1", name="Gymnase Herrade")

        await hall_service.update_hall("h1", hall_request(model=HallUpdateRequest))

        assert halls.find_one.await_count == 1

    @pytest.mark.asyncio
    async def test_not_found(self, hall_service, halls):
        with pytest.raises(ResourceNotFoundException):
            await hall_service.update_hall("h1", hall_request(model=HallUpdateRequest))
        halls.update_one.assert_not_awaited()


class TestDeleteHall:

    @pytest.mark.asyncio
    async def test_cascades_to_training_sessions(self, hall_service, mock_db, halls):
        halls.find_one.return_value = create_test_hall_doc("h1")

        await hall_service.delete_hall("h1")

        mock_db.collections["training_sessions"].delete_many.assert_awaited_once_with({"hallId": "h1"})
        halls.delete_one.assert_awaited_once_with({"_id": "h1"})

    @pytest.mark.asyncio
    async def test_not_found(self, hall_service, mock_db, halls):
        with pytest.raises(ResourceNotFoundException):
            await hall_service.delete_hall("h1")
        mock_db.collections["training_sessions"].delete_many.assert_not_awaited()
        halls.delete_one.assert_not_awaited()
