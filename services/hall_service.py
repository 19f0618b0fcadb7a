"""
Hall Service - CRUD operations for training halls
"""

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from exceptions import DatabaseOperationException, ResourceConflictException, ResourceNotFoundException
from logging_config import logger
from models.entities import Hall
from models.halls import HallCreateRequest, HallUpdateRequest
from services.documents import hall_from_doc
from services.pagination import Page, PaginationHelper
from services.performance_monitor import monitor_query

SORTABLE_FIELDS = {"name", "address.city", "address.postalCode"}
DEFAULT_SORT = [("name", 1)]


class HallService:
    """Service for hall-related database operations"""

    def __init__(self, mongodb):
        self.db = mongodb
        self.collection = mongodb["halls"]

    async def get_hall(self, hall_id: str) -> Hall:
        """
        Raises:
            ResourceNotFoundException: If no hall has this id
        """
        doc = await self.collection.find_one({"_id": hall_id})
        if doc is None:
            raise ResourceNotFoundException(resource_type="Hall", resource_id=hall_id)
        return hall_from_doc(doc)

    @monitor_query("list_halls")
    async def get_halls_page(self, page: int, size: int, sort: list[str] | None = None) -> Page[Hall]:
        sort_spec = PaginationHelper.parse_sort(sort, SORTABLE_FIELDS, DEFAULT_SORT)
        items, total_count = await PaginationHelper.paginate_query(
            collection=self.collection, query={}, page=page, page_size=size, sort=sort_spec
        )
        return PaginationHelper.from_slice([hall_from_doc(doc) for doc in items], page, size, total_count)

    @monitor_query("list_all_halls")
    async def get_all_halls(self) -> list[Hall]:
        docs = await self.collection.find({}).sort(DEFAULT_SORT).to_list(length=None)
        return [hall_from_doc(doc) for doc in docs]

    async def _ensure_unique_name(self, name: str, exclude_id: str | None = None) -> None:
        query: dict = {"name": name}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        if await self.collection.find_one(query) is not None:
            logger.warning(f"Hall name already in use: {name}")
            raise ResourceConflictException("Hall", f"a hall named '{name}' exists", {"name": name})

    async def create_hall(self, hall_data: HallCreateRequest) -> Hall:
        """
        Raises:
            ResourceConflictException: If a hall with the same name exists
            DatabaseOperationException: If the insert fails
        """
        await self._ensure_unique_name(hall_data.name)

        doc = {"_id": str(ObjectId()), **hall_data.model_dump()}
        try:
            await self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise ResourceConflictException("Hall", f"a hall named '{hall_data.name}' exists") from e
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="insert", collection="halls", details={"error": str(e)}
            ) from e

        logger.info(f"Hall created: {doc['_id']} ({hall_data.name})")
        return hall_from_doc(doc)

    async def update_hall(self, hall_id: str, hall_data: HallUpdateRequest) -> Hall:
        current = await self.get_hall(hall_id)
        if current.name != hall_data.name:
            await self._ensure_unique_name(hall_data.name, exclude_id=hall_id)

        try:
            await self.collection.update_one({"_id": hall_id}, {"$set": hall_data.model_dump()})
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="update", collection="halls", details={"hall_id": hall_id, "error": str(e)}
            ) from e

        logger.info(f"Hall updated: {hall_id}")
        return hall_from_doc({"_id": hall_id, **hall_data.model_dump()})

    async def delete_hall(self, hall_id: str) -> None:
        """Delete a hall and the training sessions held in it"""
        await self.get_hall(hall_id)
        try:
            sessions = await self.db["training_sessions"].delete_many({"hallId": hall_id})
            await self.collection.delete_one({"_id": hall_id})
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="delete", collection="halls", details={"hall_id": hall_id, "error": str(e)}
            ) from e
        logger.info(f"Hall deleted: {hall_id} ({sessions.deleted_count} training sessions removed)")
