"""
Coach Service - CRUD operations for coaches
"""

from bson import ObjectId
from pymongo.errors import PyMongoError

from exceptions import DatabaseOperationException, ResourceNotFoundException
from logging_config import logger
from models.coaches import CoachRequest
from models.entities import Coach
from services.documents import coach_from_doc
from services.pagination import Page, PaginationHelper
from services.performance_monitor import monitor_query

SORTABLE_FIELDS = {"name", "surname", "email"}
DEFAULT_SORT = [("surname", 1), ("name", 1)]


class CoachService:
    def __init__(self, mongodb):
        self.db = mongodb
        self.collection = mongodb["coaches"]

    async def get_coach(self, coach_id: str) -> Coach:
        doc = await self.collection.find_one({"_id": coach_id})
        if doc is None:
            raise ResourceNotFoundException(resource_type="Coach", resource_id=coach_id)
        return coach_from_doc(doc)

    @monitor_query("list_coaches")
    async def get_coaches_page(self, page: int, size: int, sort: list[str] | None = None) -> Page[Coach]:
        sort_spec = PaginationHelper.parse_sort(sort, SORTABLE_FIELDS, DEFAULT_SORT)
        items, total_count = await PaginationHelper.paginate_query(
            collection=self.collection, query={}, page=page, page_size=size, sort=sort_spec
        )
        return PaginationHelper.from_slice([coach_from_doc(doc) for doc in items], page, size, total_count)

    @monitor_query("list_all_coaches")
    async def get_all_coaches(self) -> list[Coach]:
        docs = await self.collection.find({}).sort(DEFAULT_SORT).to_list(length=None)
        return [coach_from_doc(doc) for doc in docs]

    async def create_coach(self, coach_data: CoachRequest) -> Coach:
        doc = {"_id": str(ObjectId()), **coach_data.model_dump()}
        try:
            await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="insert", collection="coaches", details={"error": str(e)}
            ) from e
        logger.info(f"Coach created: {doc['_id']} ({coach_data.name} {coach_data.surname})")
        return coach_from_doc(doc)

    async def update_coach(self, coach_id: str, coach_data: CoachRequest) -> Coach:
        await self.get_coach(coach_id)
        try:
            await self.collection.update_one({"_id": coach_id}, {"$set": coach_data.model_dump()})
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="update", collection="coaches", details={"coach_id": coach_id, "error": str(e)}
            ) from e
        logger.info(f"Coach updated: {coach_id}")
        return coach_from_doc({"_id": coach_id, **coach_data.model_dump()})

    async def delete_coach(self, coach_id: str) -> None:
        """Delete a coach together with every team role they hold"""
        await self.get_coach(coach_id)
        try:
            await self.db["role_coaches"].delete_many({"coachId": coach_id})
            await self.collection.delete_one({"_id": coach_id})
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="delete", collection="coaches", details={"coach_id": coach_id, "error": str(e)}
            ) from e
        logger.info(f"Coach deleted: {coach_id}")
