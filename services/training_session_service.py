"""
Training Session Service - weekly training slots of a team in a hall
"""

from bson import ObjectId
from pymongo.errors import PyMongoError

from exceptions import DatabaseOperationException, ResourceNotFoundException
from logging_config import logger
from models.entities import TrainingSession
from models.training_sessions import TimeSlotRequest, TrainingSessionCreateRequest, TrainingSessionUpdateRequest
from services.documents import (
    find_by_ids,
    hall_from_doc,
    team_from_doc,
    time_slot_to_doc,
    training_session_from_doc,
)
from services.pagination import Page, PaginationHelper
from services.performance_monitor import monitor_query

SORTABLE_FIELDS = {"timeSlot.dayOfWeek", "timeSlot.startTime", "timeSlot.endTime", "hallId", "teamId"}
DEFAULT_SORT = [("timeSlot.dayOfWeek", 1), ("timeSlot.startTime", 1)]


class TrainingSessionService:
    def __init__(self, mongodb):
        self.db = mongodb
        self.collection = mongodb["training_sessions"]

    async def hydrate(self, docs: list[dict]) -> list[TrainingSession]:
        """Attach each session's hall and team, loaded in one query per collection"""
        halls = await find_by_ids(self.db["halls"], (doc.get("hallId") for doc in docs))
        teams = await find_by_ids(self.db["teams"], (doc.get("teamId") for doc in docs))
        hall_entities = {hall_id: hall_from_doc(doc) for hall_id, doc in halls.items()}
        team_entities = {team_id: team_from_doc(doc) for team_id, doc in teams.items()}
        return [
            training_session_from_doc(
                doc, hall=hall_entities.get(doc.get("hallId")), team=team_entities.get(doc.get("teamId"))
            )
            for doc in docs
        ]

    async def _require(self, collection: str, resource_type: str, resource_id: str) -> None:
        if await self.db[collection].find_one({"_id": resource_id}) is None:
            raise ResourceNotFoundException(resource_type=resource_type, resource_id=resource_id)

    async def get_training_session(self, session_id: str) -> TrainingSession:
        doc = await self.collection.find_one({"_id": session_id})
        if doc is None:
            raise ResourceNotFoundException(resource_type="TrainingSession", resource_id=session_id)
        return (await self.hydrate([doc]))[0]

    @monitor_query("list_training_sessions")
    async def get_training_sessions_page(
        self, page: int, size: int, sort: list[str] | None = None
    ) -> Page[TrainingSession]:
        sort_spec = PaginationHelper.parse_sort(sort, SORTABLE_FIELDS, DEFAULT_SORT)
        items, total_count = await PaginationHelper.paginate_query(
            collection=self.collection, query={}, page=page, page_size=size, sort=sort_spec
        )
        return PaginationHelper.from_slice(await self.hydrate(items), page, size, total_count)

    @monitor_query("list_all_training_sessions")
    async def get_all_training_sessions(self) -> list[TrainingSession]:
        docs = await self.collection.find({}).sort(DEFAULT_SORT).to_list(length=None)
        return await self.hydrate(docs)

    async def insert_training_session(self, team_id: str, hall_id: str, time_slot: TimeSlotRequest) -> TrainingSession:
        """
        Store a new session for an existing team and hall

        Raises:
            ResourceNotFoundException: If the team or the hall does not exist
        """
        await self._require("teams", "Team", team_id)
        await self._require("halls", "Hall", hall_id)

        doc = {
            "_id": str(ObjectId()),
            "teamId": team_id,
            "hallId": hall_id,
            "timeSlot": time_slot_to_doc(time_slot),
        }
        try:
            await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="insert", collection="training_sessions", details={"error": str(e)}
            ) from e
        logger.info(f"Training session created: {doc['_id']} (team {team_id}, hall {hall_id})")
        return (await self.hydrate([doc]))[0]

    async def create_training_session(self, session_data: TrainingSessionCreateRequest) -> TrainingSession:
        return await self.insert_training_session(
            session_data.teamId, session_data.hallId, session_data.timeSlot
        )

    async def update_training_session(
        self, session_id: str, session_data: TrainingSessionUpdateRequest
    ) -> TrainingSession:
        doc = await self.collection.find_one({"_id": session_id})
        if doc is None:
            raise ResourceNotFoundException(resource_type="TrainingSession", resource_id=session_id)
        await self._require("halls", "Hall", session_data.hallId)

        changes = {"hallId": session_data.hallId, "timeSlot": time_slot_to_doc(session_data.timeSlot)}
        try:
            await self.collection.update_one({"_id": session_id}, {"$set": changes})
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="update",
                collection="training_sessions",
                details={"session_id": session_id, "error": str(e)},
            ) from e
        logger.info(f"Training session updated: {session_id}")
        return (await self.hydrate([{**doc, **changes}]))[0]

    async def delete_training_session(self, session_id: str) -> None:
        result = await self.collection.delete_one({"_id": session_id})
        if result.deleted_count == 0:
            raise ResourceNotFoundException(resource_type="TrainingSession", resource_id=session_id)
        logger.info(f"Training session deleted: {session_id}")
