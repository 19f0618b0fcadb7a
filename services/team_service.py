"""
Team Service - teams, their training sessions and their coaches
"""

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from exceptions import DatabaseOperationException, ResourceConflictException, ResourceNotFoundException
from logging_config import logger
from models.entities import RoleCoach, Team, TrainingSession
from models.teams import AddCoachInTeamRequest, AddTrainingSessionInTeamRequest, TeamCreateRequest, TeamUpdateRequest
from services.documents import (
    coach_from_doc,
    find_by_ids,
    hall_from_doc,
    role_coach_from_doc,
    team_from_doc,
    training_session_from_doc,
)
from services.pagination import Page, PaginationHelper
from services.performance_monitor import monitor_query
from services.role_coach_service import RoleCoachService
from services.training_session_service import TrainingSessionService

SORTABLE_FIELDS = {"gender", "category", "teamNumber"}
DEFAULT_SORT = [("category", 1), ("gender", 1), ("teamNumber", 1)]


class TeamService:
    """Service for team-related operations"""

    def __init__(self, mongodb):
        self.db = mongodb
        self.collection = mongodb["teams"]
        self.training_sessions = TrainingSessionService(mongodb)
        self.role_coaches = RoleCoachService(mongodb)

    async def hydrate(self, docs: list[dict]) -> list[Team]:
        """
        Build teams with their training sessions (and each session's hall) and their
        role coaches (and each role's coach).
        """
        teams = [team_from_doc(doc) for doc in docs]
        if not teams:
            return teams
        by_id = {team.id: team for team in teams}
        team_ids = list(by_id)

        session_docs = await self.db["training_sessions"].find({"teamId": {"$in": team_ids}}).to_list(length=None)
        halls = await find_by_ids(self.db["halls"], (doc.get("hallId") for doc in session_docs))
        hall_entities = {hall_id: hall_from_doc(doc) for hall_id, doc in halls.items()}
        for doc in session_docs:
            training_session_from_doc(doc, hall=hall_entities.get(doc.get("hallId")), team=by_id[doc["teamId"]])

        role_docs = await self.db["role_coaches"].find({"teamId": {"$in": team_ids}}).to_list(length=None)
        coaches = await find_by_ids(self.db["coaches"], (doc.get("coachId") for doc in role_docs))
        coach_entities = {coach_id: coach_from_doc(doc) for coach_id, doc in coaches.items()}
        for doc in role_docs:
            role_coach_from_doc(doc, coach=coach_entities.get(doc.get("coachId")), team=by_id[doc["teamId"]])

        return teams

    async def get_team(self, team_id: str) -> Team:
        doc = await self.collection.find_one({"_id": team_id})
        if doc is None:
            raise ResourceNotFoundException(resource_type="Team", resource_id=team_id)
        return (await self.hydrate([doc]))[0]

    @monitor_query("list_teams")
    async def get_teams_page(self, page: int, size: int, sort: list[str] | None = None) -> Page[Team]:
        sort_spec = PaginationHelper.parse_sort(sort, SORTABLE_FIELDS, DEFAULT_SORT)
        items, total_count = await PaginationHelper.paginate_query(
            collection=self.collection, query={}, page=page, page_size=size, sort=sort_spec
        )
        return PaginationHelper.from_slice(await self.hydrate(items), page, size, total_count)

    @monitor_query("list_all_teams")
    async def get_all_teams(self) -> list[Team]:
        docs = await self.collection.find({}).sort(DEFAULT_SORT).to_list(length=None)
        return await self.hydrate(docs)

    async def _ensure_unique(self, team_data: TeamCreateRequest | TeamUpdateRequest, exclude_id: str | None = None):
        query: dict = {
            "gender": team_data.gender.value,
            "category": team_data.category.value,
            "teamNumber": team_data.teamNumber,
        }
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        if await self.collection.find_one(query) is not None:
            logger.warning(
                f"Team already exists: {team_data.gender.value}/{team_data.category.value}/{team_data.teamNumber}"
            )
            raise ResourceConflictException(
                "Team",
                f"gender {team_data.gender.value}, category {team_data.category.value}, "
                f"team number {team_data.teamNumber}",
                query,
            )

    async def create_team(self, team_data: TeamCreateRequest) -> Team:
        """
        Raises:
            ResourceConflictException: If a team with the same gender, category and number exists
        """
        await self._ensure_unique(team_data)

        doc = {"_id": str(ObjectId()), **team_data.model_dump(mode="json")}
        try:
            await self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise ResourceConflictException("Team", "duplicate gender, category and team number") from e
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="insert", collection="teams", details={"error": str(e)}
            ) from e
        logger.info(f"Team created: {doc['_id']}")
        return team_from_doc(doc)

    async def update_team(self, team_id: str, team_data: TeamUpdateRequest) -> Team:
        team = await self.get_team(team_id)
        if (team.gender, team.category, team.teamNumber) == (
            team_data.gender,
            team_data.category,
            team_data.teamNumber,
        ):
            logger.debug(f"Team {team_id} unchanged")
            return team

        await self._ensure_unique(team_data, exclude_id=team_id)
        try:
            await self.collection.update_one({"_id": team_id}, {"$set": team_data.model_dump(mode="json")})
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="update", collection="teams", details={"team_id": team_id, "error": str(e)}
            ) from e
        logger.info(f"Team updated: {team_id}")
        return await self.get_team(team_id)

    async def delete_team(self, team_id: str) -> None:
        """Delete a team along with its training sessions and coach roles"""
        if await self.collection.find_one({"_id": team_id}) is None:
            raise ResourceNotFoundException(resource_type="Team", resource_id=team_id)
        try:
            await self.db["training_sessions"].delete_many({"teamId": team_id})
            await self.db["role_coaches"].delete_many({"teamId": team_id})
            await self.collection.delete_one({"_id": team_id})
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="delete", collection="teams", details={"team_id": team_id, "error": str(e)}
            ) from e
        logger.info(f"Team deleted: {team_id}")

    async def add_training_session(
        self, team_id: str, session_data: AddTrainingSessionInTeamRequest
    ) -> TrainingSession:
        return await self.training_sessions.insert_training_session(
            team_id, session_data.hallId, session_data.timeSlot
        )

    async def add_role_coach(self, team_id: str, role_data: AddCoachInTeamRequest) -> RoleCoach:
        return await self.role_coaches.insert_role_coach(team_id, role_data.coachId, role_data.role)
