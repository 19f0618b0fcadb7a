"""
Role Coach Service - the role a coach holds within a team
"""

from bson import ObjectId
from pymongo.errors import PyMongoError

from exceptions import DatabaseOperationException, ResourceNotFoundException
from logging_config import logger
from models.entities import Role, RoleCoach
from services.documents import coach_from_doc, find_by_ids, role_coach_from_doc, team_from_doc
from services.pagination import Page, PaginationHelper
from services.performance_monitor import monitor_query

SORTABLE_FIELDS = {"role", "coachId", "teamId"}
DEFAULT_SORT = [("teamId", 1), ("role", 1)]


class RoleCoachService:
    def __init__(self, mongodb):
        self.db = mongodb
        self.collection = mongodb["role_coaches"]

    async def hydrate(self, docs: list[dict]) -> list[RoleCoach]:
        coaches = await find_by_ids(self.db["coaches"], (doc.get("coachId") for doc in docs))
        teams = await find_by_ids(self.db["teams"], (doc.get("teamId") for doc in docs))
        coach_entities = {coach_id: coach_from_doc(doc) for coach_id, doc in coaches.items()}
        team_entities = {team_id: team_from_doc(doc) for team_id, doc in teams.items()}
        return [
            role_coach_from_doc(
                doc, coach=coach_entities.get(doc.get("coachId")), team=team_entities.get(doc.get("teamId"))
            )
            for doc in docs
        ]

    async def get_role_coach(self, role_coach_id: str) -> RoleCoach:
        doc = await self.collection.find_one({"_id": role_coach_id})
        if doc is None:
            raise ResourceNotFoundException(resource_type="RoleCoach", resource_id=role_coach_id)
        return (await self.hydrate([doc]))[0]

    @monitor_query("list_role_coaches")
    async def get_role_coaches_page(self, page: int, size: int, sort: list[str] | None = None) -> Page[RoleCoach]:
        sort_spec = PaginationHelper.parse_sort(sort, SORTABLE_FIELDS, DEFAULT_SORT)
        items, total_count = await PaginationHelper.paginate_query(
            collection=self.collection, query={}, page=page, page_size=size, sort=sort_spec
        )
        return PaginationHelper.from_slice(await self.hydrate(items), page, size, total_count)

    @monitor_query("list_all_role_coaches")
    async def get_all_role_coaches(self) -> list[RoleCoach]:
        docs = await self.collection.find({}).sort(DEFAULT_SORT).to_list(length=None)
        return await self.hydrate(docs)

    async def insert_role_coach(self, team_id: str, coach_id: str, role: Role) -> RoleCoach:
        """
        Raises:
            ResourceNotFoundException: If the team or the coach does not exist
        """
        if await self.db["teams"].find_one({"_id": team_id}) is None:
            raise ResourceNotFoundException(resource_type="Team", resource_id=team_id)
        if await self.db["coaches"].find_one({"_id": coach_id}) is None:
            raise ResourceNotFoundException(resource_type="Coach", resource_id=coach_id)

        doc = {"_id": str(ObjectId()), "teamId": team_id, "coachId": coach_id, "role": Role(role).value}
        try:
            await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise DatabaseOperationException(
                operation="insert", collection="role_coaches", details={"error": str(e)}
            ) from e
        logger.info(f"Coach {coach_id} added to team {team_id} as {doc['role']}")
        return (await self.hydrate([doc]))[0]

    async def delete_role_coach(self, role_coach_id: str) -> None:
        result = await self.collection.delete_one({"_id": role_coach_id})
        if result.deleted_count == 0:
            raise ResourceNotFoundException(resource_type="RoleCoach", resource_id=role_coach_id)
        logger.info(f"Role coach deleted: {role_coach_id}")
