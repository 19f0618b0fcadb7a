"""
MongoDB document <-> entity mapping.

Relations are stored as id references (``teamId``, ``hallId``, ``coachId``); services hydrate
them into entity graphs only as deep as the assemblers embed or link them.
"""

from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection

from models.entities import Address, Coach, Hall, RoleCoach, Team, TimeSlot, TrainingSession


def time_slot_to_doc(time_slot) -> dict[str, Any]:
    return {
        "dayOfWeek": time_slot.dayOfWeek.value,
        "startTime": time_slot.startTime.isoformat(),
        "endTime": time_slot.endTime.isoformat(),
    }


def hall_from_doc(doc: dict) -> Hall:
    return Hall(id=doc["_id"], name=doc["name"], address=Address(**doc["address"]))


def coach_from_doc(doc: dict) -> Coach:
    return Coach(
        id=doc["_id"],
        name=doc["name"],
        surname=doc["surname"],
        email=doc.get("email"),
        phone=doc.get("phone"),
    )


def team_from_doc(doc: dict) -> Team:
    return Team(
        id=doc["_id"],
        gender=doc["gender"],
        category=doc["category"],
        teamNumber=doc["teamNumber"],
    )


def training_session_from_doc(doc: dict, hall: Hall | None = None, team: Team | None = None) -> TrainingSession:
    session = TrainingSession(id=doc["_id"], timeSlot=TimeSlot(**doc["timeSlot"]))
    if hall is not None:
        hall.add_training_session(session)
    if team is not None:
        team.add_training_session(session)
    return session


def role_coach_from_doc(doc: dict, coach: Coach | None = None, team: Team | None = None) -> RoleCoach:
    role_coach = RoleCoach(id=doc["_id"], role=doc["role"])
    if coach is not None:
        coach.add_role_coach(role_coach)
    if team is not None:
        team.add_role_coach(role_coach)
    return role_coach


async def find_by_ids(collection: AsyncIOMotorCollection, ids) -> dict[str, dict]:
    """Fetch documents by id in a single query, keyed by id"""
    wanted = sorted({i for i in ids if i})
    if not wanted:
        return {}
    cursor = collection.find({"_id": {"$in": wanted}})
    docs = await cursor.to_list(length=None)
    return {doc["_id"]: doc for doc in docs}
