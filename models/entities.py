from __future__ import annotations

from datetime import datetime, time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    F = "F"
    M = "M"
    N = "N"


class Category(str, Enum):
    U11 = "U11"
    U13 = "U13"
    U15 = "U15"
    U18 = "U18"
    SENIOR = "SENIOR"
    EDH = "EDH"  # Ecole de Handball, beginners


class Role(str, Enum):
    MAIN = "MAIN"
    ASSISTANT = "ASSISTANT"
    SUPPORT_STAFF = "SUPPORT_STAFF"


class DayOfWeek(str, Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"


class Entity(BaseModel):
    """
    Base for persisted domain objects.

    The object graph is bidirectional (Team <-> TrainingSession <-> Hall, Team <-> RoleCoach <-> Coach),
    so equality is by class and identifier instead of by field values.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: str | None = None

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return False
        return self.id is not None and self.id == other.id

    def __hash__(self):
        return hash(type(self))


# Embeddables
# ------------


class Address(BaseModel):
    street: str = Field(...)
    city: str = Field(...)
    postalCode: str = Field(...)
    country: str = Field(...)


class TimeSlot(BaseModel):
    dayOfWeek: DayOfWeek = Field(...)
    startTime: time = Field(...)
    endTime: time = Field(...)


# Entities
# ------------


class Hall(Entity):
    name: str = Field(...)
    address: Address = Field(...)
    trainingSessions: list[TrainingSession] = Field(default_factory=list, repr=False)

    def add_training_session(self, training_session: TrainingSession) -> None:
        self.trainingSessions.append(training_session)
        training_session.hall = self


class Coach(Entity):
    name: str = Field(...)
    surname: str = Field(...)
    email: str | None = None
    phone: str | None = None
    roleCoaches: list[RoleCoach] = Field(default_factory=list, repr=False)

    def add_role_coach(self, role_coach: RoleCoach) -> None:
        self.roleCoaches.append(role_coach)
        role_coach.coach = self


class Team(Entity):
    gender: Gender = Field(...)
    category: Category = Field(...)
    teamNumber: int = Field(...)
    trainingSessions: list[TrainingSession] = Field(default_factory=list, repr=False)
    roleCoaches: list[RoleCoach] = Field(default_factory=list, repr=False)

    def add_training_session(self, training_session: TrainingSession) -> None:
        self.trainingSessions.append(training_session)
        training_session.team = self

    def add_role_coach(self, role_coach: RoleCoach) -> None:
        self.roleCoaches.append(role_coach)
        role_coach.team = self


class TrainingSession(Entity):
    timeSlot: TimeSlot = Field(...)
    hall: Hall | None = Field(default=None, repr=False)
    team: Team | None = Field(default=None, repr=False)


class RoleCoach(Entity):
    role: Role = Field(...)
    coach: Coach | None = Field(default=None, repr=False)
    team: Team | None = Field(default=None, repr=False)


class FeedEntry(Entity):
    """A post mirrored from the club's Facebook page"""

    message: str | None = None
    createdTime: datetime | None = None
    permalinkUrl: str | None = None
    fullPicture: str | None = None


Hall.model_rebuild()
Coach.model_rebuild()
Team.model_rebuild()
TrainingSession.model_rebuild()
RoleCoach.model_rebuild()
