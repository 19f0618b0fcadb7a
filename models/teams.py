from pydantic import Field

from models.common import ReadModel, RequestModel
from models.entities import Category, Gender, Role
from models.training_sessions import TimeSlotRequest


class TeamCreateRequest(RequestModel):
    gender: Gender = Field(...)
    category: Category = Field(...)
    teamNumber: int = Field(..., ge=1)


class TeamUpdateRequest(RequestModel):
    gender: Gender = Field(...)
    category: Category = Field(...)
    teamNumber: int = Field(..., ge=1)


class AddTrainingSessionInTeamRequest(RequestModel):
    hallId: str = Field(..., min_length=1)
    timeSlot: TimeSlotRequest = Field(...)


class AddCoachInTeamRequest(RequestModel):
    coachId: str = Field(..., min_length=1)
    role: Role = Field(...)


class TeamRead(ReadModel):
    id: str
    gender: Gender
    category: Category
    teamNumber: int
