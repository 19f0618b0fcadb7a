from datetime import time

from pydantic import Field, model_validator

from models.common import ReadModel, RequestModel
from models.entities import DayOfWeek


class TimeSlotRequest(RequestModel):
    dayOfWeek: DayOfWeek = Field(...)
    startTime: time = Field(...)
    endTime: time = Field(...)

    @model_validator(mode="after")
    def start_before_end(self):
        if self.startTime >= self.endTime:
            raise ValueError("startTime must be before endTime")
        return self


class TrainingSessionCreateRequest(RequestModel):
    teamId: str = Field(..., min_length=1)
    hallId: str = Field(..., min_length=1)
    timeSlot: TimeSlotRequest = Field(...)


class TrainingSessionUpdateRequest(RequestModel):
    hallId: str = Field(..., min_length=1)
    timeSlot: TimeSlotRequest = Field(...)


class TimeSlotRead(ReadModel):
    dayOfWeek: DayOfWeek
    startTime: time
    endTime: time


class TrainingSessionRead(ReadModel):
    id: str
    timeSlot: TimeSlotRead
