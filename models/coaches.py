from pydantic import EmailStr, Field

from models.common import NOT_BLANK, PHONE, ReadModel, RequestModel


class CoachRequest(RequestModel):
    name: str = Field(..., pattern=NOT_BLANK)
    surname: str = Field(..., pattern=NOT_BLANK)
    email: EmailStr = Field(...)
    phone: str | None = Field(default=None, pattern=PHONE)


class CoachRead(ReadModel):
    id: str
    name: str
    surname: str
    email: str | None = None
    phone: str | None = None
