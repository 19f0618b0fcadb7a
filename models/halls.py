from pydantic import Field

from models.common import NOT_BLANK, POSTAL_CODE, ReadModel, RequestModel


class AddressRequest(RequestModel):
    street: str = Field(..., max_length=100, pattern=NOT_BLANK)
    city: str = Field(..., max_length=50, pattern=NOT_BLANK)
    postalCode: str = Field(..., pattern=POSTAL_CODE)
    country: str = Field(..., max_length=50, pattern=NOT_BLANK)


class HallCreateRequest(RequestModel):
    name: str = Field(..., max_length=50, pattern=NOT_BLANK)
    address: AddressRequest = Field(...)


class HallUpdateRequest(RequestModel):
    name: str = Field(..., max_length=50, pattern=NOT_BLANK)
    address: AddressRequest = Field(...)


class AddressRead(ReadModel):
    street: str
    city: str
    postalCode: str
    country: str


class HallRead(ReadModel):
    id: str
    name: str
    address: AddressRead
