from pydantic import BaseModel, ConfigDict

# Field patterns published as-is in affordance field schemas
NOT_BLANK = r"^\s*\S.*$"
POSTAL_CODE = r"^\d{5}$"
PHONE = r"^$|\+?[0-9]{10,15}"


class RequestModel(BaseModel):
    """Base for incoming payloads"""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=False)


class ReadModel(BaseModel):
    """Base for outgoing content, copied field by field from an entity"""

    model_config = ConfigDict(from_attributes=True)
