from models.common import ReadModel
from models.entities import Role


class RoleCoachRead(ReadModel):
    id: str
    role: Role
