from assemblers.base import ResourceAssembler
from models.coaches import CoachRead
from models.hateoas import ResourceType


class CoachAssembler(ResourceAssembler):
    resource_type = ResourceType.COACH
    read_model = CoachRead
