from assemblers.base import ResourceAssembler
from models.halls import HallRead
from models.hateoas import ResourceType


class HallAssembler(ResourceAssembler):
    resource_type = ResourceType.HALL
    read_model = HallRead
