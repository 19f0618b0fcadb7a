from assemblers.base import Embed, ResourceAssembler
from models.hateoas import ResourceType
from models.teams import TeamRead


class TeamAssembler(ResourceAssembler):
    resource_type = ResourceType.TEAM
    read_model = TeamRead
    embeds = (
        Embed("trainingSessions", "trainingSessions", ResourceType.TRAINING_SESSION, many=True),
        Embed("roleCoaches", "roleCoaches", ResourceType.ROLE_COACH, many=True),
    )
