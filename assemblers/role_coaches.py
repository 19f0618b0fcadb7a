from assemblers.base import Embed, ResourceAssembler
from models.entities import RoleCoach
from models.hateoas import Link, ResourceType
from models.role_coaches import RoleCoachRead


class RoleCoachAssembler(ResourceAssembler):
    resource_type = ResourceType.ROLE_COACH
    read_model = RoleCoachRead
    embeds = (Embed("coach", "coach", ResourceType.COACH),)

    def extra_links(self, instance: RoleCoach) -> list[Link]:
        if instance.team is None:
            return []
        return [self.link_builder.relation_link("team", ResourceType.TEAM, instance.team.id)]
