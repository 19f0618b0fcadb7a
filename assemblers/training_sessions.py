from assemblers.base import Embed, ResourceAssembler
from models.entities import TrainingSession
from models.hateoas import Link, ResourceType
from models.training_sessions import TrainingSessionRead


class TrainingSessionAssembler(ResourceAssembler):
    resource_type = ResourceType.TRAINING_SESSION
    read_model = TrainingSessionRead
    embeds = (Embed("hall", "hall", ResourceType.HALL),)

    def extra_links(self, instance: TrainingSession) -> list[Link]:
        # The owning team is linked, never embedded: teams embed their sessions
        if instance.team is None:
            return []
        return [self.link_builder.relation_link("team", ResourceType.TEAM, instance.team.id)]
