"""
Assembler registry.

Wires one assembler per resource type and validates, once, that the declared embedding
relations form a directed acyclic graph.
"""

from collections.abc import Iterable

from assemblers.base import Embed, ResourceAssembler
from assemblers.coaches import CoachAssembler
from assemblers.feeds import FeedAssembler
from assemblers.halls import HallAssembler
from assemblers.role_coaches import RoleCoachAssembler
from assemblers.teams import TeamAssembler
from assemblers.training_sessions import TrainingSessionAssembler
from exceptions import AssemblyConfigurationError
from logging_config import logger
from models.hateoas import ResourceType
from services.affordances import AffordanceSelector
from services.link_builder import LinkBuilder

DEFAULT_ASSEMBLERS: tuple[type[ResourceAssembler], ...] = (
    HallAssembler,
    CoachAssembler,
    TeamAssembler,
    TrainingSessionAssembler,
    RoleCoachAssembler,
    FeedAssembler,
)


class AssemblerRegistry:
    def __init__(
        self,
        link_builder: LinkBuilder | None = None,
        assembler_classes: Iterable[type[ResourceAssembler]] = DEFAULT_ASSEMBLERS,
    ):
        self.link_builder = link_builder or LinkBuilder()
        self.affordance_selector = AffordanceSelector(self.link_builder)
        self._assemblers: dict[ResourceType, ResourceAssembler] = {}
        for assembler_class in assembler_classes:
            self._assemblers[assembler_class.resource_type] = assembler_class(
                self.link_builder, self.affordance_selector, self
            )
        self.validate()

    def get(self, resource_type: ResourceType) -> ResourceAssembler:
        try:
            return self._assemblers[resource_type]
        except KeyError:
            raise AssemblyConfigurationError(
                f"No assembler registered for resource type '{resource_type.value}'",
                {"resource_type": resource_type.value},
            ) from None

    def __getitem__(self, resource_type: ResourceType) -> ResourceAssembler:
        return self.get(resource_type)

    def validate(self) -> None:
        """
        Check the embedding declarations.

        Raises:
            AssemblyConfigurationError: if an embedded type has no assembler or if
                following the embeds of any type leads back to a type already on the path
        """
        for resource_type in self._assemblers:
            self._visit(resource_type, [])
        logger.debug(f"Validated embedding graph for {len(self._assemblers)} assemblers")

    def _visit(self, resource_type: ResourceType, path: list[ResourceType]) -> None:
        if resource_type in path:
            cycle = " -> ".join(rt.value for rt in [*path, resource_type])
            raise AssemblyConfigurationError(
                f"Embedding cycle detected: {cycle}", {"cycle": [rt.value for rt in path]}
            )
        for embed in self.get(resource_type).embeds:
            self._visit(embed.resource_type, [*path, resource_type])


_registry: AssemblerRegistry | None = None


def get_assembler_registry() -> AssemblerRegistry:
    """Process-wide registry, built on first use"""
    global _registry
    if _registry is None:
        _registry = AssemblerRegistry()
    return _registry


__all__ = [
    "AssemblerRegistry",
    "Embed",
    "ResourceAssembler",
    "CoachAssembler",
    "FeedAssembler",
    "HallAssembler",
    "RoleCoachAssembler",
    "TeamAssembler",
    "TrainingSessionAssembler",
    "get_assembler_registry",
]
