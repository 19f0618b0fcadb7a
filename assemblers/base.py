"""
Base resource assembler.

An assembler turns a domain entity, a list of entities or a ``Page`` into a hypermedia
representation: translated content, navigation links, capability-gated affordances and,
one level deep, the representations of the relations it declares in ``embeds``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from exceptions import InvalidArgumentError
from logging_config import logger
from models.common import ReadModel
from models.hateoas import (
    CollectionRepresentation,
    Link,
    PagedRepresentation,
    PageMetadata,
    Representation,
    ResourceType,
)
from services.affordances import AffordanceSelector
from services.authorization import AuthorizationOracle
from services.link_builder import LinkBuilder
from services.pagination import Page

if TYPE_CHECKING:
    from assemblers import AssemblerRegistry


@dataclass(frozen=True)
class Embed:
    """A relation embedded one level deep, assembled by the child type's assembler"""

    rel: str
    attribute: str
    resource_type: ResourceType
    many: bool = False


class ResourceAssembler:
    resource_type: ClassVar[ResourceType]
    read_model: ClassVar[type[ReadModel]]
    embeds: ClassVar[tuple[Embed, ...]] = ()

    def __init__(
        self,
        link_builder: LinkBuilder,
        affordance_selector: AffordanceSelector,
        registry: AssemblerRegistry | None = None,
    ):
        self.link_builder = link_builder
        self.affordance_selector = affordance_selector
        self.registry = registry

    def translate(self, instance: Any) -> ReadModel:
        """Copy the entity's own fields into its read model; relations are left out"""
        return self.read_model.model_validate(instance)

    def extra_links(self, instance: Any) -> list[Link]:
        return []

    def _child(self, resource_type: ResourceType) -> ResourceAssembler:
        if self.registry is None:
            raise InvalidArgumentError(
                "registry", f"{type(self).__name__} declares embedded relations but has no registry"
            )
        return self.registry.get(resource_type)

    def _embedded(
        self, instance: Any, capabilities: AuthorizationOracle | None
    ) -> dict[str, Representation | list[Representation]]:
        embedded: dict[str, Representation | list[Representation]] = {}
        for embed in self.embeds:
            value = getattr(instance, embed.attribute, None)
            if value is None:
                continue
            child = self._child(embed.resource_type)
            if embed.many:
                embedded[embed.rel] = [child.to_single(item, capabilities) for item in value]
            else:
                embedded[embed.rel] = child.to_single(value, capabilities)
        return embedded

    def to_single(self, instance: Any, capabilities: AuthorizationOracle | None) -> Representation:
        if instance is None:
            raise InvalidArgumentError("instance")

        links = [
            self.link_builder.item_link(self.resource_type, instance.id),
            self.link_builder.collection_link(self.resource_type),
            *self.extra_links(instance),
        ]
        return Representation(
            resource_type=self.resource_type,
            content=self.translate(instance),
            links=links,
            # item affordances first, then the collection-level ones carried by the collection link
            affordances=[
                *self.affordance_selector.select_affordances(self.resource_type, instance, capabilities),
                *self.affordance_selector.select_affordances(self.resource_type, None, capabilities),
            ],
            embedded=self._embedded(instance, capabilities),
        )

    def to_collection(
        self, instances: Sequence[Any] | None, capabilities: AuthorizationOracle | None
    ) -> CollectionRepresentation:
        if instances is None:
            raise InvalidArgumentError("instances")

        items = [self.to_single(instance, capabilities) for instance in instances]
        logger.debug(f"Assembled collection of {len(items)} {self.resource_type.value}")
        return CollectionRepresentation(
            resource_type=self.resource_type,
            items=items,
            empty_collection_of=None if items else self.resource_type.collection_rel,
            links=[
                self.link_builder.all_items_link(self.resource_type, rel="self"),
                self.link_builder.paged_templated_link(self.resource_type),
            ],
            affordances=self.affordance_selector.select_affordances(
                self.resource_type, None, capabilities
            ),
        )

    def _navigation_links(self, page: Page, sort: list[str] | None = None) -> list[Link]:
        links: list[Link] = []
        if page.total_pages == 0:
            return links
        last = page.total_pages - 1
        if page.number > 0:
            links.append(self.link_builder.page_link(self.resource_type, 0, page.size, "first", sort))
            links.append(
                self.link_builder.page_link(self.resource_type, min(page.number - 1, last), page.size, "prev", sort)
            )
        if page.number < last:
            links.append(self.link_builder.page_link(self.resource_type, page.number + 1, page.size, "next", sort))
            links.append(self.link_builder.page_link(self.resource_type, last, page.size, "last", sort))
        return links

    def to_page(
        self,
        page: Page | None,
        capabilities: AuthorizationOracle | None,
        sort: list[str] | None = None,
    ) -> PagedRepresentation:
        if page is None:
            raise InvalidArgumentError("page")

        items = [self.to_single(instance, capabilities) for instance in page.content]
        logger.debug(
            f"Assembled page {page.number} of {self.resource_type.value} "
            f"({len(items)} of {page.total_elements} items)"
        )
        links = [
            self.link_builder.page_link(self.resource_type, page.number, page.size, "self", sort),
            self.link_builder.paged_templated_link(self.resource_type),
            self.link_builder.all_items_link(self.resource_type),
            *self._navigation_links(page, sort),
        ]
        return PagedRepresentation(
            resource_type=self.resource_type,
            items=items,
            empty_collection_of=None if items else self.resource_type.collection_rel,
            links=links,
            affordances=self.affordance_selector.select_affordances(
                self.resource_type, None, capabilities
            ),
            page=PageMetadata(
                size=page.size,
                number=page.number,
                total_elements=page.total_elements,
                total_pages=page.total_pages,
            ),
        )
