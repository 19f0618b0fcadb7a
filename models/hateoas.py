"""
Hypermedia representation models.

Representations are built fresh by the assemblers on every call and rendered as
HAL (``_links``, ``_embedded``) with HAL-FORMS affordances (``_templates``).
Relation names and affordance names are part of the public API contract.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

HAL_FORMS_MEDIA_TYPE = "application/prs.hal-forms+json"


class ResourceType(str, Enum):
    """Resource types exposed through the API, valued by their path segment"""

    COACH = "coaches"
    HALL = "halls"
    TEAM = "teams"
    TRAINING_SESSION = "training-sessions"
    ROLE_COACH = "role-coaches"
    FEED = "feeds"

    @property
    def path(self) -> str:
        return f"/{self.value}"

    @property
    def collection_rel(self) -> str:
        """camelCase relation used for the collection, e.g. trainingSessions"""
        head, *tail = self.value.split("-")
        return head + "".join(part.title() for part in tail)

    @property
    def all_items_rel(self) -> str:
        rel = self.collection_rel
        return "all" + rel[0].upper() + rel[1:]


class Link(BaseModel):
    model_config = ConfigDict(frozen=True)

    rel: str
    href: str
    templated: bool = False

    def to_hal(self) -> dict[str, Any]:
        body: dict[str, Any] = {"href": self.href}
        if self.templated:
            body["templated"] = True
        return body


class FieldDescriptor(BaseModel):
    """Static description of one editable input field of an affordance"""

    model_config = ConfigDict(frozen=True)

    name: str
    required: bool = False
    type: str = "text"
    pattern: str | None = None
    min: float | None = None
    max: float | None = None
    minLength: int | None = None
    maxLength: int | None = None
    options: tuple[str, ...] | None = None

    def to_hal(self) -> dict[str, Any]:
        body: dict[str, Any] = {"name": self.name, "required": self.required, "type": self.type}
        if self.pattern is not None:
            body["regex"] = self.pattern
        for key in ("min", "max", "minLength", "maxLength"):
            value = getattr(self, key)
            if value is not None:
                body[key] = value
        if self.options is not None:
            body["options"] = {"inline": list(self.options)}
        return body


class Affordance(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    method: str
    target: str
    properties: tuple[FieldDescriptor, ...] = ()

    def to_hal(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "target": self.target,
            "properties": [prop.to_hal() for prop in self.properties],
        }


def _links_to_hal(links: list[Link]) -> dict[str, Any]:
    grouped: dict[str, list[Link]] = {}
    for link in links:
        grouped.setdefault(link.rel, []).append(link)
    return {
        rel: group[0].to_hal() if len(group) == 1 else [link.to_hal() for link in group]
        for rel, group in grouped.items()
    }


def _templates_to_hal(affordances: list[Affordance]) -> dict[str, Any]:
    # HAL-FORMS clients look for "default" first; named entries stay the contract
    templates = {"default": affordances[0].to_hal()}
    for affordance in affordances:
        templates[affordance.name] = affordance.to_hal()
    return templates


class HypermediaModel(BaseModel):
    """Links and affordances shared by single, collection and paged representations"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    resource_type: ResourceType
    links: list[Link] = Field(default_factory=list)
    affordances: list[Affordance] = Field(default_factory=list)

    def link_map(self) -> dict[str, list[Link]]:
        grouped: dict[str, list[Link]] = {}
        for link in self.links:
            grouped.setdefault(link.rel, []).append(link)
        return grouped

    def affordance_map(self) -> dict[str, Affordance]:
        return {affordance.name: affordance for affordance in self.affordances}

    def has_link(self, rel: str) -> bool:
        return any(link.rel == rel for link in self.links)

    def get_link(self, rel: str) -> Link | None:
        return next((link for link in self.links if link.rel == rel), None)

    def _hypermedia_to_hal(self) -> dict[str, Any]:
        body: dict[str, Any] = {"_links": _links_to_hal(self.links)}
        if self.affordances:
            body["_templates"] = _templates_to_hal(self.affordances)
        return body


class Representation(HypermediaModel):
    """One assembled resource instance"""

    content: BaseModel
    embedded: dict[str, Representation | list[Representation]] = Field(default_factory=dict)

    def to_hal(self) -> dict[str, Any]:
        body = self.content.model_dump(mode="json")
        if self.embedded:
            body["_embedded"] = {
                rel: [item.to_hal() for item in child] if isinstance(child, list) else child.to_hal()
                for rel, child in self.embedded.items()
            }
        body.update(self._hypermedia_to_hal())
        return body


class CollectionRepresentation(HypermediaModel):
    """
    A homogeneous list of representations.

    When the list is empty, ``empty_collection_of`` names the collection relation so an
    empty result stays distinguishable from a list holding one empty item.
    """

    items: list[Representation] = Field(default_factory=list)
    empty_collection_of: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_hal(self) -> dict[str, Any]:
        rel = self.empty_collection_of or self.resource_type.collection_rel
        body: dict[str, Any] = {"_embedded": {rel: [item.to_hal() for item in self.items]}}
        body.update(self._hypermedia_to_hal())
        return body


class PageMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    size: int
    number: int
    total_elements: int
    total_pages: int

    def to_hal(self) -> dict[str, int]:
        return {
            "size": self.size,
            "totalElements": self.total_elements,
            "totalPages": self.total_pages,
            "number": self.number,
        }


class PagedRepresentation(CollectionRepresentation):
    page: PageMetadata

    def to_hal(self) -> dict[str, Any]:
        body = super().to_hal()
        body["page"] = self.page.to_hal()
        return body


Representation.model_rebuild()
