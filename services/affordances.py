"""
Capability-gated affordance selection.

The operation table below is the single source of truth for which state transitions a
resource type offers. Field descriptors are derived once, when this module is imported,
from the JSON schema of each operation's input model.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from config import settings
from logging_config import logger
from models.coaches import CoachRequest
from models.halls import HallCreateRequest, HallUpdateRequest
from models.hateoas import Affordance, FieldDescriptor, ResourceType
from models.teams import (
    AddCoachInTeamRequest,
    AddTrainingSessionInTeamRequest,
    TeamCreateRequest,
    TeamUpdateRequest,
)
from models.training_sessions import TrainingSessionCreateRequest, TrainingSessionUpdateRequest
from services.authorization import AuthorizationOracle
from services.link_builder import LinkBuilder


class Scope(str, Enum):
    ITEM = "item"
    COLLECTION = "collection"


def _resolve(schema: dict[str, Any], defs: dict[str, Any]) -> dict[str, Any]:
    """Follow $ref, nullable anyOf and single allOf wrappers down to a concrete schema"""
    while True:
        if "$ref" in schema:
            target = defs[schema["$ref"].split("/")[-1]]
            schema = {**target, **{k: v for k, v in schema.items() if k != "$ref"}}
        elif "anyOf" in schema:
            variants = [v for v in schema["anyOf"] if v.get("type") != "null"]
            rest = {k: v for k, v in schema.items() if k != "anyOf"}
            schema = {**variants[0], **rest} if variants else rest
        elif "allOf" in schema and len(schema["allOf"]) == 1:
            rest = {k: v for k, v in schema.items() if k != "allOf"}
            schema = {**schema["allOf"][0], **rest}
        else:
            return schema


def _field_type(schema: dict[str, Any]) -> str:
    fmt = schema.get("format")
    if fmt == "email":
        return "email"
    if fmt == "time":
        return "time"
    if schema.get("type") in ("integer", "number"):
        if "minimum" in schema and "maximum" in schema:
            return "range"
        return "number"
    return "text"


def _describe(
    properties: dict[str, Any],
    required: set[str],
    defs: dict[str, Any],
    prefix: str = "",
    parent_required: bool = True,
) -> list[FieldDescriptor]:
    descriptors: list[FieldDescriptor] = []
    for name, raw in properties.items():
        schema = _resolve(raw, defs)
        is_required = parent_required and name in required
        if schema.get("type") == "object" and "properties" in schema:
            descriptors.extend(
                _describe(
                    schema["properties"],
                    set(schema.get("required", [])),
                    defs,
                    prefix=f"{prefix}{name}.",
                    parent_required=is_required,
                )
            )
            continue
        options = schema.get("enum")
        descriptors.append(
            FieldDescriptor(
                name=f"{prefix}{name}",
                required=is_required,
                type=_field_type(schema),
                pattern=schema.get("pattern"),
                min=schema.get("minimum", schema.get("exclusiveMinimum")),
                max=schema.get("maximum", schema.get("exclusiveMaximum")),
                minLength=schema.get("minLength"),
                maxLength=schema.get("maxLength"),
                options=tuple(str(option) for option in options) if options else None,
            )
        )
    return descriptors


def describe_fields(model: type[BaseModel] | None) -> tuple[FieldDescriptor, ...]:
    """Flatten a request model's JSON schema into affordance field descriptors"""
    if model is None:
        return ()
    schema = model.model_json_schema()
    return tuple(
        _describe(schema.get("properties", {}), set(schema.get("required", [])), schema.get("$defs", {}))
    )


@dataclass(frozen=True)
class OperationSpec:
    name: str
    method: str
    scope: Scope
    input_model: type[BaseModel] | None = None
    sub_path: str | None = None
    capability: str = settings.ADMIN_ROLE
    fields: tuple[FieldDescriptor, ...] = field(init=False, default=())

    def __post_init__(self):
        object.__setattr__(self, "fields", describe_fields(self.input_model))


def _crud(create_model, update_model) -> tuple[OperationSpec, ...]:
    return (
        OperationSpec("delete", "DELETE", Scope.ITEM),
        OperationSpec("update", "PUT", Scope.ITEM, update_model),
        OperationSpec("create", "POST", Scope.COLLECTION, create_model),
    )


OPERATIONS: dict[ResourceType, tuple[OperationSpec, ...]] = {
    ResourceType.HALL: _crud(HallCreateRequest, HallUpdateRequest),
    ResourceType.COACH: _crud(CoachRequest, CoachRequest),
    ResourceType.TEAM: (
        OperationSpec("delete", "DELETE", Scope.ITEM),
        OperationSpec("update", "PUT", Scope.ITEM, TeamUpdateRequest),
        OperationSpec(
            "addTrainingSession", "POST", Scope.ITEM, AddTrainingSessionInTeamRequest, "training-sessions"
        ),
        OperationSpec("addRoleCoach", "POST", Scope.ITEM, AddCoachInTeamRequest, "coaches"),
        OperationSpec("create", "POST", Scope.COLLECTION, TeamCreateRequest),
    ),
    ResourceType.TRAINING_SESSION: _crud(TrainingSessionCreateRequest, TrainingSessionUpdateRequest),
    ResourceType.ROLE_COACH: (OperationSpec("delete", "DELETE", Scope.ITEM),),
    ResourceType.FEED: (),
}


class AffordanceSelector:
    """Selects the operations a caller may perform on an instance or a collection"""

    def __init__(self, link_builder: LinkBuilder | None = None):
        self.link_builder = link_builder or LinkBuilder()

    def operations(self, resource_type: ResourceType, scope: Scope) -> list[OperationSpec]:
        return [op for op in OPERATIONS.get(resource_type, ()) if op.scope == scope]

    def _target(self, resource_type: ResourceType, op: OperationSpec, instance_id: str | None) -> str:
        if op.scope == Scope.COLLECTION:
            return self.link_builder.collection_href(resource_type)
        if op.sub_path:
            return self.link_builder.sub_resource_link(resource_type, instance_id, op.sub_path).href
        return self.link_builder.item_href(resource_type, instance_id)

    def select_affordances(
        self,
        resource_type: ResourceType,
        instance: Any | None,
        capabilities: AuthorizationOracle | None,
    ) -> list[Affordance]:
        """
        Return the affordances the caller may use, in table order.

        Args:
            resource_type: Type whose operation table is consulted
            instance: The resource instance for item operations, or None for collection operations
            capabilities: The caller's capabilities; None behaves as anonymous

        Returns:
            Affordances whose required capability the caller holds; empty for anonymous callers
        """
        if capabilities is None:
            return []
        scope = Scope.COLLECTION if instance is None else Scope.ITEM
        instance_id = getattr(instance, "id", None)

        selected = [
            Affordance(
                name=op.name,
                method=op.method,
                target=self._target(resource_type, op, instance_id),
                properties=op.fields,
            )
            for op in self.operations(resource_type, scope)
            if capabilities.has_capability(op.capability)
        ]
        logger.debug(
            f"Selected {len(selected)} {scope.value} affordances for {resource_type.value}"
        )
        return selected
