from fastapi import APIRouter

from models.hateoas import Link, ResourceType
from models.responses import ApiIndex, HalFormsResponse
from services.link_builder import LinkBuilder

router = APIRouter()

INDEXED_RESOURCES = (
    ResourceType.TEAM,
    ResourceType.COACH,
    ResourceType.HALL,
    ResourceType.TRAINING_SESSION,
    ResourceType.ROLE_COACH,
    ResourceType.FEED,
)


def build_api_index(link_builder: LinkBuilder | None = None) -> ApiIndex:
    link_builder = link_builder or LinkBuilder()
    links = [Link(rel="self", href=link_builder.api_root)]
    for resource_type in INDEXED_RESOURCES:
        links.append(link_builder.collection_link(resource_type, rel=resource_type.collection_rel))
        links.append(link_builder.all_items_link(resource_type))
    return ApiIndex(links=links)


@router.get("", response_description="Links to every collection of the API")
async def get_api_index() -> HalFormsResponse:
    return HalFormsResponse(content=build_api_index().to_hal())
