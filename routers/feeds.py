from fastapi import APIRouter, Depends, Query

from assemblers import AssemblerRegistry, get_assembler_registry
from authentication import get_capabilities
from config import settings
from models.hateoas import ResourceType
from models.responses import HalFormsResponse, hal_response
from services.authorization import CapabilitySet
from services.feed_service import FeedService

router = APIRouter()


def get_feed_service() -> FeedService:
    return FeedService()


@router.get("/all", response_description="List every post of the club page")
async def get_all_feeds(
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: FeedService = Depends(get_feed_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    feeds = await service.get_all_feeds()
    return hal_response(registry[ResourceType.FEED].to_collection(feeds, capabilities))


@router.get("", response_description="List posts of the club page, page by page")
async def get_feeds(
    page: int = Query(0, ge=0, description="Page number (0-indexed)"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: FeedService = Depends(get_feed_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    feeds_page = await service.get_feeds_page(page, size)
    return hal_response(registry[ResourceType.FEED].to_page(feeds_page, capabilities))


@router.get("/{feed_id}", response_description="Get a single post")
async def get_feed(
    feed_id: str,
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: FeedService = Depends(get_feed_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    feed = await service.get_feed(feed_id)
    return hal_response(registry[ResourceType.FEED].to_single(feed, capabilities))
