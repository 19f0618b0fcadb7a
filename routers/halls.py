from fastapi import APIRouter, Depends, Query, Request, Response, status

from assemblers import AssemblerRegistry, get_assembler_registry
from authentication import get_capabilities, require_admin
from config import settings
from logging_config import logger
from models.halls import HallCreateRequest, HallUpdateRequest
from models.hateoas import ResourceType
from models.responses import HalFormsResponse, hal_response
from services.authorization import CapabilitySet
from services.hall_service import HallService

router = APIRouter()


def get_hall_service(request: Request) -> HallService:
    return HallService(request.app.state.mongodb)


# create new hall
@router.post("", response_description="Add new hall", status_code=status.HTTP_201_CREATED)
async def create_hall(
    hall_data: HallCreateRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: HallService = Depends(get_hall_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    logger.info(f"Creating hall {hall_data.name}")
    hall = await service.create_hall(hall_data)
    return hal_response(registry[ResourceType.HALL].to_single(hall, capabilities), status.HTTP_201_CREATED)


# list all halls without paging
@router.get("/all", response_description="List all halls")
async def get_all_halls(
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: HallService = Depends(get_hall_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    halls = await service.get_all_halls()
    return hal_response(registry[ResourceType.HALL].to_collection(halls, capabilities))


# list halls, paged
@router.get("", response_description="List halls page by page")
async def get_halls(
    page: int = Query(0, ge=0, description="Page number (0-indexed)"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    sort: list[str] | None = Query(None, description="Sort criteria, e.g. name,asc"),
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: HallService = Depends(get_hall_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    halls_page = await service.get_halls_page(page, size, sort)
    return hal_response(registry[ResourceType.HALL].to_page(halls_page, capabilities, sort))


# get hall by id
@router.get("/{hall_id}", response_description="Get a single hall")
async def get_hall(
    hall_id: str,
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: HallService = Depends(get_hall_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    hall = await service.get_hall(hall_id)
    return hal_response(registry[ResourceType.HALL].to_single(hall, capabilities))


# update hall
@router.put("/{hall_id}", response_description="Update hall")
async def update_hall(
    hall_id: str,
    hall_data: HallUpdateRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: HallService = Depends(get_hall_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    logger.info(f"Updating hall {hall_id}")
    hall = await service.update_hall(hall_id, hall_data)
    return hal_response(registry[ResourceType.HALL].to_single(hall, capabilities))


# delete hall
@router.delete("/{hall_id}", response_description="Delete hall", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hall(
    hall_id: str,
    capabilities: CapabilitySet = Depends(require_admin),
    service: HallService = Depends(get_hall_service),
) -> Response:
    logger.info(f"Deleting hall {hall_id}")
    await service.delete_hall(hall_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
