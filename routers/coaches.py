from fastapi import APIRouter, Depends, Query, Request, Response, status

from assemblers import AssemblerRegistry, get_assembler_registry
from authentication import get_capabilities, require_admin
from config import settings
from logging_config import logger
from models.coaches import CoachRequest
from models.hateoas import ResourceType
from models.responses import HalFormsResponse, hal_response
from services.authorization import CapabilitySet
from services.coach_service import CoachService

router = APIRouter()


def get_coach_service(request: Request) -> CoachService:
    return CoachService(request.app.state.mongodb)


@router.post("", response_description="Add new coach", status_code=status.HTTP_201_CREATED)
async def create_coach(
    coach_data: CoachRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: CoachService = Depends(get_coach_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    logger.info(f"Creating coach {coach_data.name} {coach_data.surname}")
    coach = await service.create_coach(coach_data)
    return hal_response(registry[ResourceType.COACH].to_single(coach, capabilities), status.HTTP_201_CREATED)


@router.get("/all", response_description="List all coaches")
async def get_all_coaches(
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: CoachService = Depends(get_coach_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    coaches = await service.get_all_coaches()
    return hal_response(registry[ResourceType.COACH].to_collection(coaches, capabilities))


@router.get("", response_description="List coaches page by page")
async def get_coaches(
    page: int = Query(0, ge=0, description="Page number (0-indexed)"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    sort: list[str] | None = Query(None, description="Sort criteria, e.g. surname,asc"),
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: CoachService = Depends(get_coach_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    coaches_page = await service.get_coaches_page(page, size, sort)
    return hal_response(registry[ResourceType.COACH].to_page(coaches_page, capabilities, sort))


@router.get("/{coach_id}", response_description="Get a single coach")
async def get_coach(
    coach_id: str,
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: CoachService = Depends(get_coach_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    coach = await service.get_coach(coach_id)
    return hal_response(registry[ResourceType.COACH].to_single(coach, capabilities))


@router.put("/{coach_id}", response_description="Update coach")
async def update_coach(
    coach_id: str,
    coach_data: CoachRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: CoachService = Depends(get_coach_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    coach = await service.update_coach(coach_id, coach_data)
    return hal_response(registry[ResourceType.COACH].to_single(coach, capabilities))


@router.delete("/{coach_id}", response_description="Delete coach", status_code=status.HTTP_204_NO_CONTENT)
async def delete_coach(
    coach_id: str,
    capabilities: CapabilitySet = Depends(require_admin),
    service: CoachService = Depends(get_coach_service),
) -> Response:
    await service.delete_coach(coach_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
