from fastapi import APIRouter, Depends, Query, Request, Response, status

from assemblers import AssemblerRegistry, get_assembler_registry
from authentication import get_capabilities, require_admin
from config import settings
from models.hateoas import ResourceType
from models.responses import HalFormsResponse, hal_response
from services.authorization import CapabilitySet
from services.role_coach_service import RoleCoachService

router = APIRouter()


def get_role_coach_service(request: Request) -> RoleCoachService:
    return RoleCoachService(request.app.state.mongodb)


@router.get("/all", response_description="List all coach roles")
async def get_all_role_coaches(
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: RoleCoachService = Depends(get_role_coach_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    role_coaches = await service.get_all_role_coaches()
    return hal_response(registry[ResourceType.ROLE_COACH].to_collection(role_coaches, capabilities))


@router.get("", response_description="List coach roles page by page")
async def get_role_coaches(
    page: int = Query(0, ge=0, description="Page number (0-indexed)"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    sort: list[str] | None = Query(None, description="Sort criteria, e.g. role,asc"),
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: RoleCoachService = Depends(get_role_coach_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    role_coaches_page = await service.get_role_coaches_page(page, size, sort)
    return hal_response(registry[ResourceType.ROLE_COACH].to_page(role_coaches_page, capabilities, sort))


@router.get("/{role_coach_id}", response_description="Get a single coach role")
async def get_role_coach(
    role_coach_id: str,
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: RoleCoachService = Depends(get_role_coach_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    role_coach = await service.get_role_coach(role_coach_id)
    return hal_response(registry[ResourceType.ROLE_COACH].to_single(role_coach, capabilities))


@router.delete(
    "/{role_coach_id}", response_description="Remove a coach from a team", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_role_coach(
    role_coach_id: str,
    capabilities: CapabilitySet = Depends(require_admin),
    service: RoleCoachService = Depends(get_role_coach_service),
) -> Response:
    await service.delete_role_coach(role_coach_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
