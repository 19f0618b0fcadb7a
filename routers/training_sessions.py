from fastapi import APIRouter, Depends, Query, Request, Response, status

from assemblers import AssemblerRegistry, get_assembler_registry
from authentication import get_capabilities, require_admin
from config import settings
from models.hateoas import ResourceType
from models.responses import HalFormsResponse, hal_response
from models.training_sessions import TrainingSessionCreateRequest, TrainingSessionUpdateRequest
from services.authorization import CapabilitySet
from services.training_session_service import TrainingSessionService

router = APIRouter()


def get_training_session_service(request: Request) -> TrainingSessionService:
    return TrainingSessionService(request.app.state.mongodb)


@router.post("", response_description="Add new training session", status_code=status.HTTP_201_CREATED)
async def create_training_session(
    session_data: TrainingSessionCreateRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: TrainingSessionService = Depends(get_training_session_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    session = await service.create_training_session(session_data)
    return hal_response(
        registry[ResourceType.TRAINING_SESSION].to_single(session, capabilities), status.HTTP_201_CREATED
    )


@router.get("/all", response_description="List all training sessions")
async def get_all_training_sessions(
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: TrainingSessionService = Depends(get_training_session_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    sessions = await service.get_all_training_sessions()
    return hal_response(registry[ResourceType.TRAINING_SESSION].to_collection(sessions, capabilities))


@router.get("", response_description="List training sessions page by page")
async def get_training_sessions(
    page: int = Query(0, ge=0, description="Page number (0-indexed)"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    sort: list[str] | None = Query(None, description="Sort criteria, e.g. timeSlot.startTime,asc"),
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: TrainingSessionService = Depends(get_training_session_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    sessions_page = await service.get_training_sessions_page(page, size, sort)
    return hal_response(registry[ResourceType.TRAINING_SESSION].to_page(sessions_page, capabilities, sort))


@router.get("/{session_id}", response_description="Get a single training session")
async def get_training_session(
    session_id: str,
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: TrainingSessionService = Depends(get_training_session_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    session = await service.get_training_session(session_id)
    return hal_response(registry[ResourceType.TRAINING_SESSION].to_single(session, capabilities))


@router.put("/{session_id}", response_description="Update training session")
async def update_training_session(
    session_id: str,
    session_data: TrainingSessionUpdateRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: TrainingSessionService = Depends(get_training_session_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    session = await service.update_training_session(session_id, session_data)
    return hal_response(registry[ResourceType.TRAINING_SESSION].to_single(session, capabilities))


@router.delete(
    "/{session_id}", response_description="Delete training session", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_training_session(
    session_id: str,
    capabilities: CapabilitySet = Depends(require_admin),
    service: TrainingSessionService = Depends(get_training_session_service),
) -> Response:
    await service.delete_training_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
