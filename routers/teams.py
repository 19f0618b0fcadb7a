from fastapi import APIRouter, Depends, Query, Request, Response, status

from assemblers import AssemblerRegistry, get_assembler_registry
from authentication import get_capabilities, require_admin
from config import settings
from logging_config import logger
from models.hateoas import ResourceType
from models.responses import HalFormsResponse, hal_response
from models.teams import AddCoachInTeamRequest, AddTrainingSessionInTeamRequest, TeamCreateRequest, TeamUpdateRequest
from services.authorization import CapabilitySet
from services.team_service import TeamService

router = APIRouter()


def get_team_service(request: Request) -> TeamService:
    return TeamService(request.app.state.mongodb)


@router.post("", response_description="Add new team", status_code=status.HTTP_201_CREATED)
async def create_team(
    team_data: TeamCreateRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: TeamService = Depends(get_team_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    logger.info(
        f"Creating team {team_data.gender.value}/{team_data.category.value}/{team_data.teamNumber}"
    )
    team = await service.create_team(team_data)
    return hal_response(registry[ResourceType.TEAM].to_single(team, capabilities), status.HTTP_201_CREATED)


@router.get("/all", response_description="List all teams")
async def get_all_teams(
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: TeamService = Depends(get_team_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    teams = await service.get_all_teams()
    return hal_response(registry[ResourceType.TEAM].to_collection(teams, capabilities))


@router.get("", response_description="List teams page by page")
async def get_teams(
    page: int = Query(0, ge=0, description="Page number (0-indexed)"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    sort: list[str] | None = Query(None, description="Sort criteria, e.g. category,asc"),
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: TeamService = Depends(get_team_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    teams_page = await service.get_teams_page(page, size, sort)
    return hal_response(registry[ResourceType.TEAM].to_page(teams_page, capabilities, sort))


@router.get("/{team_id}", response_description="Get a single team")
async def get_team(
    team_id: str,
    capabilities: CapabilitySet = Depends(get_capabilities),
    service: TeamService = Depends(get_team_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    team = await service.get_team(team_id)
    return hal_response(registry[ResourceType.TEAM].to_single(team, capabilities))


@router.put("/{team_id}", response_description="Update team")
async def update_team(
    team_id: str,
    team_data: TeamUpdateRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: TeamService = Depends(get_team_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    team = await service.update_team(team_id, team_data)
    return hal_response(registry[ResourceType.TEAM].to_single(team, capabilities))


@router.delete("/{team_id}", response_description="Delete team", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(
    team_id: str,
    capabilities: CapabilitySet = Depends(require_admin),
    service: TeamService = Depends(get_team_service),
) -> Response:
    await service.delete_team(team_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# add a weekly training session to a team
@router.post(
    "/{team_id}/training-sessions",
    response_description="Add training session to team",
    status_code=status.HTTP_201_CREATED,
)
async def add_training_session(
    team_id: str,
    session_data: AddTrainingSessionInTeamRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: TeamService = Depends(get_team_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    logger.info(f"Adding training session to team {team_id} in hall {session_data.hallId}")
    session = await service.add_training_session(team_id, session_data)
    return hal_response(
        registry[ResourceType.TRAINING_SESSION].to_single(session, capabilities), status.HTTP_201_CREATED
    )


# give a coach a role in a team
@router.post("/{team_id}/coaches", response_description="Add coach to team", status_code=status.HTTP_201_CREATED)
async def add_role_coach(
    team_id: str,
    role_data: AddCoachInTeamRequest,
    capabilities: CapabilitySet = Depends(require_admin),
    service: TeamService = Depends(get_team_service),
    registry: AssemblerRegistry = Depends(get_assembler_registry),
) -> HalFormsResponse:
    logger.info(f"Adding coach {role_data.coachId} to team {team_id} as {role_data.role.value}")
    role_coach = await service.add_role_coach(team_id, role_data)
    return hal_response(registry[ResourceType.ROLE_COACH].to_single(role_coach, capabilities), status.HTTP_201_CREATED)
