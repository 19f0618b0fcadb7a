# Services package
from .coach_service import CoachService
from .feed_service import FeedService
from .hall_service import HallService
from .role_coach_service import RoleCoachService
from .team_service import TeamService
from .training_session_service import TrainingSessionService

__all__ = [
    "CoachService",
    "FeedService",
    "HallService",
    "RoleCoachService",
    "TeamService",
    "TrainingSessionService",
]
