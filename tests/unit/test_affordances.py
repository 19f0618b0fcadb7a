"""Unit tests for field schema derivation and affordance selection"""
import pytest

from models.coaches import CoachRequest
from models.common import NOT_BLANK, PHONE, POSTAL_CODE
from models.entities import Hall
from models.halls import HallCreateRequest
from models.hateoas import ResourceType
from models.teams import AddCoachInTeamRequest, TeamCreateRequest
from models.training_sessions import TrainingSessionCreateRequest
from services.affordances import OPERATIONS, AffordanceSelector, Scope, describe_fields
from services.authorization import CapabilitySet
from services.link_builder import LinkBuilder
from tests.fixtures.data_fixtures import create_test_hall, create_test_role_coach, create_test_team

API_ROOT = "http://localhost:8080/api"


def by_name(descriptors):
    return {descriptor.name: descriptor for descriptor in descriptors}


@pytest.fixture
def selector():
    return AffordanceSelector(LinkBuilder(API_ROOT))


class TestDescribeFields:
    """Test static field schemas derived from request models"""

    def test_hall_fields_are_flattened(self):
        fields = describe_fields(HallCreateRequest)
        assert [f.name for f in fields] == [
            "name",
            "address.street",
            "address.city",
            "address.postalCode",
            "address.country",
        ]

    def test_hall_name_constraints(self):
        name = by_name(describe_fields(HallCreateRequest))["name"]
        assert name.required is True
        assert name.type == "text"
        assert name.maxLength == 50
        assert name.pattern == NOT_BLANK

    def test_nested_constraints(self):
        fields = by_name(describe_fields(HallCreateRequest))
        assert fields["address.postalCode"].pattern == POSTAL_CODE
        assert fields["address.street"].maxLength == 100
        assert fields["address.city"].required is True

    def test_coach_email_and_optional_phone(self):
        fields = by_name(describe_fields(CoachRequest))
        assert fields["email"].type == "email"
        assert fields["phone"].required is False
        assert fields["phone"].pattern == PHONE

    def test_team_enums_and_bounds(self):
        fields = by_name(describe_fields(TeamCreateRequest))
        assert fields["gender"].options == ("F", "M", "N")
        assert "SENIOR" in fields["category"].options
        assert fields["teamNumber"].type == "number"
        assert fields["teamNumber"].min == 1

    def test_time_fields(self):
        fields = by_name(describe_fields(TrainingSessionCreateRequest))
        assert fields["timeSlot.startTime"].type == "time"
        assert fields["timeSlot.dayOfWeek"].options[0] == "MONDAY"
        assert fields["teamId"].minLength == 1

    def test_add_coach_role_options(self):
        fields = by_name(describe_fields(AddCoachInTeamRequest))
        assert fields["role"].options == ("MAIN", "ASSISTANT", "SUPPORT_STAFF")

    def test_no_model(self):
        assert describe_fields(None) == ()


class TestSelectAffordances:
    """Test capability-gated selection"""

    def test_admin_item_affordances_for_hall(self, selector, admin):
        hall = create_test_hall("h1")
        affordances = selector.select_affordances(ResourceType.HALL, hall, admin)

        assert [a.name for a in affordances] == ["delete", "update"]
        delete, update = affordances
        assert (delete.method, delete.target) == ("DELETE", f"{API_ROOT}/halls/h1")
        assert delete.properties == ()
        assert (update.method, update.target) == ("PUT", f"{API_ROOT}/halls/h1")
        assert by_name(update.properties)["name"].maxLength == 50

    def test_admin_collection_affordances(self, selector, admin):
        affordances = selector.select_affordances(ResourceType.HALL, None, admin)
        assert [a.name for a in affordances] == ["create"]
        assert affordances[0].method == "POST"
        assert affordances[0].target == f"{API_ROOT}/halls"

    def test_team_sub_operations_in_order(self, selector, admin):
        team = create_test_team("t1")
        affordances = selector.select_affordances(ResourceType.TEAM, team, admin)

        assert [a.name for a in affordances] == ["delete", "update", "addTrainingSession", "addRoleCoach"]
        targets = {a.name: (a.method, a.target) for a in affordances}
        assert targets["addTrainingSession"] == ("POST", f"{API_ROOT}/teams/t1/training-sessions")
        assert targets["addRoleCoach"] == ("POST", f"{API_ROOT}/teams/t1/coaches")

    def test_role_coach_only_delete(self, selector, admin):
        assert selector.select_affordances(ResourceType.ROLE_COACH, None, admin) == []
        item = selector.select_affordances(ResourceType.ROLE_COACH, create_test_role_coach("rc1"), admin)
        assert [a.name for a in item] == ["delete"]

    def test_feed_has_no_affordances(self, selector, admin):
        assert selector.select_affordances(ResourceType.FEED, None, admin) == []

    @pytest.mark.parametrize("resource_type", list(ResourceType))
    def test_anonymous_gets_nothing(self, selector, anonymous, resource_type):
        hall = Hall(id="x", name="Any", address=create_test_hall().address)
        assert selector.select_affordances(resource_type, hall, anonymous) == []
        assert selector.select_affordances(resource_type, None, anonymous) == []

    def test_other_roles_get_nothing(self, selector):
        capabilities = CapabilitySet(["USER", "COACH"])
        assert selector.select_affordances(ResourceType.TEAM, create_test_team(), capabilities) == []

    def test_none_capabilities_behave_as_anonymous(self, selector):
        assert selector.select_affordances(ResourceType.HALL, None, None) == []

    def test_selection_is_stable(self, selector, admin):
        team = create_test_team("t1")
        first = selector.select_affordances(ResourceType.TEAM, team, admin)
        second = selector.select_affordances(ResourceType.TEAM, team, admin)
        assert first == second

    def test_every_mutating_operation_requires_admin(self):
        for operations in OPERATIONS.values():
            for operation in operations:
                assert operation.capability == "ADMIN"
                assert operation.scope in (Scope.ITEM, Scope.COLLECTION)
