"""Unit tests for LinkBuilder"""
import pytest

from exceptions import InvalidResourceReferenceError
from models.hateoas import ResourceType
from services.link_builder import LinkBuilder

API_ROOT = "http://localhost:8080/api"


@pytest.fixture
def builder():
    return LinkBuilder(API_ROOT)


class TestItemLinks:

    def test_item_link(self, builder):
        link = builder.item_link(ResourceType.HALL, "42")
        assert link.rel == "self"
        assert link.href == "http://localhost:8080/api/halls/42"
        assert link.templated is False

    def test_item_link_is_deterministic(self, builder):
        assert builder.item_link(ResourceType.TRAINING_SESSION, "7") == builder.item_link(
            ResourceType.TRAINING_SESSION, "7"
        )
        assert builder.item_link(ResourceType.TRAINING_SESSION, "7").href.endswith("/training-sessions/7")

    @pytest.mark.parametrize("missing_id", [None, ""])
    def test_missing_id_raises(self, builder, missing_id):
        with pytest.raises(InvalidResourceReferenceError) as exc_info:
            builder.item_link(ResourceType.COACH, missing_id)
        assert exc_info.value.details["resource_type"] == "coaches"

    def test_relation_link(self, builder):
        link = builder.relation_link("team", ResourceType.TEAM, "t1")
        assert link.rel == "team"
        assert link.href == "http://localhost:8080/api/teams/t1"

    def test_sub_resource_link(self, builder):
        link = builder.sub_resource_link(ResourceType.TEAM, "t1", "training-sessions")
        assert link.rel == "training-sessions"
        assert link.href == "http://localhost:8080/api/teams/t1/training-sessions"


class TestCollectionLinks:

    def test_collection_link(self, builder):
        link = builder.collection_link(ResourceType.ROLE_COACH)
        assert link.rel == "collection"
        assert link.href == "http://localhost:8080/api/role-coaches"

    def test_paged_templated_link(self, builder):
        link = builder.paged_templated_link(ResourceType.HALL)
        assert link.rel == "page"
        assert link.templated is True
        assert link.href == "http://localhost:8080/api/halls{?page,size,sort}"

    def test_all_items_link(self, builder):
        link = builder.all_items_link(ResourceType.TRAINING_SESSION)
        assert link.rel == "allTrainingSessions"
        assert link.href == "http://localhost:8080/api/training-sessions/all"
        assert link.templated is False

    def test_page_link(self, builder):
        link = builder.page_link(ResourceType.COACH, 2, 10, "next")
        assert link.rel == "next"
        assert link.href == "http://localhost:8080/api/coaches?page=2&size=10"

    def test_page_link_carries_sort(self, builder):
        link = builder.page_link(ResourceType.COACH, 0, 10, "first", sort=["surname,asc", "name"])
        assert link.href == "http://localhost:8080/api/coaches?page=0&size=10&sort=surname%2Casc&sort=name"


class TestApiRoot:

    def test_trailing_slash_is_ignored(self):
        assert LinkBuilder(API_ROOT + "/").collection_href(ResourceType.FEED) == API_ROOT + "/feeds"

    def test_defaults_to_configured_root(self):
        from config import settings

        assert LinkBuilder().api_root == settings.get_api_root()
