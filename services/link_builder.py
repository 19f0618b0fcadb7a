"""
Link construction for hypermedia representations.

All hrefs are absolute and built from the configured API root, never from the
incoming request, so assembling a representation needs no request context.
"""

from urllib.parse import urlencode

from config import settings
from exceptions import InvalidResourceReferenceError
from models.hateoas import Link, ResourceType

PAGE_TEMPLATE = "{?page,size,sort}"


class LinkBuilder:
    """Builds item, collection, page and relation links for a resource type"""

    def __init__(self, api_root: str | None = None):
        self.api_root = (api_root if api_root is not None else settings.get_api_root()).rstrip("/")

    def collection_href(self, resource_type: ResourceType) -> str:
        return f"{self.api_root}{resource_type.path}"

    def item_href(self, resource_type: ResourceType, resource_id: str | None) -> str:
        if resource_id is None or str(resource_id) == "":
            raise InvalidResourceReferenceError(resource_type.value)
        return f"{self.collection_href(resource_type)}/{resource_id}"

    def all_items_href(self, resource_type: ResourceType) -> str:
        return f"{self.collection_href(resource_type)}/all"

    def item_link(self, resource_type: ResourceType, resource_id: str | None, rel: str = "self") -> Link:
        return Link(rel=rel, href=self.item_href(resource_type, resource_id))

    def collection_link(self, resource_type: ResourceType, rel: str = "collection") -> Link:
        return Link(rel=rel, href=self.collection_href(resource_type))

    def paged_templated_link(self, resource_type: ResourceType) -> Link:
        """Templated link to the paginated listing"""
        return Link(
            rel="page",
            href=f"{self.collection_href(resource_type)}{PAGE_TEMPLATE}",
            templated=True,
        )

    def all_items_link(self, resource_type: ResourceType, rel: str | None = None) -> Link:
        return Link(rel=rel or resource_type.all_items_rel, href=self.all_items_href(resource_type))

    def page_link(
        self, resource_type: ResourceType, number: int, size: int, rel: str, sort: list[str] | None = None
    ) -> Link:
        """Concrete link to one page, used for self/first/prev/next/last; sort criteria are carried over"""
        query = urlencode([("page", number), ("size", size), *(("sort", criterion) for criterion in sort or ())])
        return Link(rel=rel, href=f"{self.collection_href(resource_type)}?{query}")

    def sub_resource_link(
        self, resource_type: ResourceType, resource_id: str | None, segment: str, rel: str | None = None
    ) -> Link:
        href = f"{self.item_href(resource_type, resource_id)}/{segment.strip('/')}"
        return Link(rel=rel or segment, href=href)

    def relation_link(self, rel: str, resource_type: ResourceType, resource_id: str | None) -> Link:
        """Plain link from one resource to a related one, e.g. a session's team"""
        return self.item_link(resource_type, resource_id, rel=rel)
