"""
Feed Service - posts of the club's Facebook page, read through the Graph API

The Graph API does not paginate by page number, so the full ordered sequence is fetched
and cut into pages in memory.
"""

import httpx

from config import settings
from exceptions import ExternalServiceException, ResourceNotFoundException
from logging_config import logger
from models.entities import FeedEntry
from models.feeds import GraphApiPost, GraphApiPostsResponse
from services.pagination import Page, PaginationHelper

SERVICE_NAME = "FACEBOOK_GRAPH_API"
POST_FIELDS = "id,message,created_time,permalink_url,full_picture"
MAX_UPSTREAM_PAGES = 10


def feed_entry_from_post(post: GraphApiPost) -> FeedEntry:
    return FeedEntry(
        id=post.id,
        message=post.message,
        createdTime=post.created_time,
        permalinkUrl=post.permalink_url,
        fullPicture=post.full_picture,
    )


class FeedService:
    def __init__(
        self,
        graph_api_url: str | None = None,
        page_id: str | None = None,
        access_token: str | None = None,
        timeout: float | None = None,
    ):
        self.graph_api_url = (graph_api_url or settings.FB_GRAPH_API_URL).rstrip("/")
        self.page_id = page_id if page_id is not None else settings.FB_PAGE_ID
        self.access_token = access_token if access_token is not None else settings.FB_ACCESS_TOKEN
        self.timeout = timeout or settings.FB_TIMEOUT_SECONDS

    async def _get(self, client: httpx.AsyncClient, url: str, params: dict | None = None) -> dict:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Graph API returned {e.response.status_code} for {url}")
            raise ExternalServiceException(
                SERVICE_NAME, "Unexpected response", {"status_code": e.response.status_code}
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Graph API request failed: {e}")
            raise ExternalServiceException(SERVICE_NAME, "Request failed", {"error": str(e)}) from e

    async def get_all_feeds(self) -> list[FeedEntry]:
        """
        Fetch every post of the page, newest first, following the Graph API cursor.

        Raises:
            ExternalServiceException: If the Graph API is unreachable or answers with an error
        """
        url = f"{self.graph_api_url}/{self.page_id}/posts"
        params: dict | None = {"fields": POST_FIELDS, "access_token": self.access_token}
        posts: list[GraphApiPost] = []

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for _ in range(MAX_UPSTREAM_PAGES):
                body = GraphApiPostsResponse.model_validate(await self._get(client, url, params))
                posts.extend(body.data)
                next_url = (body.paging or {}).get("next")
                if not next_url or not body.data:
                    break
                # the "next" URL already carries fields, token and cursor
                url, params = next_url, None
            else:
                logger.warning(
                    f"Stopped after {MAX_UPSTREAM_PAGES} Graph API pages with more posts pending; "
                    f"returning the first {len(posts)}"
                )

        logger.info(f"Fetched {len(posts)} posts from the Graph API")
        return [feed_entry_from_post(post) for post in posts]

    async def get_feeds_page(self, page: int, size: int) -> Page[FeedEntry]:
        return PaginationHelper.from_sequence(await self.get_all_feeds(), page, size)

    async def get_feed(self, feed_id: str) -> FeedEntry:
        """
        Raises:
            ResourceNotFoundException: If the Graph API does not know the post
        """
        url = f"{self.graph_api_url}/{feed_id}"
        params = {"fields": POST_FIELDS, "access_token": self.access_token}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                body = await self._get(client, url, params)
            except ExternalServiceException as e:
                if e.details.get("status_code") in (400, 404):
                    raise ResourceNotFoundException(resource_type="Feed", resource_id=feed_id) from e
                raise
        return feed_entry_from_post(GraphApiPost.model_validate(body))
