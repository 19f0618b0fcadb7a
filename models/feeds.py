from datetime import datetime

from pydantic import BaseModel, Field

from models.common import ReadModel


class GraphApiPost(BaseModel):
    """One post as returned by the Graph API /{page-id}/posts edge"""

    id: str
    message: str | None = None
    created_time: datetime | None = None
    permalink_url: str | None = None
    full_picture: str | None = None


class GraphApiPostsResponse(BaseModel):
    data: list[GraphApiPost] = Field(default_factory=list)
    paging: dict | None = None


class FeedRead(ReadModel):
    id: str
    message: str | None = None
    createdTime: datetime | None = None
    permalinkUrl: str | None = None
    fullPicture: str | None = None
