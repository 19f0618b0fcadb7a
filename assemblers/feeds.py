from assemblers.base import ResourceAssembler
from models.feeds import FeedRead
from models.hateoas import ResourceType


class FeedAssembler(ResourceAssembler):
    """Read-only posts mirrored from the club's Facebook page"""

    resource_type = ResourceType.FEED
    read_model = FeedRead
