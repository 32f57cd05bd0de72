"""Tweet schemas."""
from vidtube.schemas.common import CamelModel


class TweetRequest(CamelModel):
    content: str = ""
