"""Comment schemas."""
from vidtube.schemas.common import CamelModel


class CommentRequest(CamelModel):
    content: str = ""
