"""Video schemas."""
from typing import Optional
from pydantic import Field

from vidtube.schemas.common import CamelModel


class PublishVideoRequest(CamelModel):
    title: str = Field(..., max_length=200)
    description: str = ""
    video_file: str
    thumbnail: str = ""
    duration: float = Field(0, ge=0)
    is_published: bool = True


class UpdateVideoRequest(CamelModel):
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    thumbnail: Optional[str] = None
