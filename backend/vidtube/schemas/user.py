"""User/channel schemas."""
from typing import Optional
from pydantic import EmailStr, Field

from vidtube.schemas.common import CamelModel


class UpdateAccountRequest(CamelModel):
    full_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(None, max_length=30)


class UpdateAvatarRequest(CamelModel):
    avatar: str


class UpdateCoverImageRequest(CamelModel):
    cover_image: str
