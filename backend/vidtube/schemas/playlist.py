"""Playlist schemas."""
from typing import Optional

from vidtube.schemas.common import CamelModel


class CreatePlaylistRequest(CamelModel):
    name: str = ""
    description: str = ""
    is_public: bool = True


class UpdatePlaylistRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None


class PlaylistVideoRequest(CamelModel):
    video_id: str
