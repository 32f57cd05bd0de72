"""Pydantic request schemas."""
from vidtube.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest
from vidtube.schemas.comment import CommentRequest
from vidtube.schemas.playlist import (
    CreatePlaylistRequest,
    PlaylistVideoRequest,
    UpdatePlaylistRequest,
)
from vidtube.schemas.tweet import TweetRequest
from vidtube.schemas.user import (
    UpdateAccountRequest,
    UpdateAvatarRequest,
    UpdateCoverImageRequest,
)
from vidtube.schemas.video import PublishVideoRequest, UpdateVideoRequest

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "RefreshRequest",
    "UpdateAccountRequest",
    "UpdateAvatarRequest",
    "UpdateCoverImageRequest",
    "PublishVideoRequest",
    "UpdateVideoRequest",
    "CommentRequest",
    "TweetRequest",
    "CreatePlaylistRequest",
    "UpdatePlaylistRequest",
    "PlaylistVideoRequest",
]
