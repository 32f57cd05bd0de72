"""Playlist routes."""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vidtube.api.deps import get_db, optional_actor, require_actor
from vidtube.core.responses import api_response
from vidtube.models import User
from vidtube.schemas import CreatePlaylistRequest, PlaylistVideoRequest, UpdatePlaylistRequest
from vidtube.services import playlist_service

router = APIRouter(prefix="/playlists", tags=["playlists"])


@router.post("")
def create_playlist(
    request: CreatePlaylistRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    playlist = playlist_service.create_playlist(db, user.id, request.name, request.description, request.is_public)
    return api_response(playlist, "Playlist created successfully", status_code=201)


@router.get("/user/{user_id}")
def get_user_playlists(
    user_id: str,
    actor: Optional[User] = Depends(optional_actor),
    db: Session = Depends(get_db),
):
    playlists = playlist_service.get_user_playlists(db, user_id, actor.id if actor else None)
    return api_response(playlists, "User playlists fetched successfully")


@router.get("/{playlist_id}")
def get_playlist(
    playlist_id: str,
    actor: Optional[User] = Depends(optional_actor),
    db: Session = Depends(get_db),
):
    playlist = playlist_service.get_playlist(db, playlist_id, actor.id if actor else None)
    return api_response(playlist, "Playlist fetched successfully")


@router.patch("/{playlist_id}/add")
def add_video_to_playlist(
    playlist_id: str,
    request: PlaylistVideoRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    playlist = playlist_service.add_video(db, playlist_id, user.id, request.video_id)
    return api_response(playlist, "Video added to playlist successfully")


@router.patch("/{playlist_id}/remove")
def remove_video_from_playlist(
    playlist_id: str,
    request: PlaylistVideoRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    playlist = playlist_service.remove_video(db, playlist_id, user.id, request.video_id)
    return api_response(playlist, "Video removed from playlist successfully")


@router.patch("/{playlist_id}")
def update_playlist(
    playlist_id: str,
    request: UpdatePlaylistRequest,
    user: User = Depends(require_actor),
    db: Session = Depends(get_db),
):
    """Update name/description/visibility (owner only)."""
    playlist = playlist_service.update_playlist(db, playlist_id, user.id, request.model_dump(exclude_unset=True))
    return api_response(playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}")
def delete_playlist(playlist_id: str, user: User = Depends(require_actor), db: Session = Depends(get_db)):
    deleted_id = playlist_service.delete_playlist(db, playlist_id, user.id)
    return api_response({"playlistId": deleted_id}, "Playlist deleted successfully")
