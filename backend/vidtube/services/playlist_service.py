"""Playlist service - owner-managed ordered video lists."""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from vidtube.core.errors import InvalidArgumentError, InvalidOperationError, NotFoundError
from vidtube.models import Playlist, PlaylistVideo, User, Video
from vidtube.services.ownership import delete_owned, load_owned, update_owned
from vidtube.services.relations import get_or_404, parse_id
from vidtube.services.shapes import playlist_item

logger = logging.getLogger(__name__)

NAME_MIN, NAME_MAX = 3, 50
DESCRIPTION_MAX = 200


def _clean_name(name: Optional[str]) -> str:
    name = name.strip() if name else ""
    if not name:
        raise InvalidArgumentError("Playlist name is required")
    if not NAME_MIN <= len(name) <= NAME_MAX:
        raise InvalidArgumentError(f"Playlist name must be {NAME_MIN}-{NAME_MAX} characters")
    return name


def _clean_description(description: Optional[str]) -> str:
    description = description.strip() if description else ""
    if len(description) > DESCRIPTION_MAX:
        raise InvalidArgumentError(f"Description cannot exceed {DESCRIPTION_MAX} characters")
    return description


def create_playlist(db: Session, actor_id: str, name: str, description: str = "", is_public: bool = True) -> dict:
    playlist = Playlist(
        owner_id=actor_id,
        name=_clean_name(name),
        description=_clean_description(description),
        is_public=is_public,
    )
    db.add(playlist)
    db.commit()
    db.refresh(playlist)
    logger.info("Playlist %s created by %s", playlist.id, actor_id)
    return playlist_item(playlist, include_videos=True)


def get_user_playlists(db: Session, user_id: str, actor_id: Optional[str] = None) -> List[dict]:
    """A user's playlists, newest first. Private ones only for the owner."""
    user = get_or_404(db, User, user_id, "User")
    query = db.query(Playlist).filter(Playlist.owner_id == user.id)
    if actor_id != user.id:
        query = query.filter(Playlist.is_public.is_(True))
    playlists = query.order_by(Playlist.created_at.desc(), Playlist.id.desc()).all()
    return [playlist_item(p) for p in playlists]


def get_playlist(db: Session, playlist_id: str, actor_id: Optional[str] = None) -> dict:
    playlist = get_or_404(db, Playlist, playlist_id, "Playlist")
    if not playlist.is_public and playlist.owner_id != actor_id:
        # private playlists are indistinguishable from missing ones
        raise NotFoundError("Playlist not found")
    return playlist_item(playlist, include_videos=True)


def add_video(db: Session, playlist_id: str, actor_id: str, video_id: str) -> dict:
    video_id = parse_id(video_id, "Video")
    playlist = load_owned(db, Playlist, playlist_id, actor_id, "Playlist", action="modify")
    video = get_or_404(db, Video, video_id, "Video")

    if any(entry.video_id == video.id for entry in playlist.entries):
        raise InvalidOperationError("Video already in playlist")

    last = db.query(func.max(PlaylistVideo.position)).filter(
        PlaylistVideo.playlist_id == playlist.id
    ).scalar()
    playlist.entries.append(PlaylistVideo(video_id=video.id, position=(last or 0) + 1))
    db.commit()
    db.refresh(playlist)
    logger.info("Video %s added to playlist %s", video.id, playlist.id)
    return playlist_item(playlist, include_videos=True)


def remove_video(db: Session, playlist_id: str, actor_id: str, video_id: str) -> dict:
    video_id = parse_id(video_id, "Video")
    playlist = load_owned(db, Playlist, playlist_id, actor_id, "Playlist", action="modify")

    entry = next((e for e in playlist.entries if e.video_id == video_id), None)
    if entry is None:
        raise InvalidOperationError("Video not found in playlist")

    playlist.entries.remove(entry)
    db.commit()
    db.refresh(playlist)
    logger.info("Video %s removed from playlist %s", video_id, playlist.id)
    return playlist_item(playlist, include_videos=True)


def update_playlist(db: Session, playlist_id: str, actor_id: str, changes: Dict[str, Any]) -> dict:
    """Partial update. A blank description clears it; a blank name is rejected."""
    if "name" in changes:
        changes["name"] = _clean_name(changes["name"])
    if "description" in changes:
        changes["description"] = _clean_description(changes["description"])
    if "is_public" in changes and changes["is_public"] is None:
        del changes["is_public"]

    playlist = update_owned(db, Playlist, playlist_id, actor_id, "Playlist", changes)
    return playlist_item(playlist, include_videos=True)


def delete_playlist(db: Session, playlist_id: str, actor_id: str) -> str:
    return delete_owned(db, Playlist, playlist_id, actor_id, "Playlist")
