"""Denormalized read shapes shared by the services."""
from datetime import datetime
from typing import Optional

from vidtube.models import Comment, Playlist, Tweet, User, Video


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def user_summary(user: Optional[User]) -> Optional[dict]:
    """Owner summary embedded in other entities."""
    if user is None:
        return None
    return {
        "id": user.id,
        "username": user.username,
        "fullName": user.full_name or "",
        "avatar": user.avatar or "",
    }


def user_profile(user: User) -> dict:
    """Full profile of a user. Never includes credentials."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "fullName": user.full_name or "",
        "avatar": user.avatar or "",
        "coverImage": user.cover_image or "",
        "createdAt": _iso(user.created_at),
        "updatedAt": _iso(user.updated_at),
    }


def video_item(video: Video) -> dict:
    """Compact video for list views."""
    return {
        "id": video.id,
        "title": video.title,
        "description": video.description or "",
        "videoFile": video.video_file,
        "thumbnail": video.thumbnail or "",
        "duration": video.duration or 0,
        "views": video.views or 0,
        "isPublished": bool(video.is_published),
        "createdAt": _iso(video.created_at),
        "updatedAt": _iso(video.updated_at),
        "owner": user_summary(video.owner),
    }


def comment_item(comment: Comment, likes_count: int = 0, is_liked: bool = False) -> dict:
    return {
        "id": comment.id,
        "videoId": comment.video_id,
        "content": comment.content,
        "createdAt": _iso(comment.created_at),
        "updatedAt": _iso(comment.updated_at),
        "owner": user_summary(comment.owner),
        "likesCount": likes_count,
        "isLiked": is_liked,
    }


def tweet_item(tweet: Tweet, likes_count: int = 0, is_liked: bool = False) -> dict:
    return {
        "id": tweet.id,
        "content": tweet.content,
        "createdAt": _iso(tweet.created_at),
        "updatedAt": _iso(tweet.updated_at),
        "owner": user_summary(tweet.owner),
        "likesCount": likes_count,
        "isLiked": is_liked,
    }


def playlist_item(playlist: Playlist, include_videos: bool = False) -> dict:
    """Playlist shape; videos are listed in position order, published only."""
    videos = [
        entry.video for entry in playlist.entries
        if entry.video is not None and entry.video.is_published
    ]
    result = {
        "id": playlist.id,
        "name": playlist.name,
        "description": playlist.description or "",
        "isPublic": bool(playlist.is_public),
        "videoCount": len(videos),
        "thumbnail": videos[0].thumbnail if videos else "",
        "createdAt": _iso(playlist.created_at),
        "updatedAt": _iso(playlist.updated_at),
        "owner": user_summary(playlist.owner),
    }
    if include_videos:
        result["videos"] = [video_item(v) for v in videos]
    return result
