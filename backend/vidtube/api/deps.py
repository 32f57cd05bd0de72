"""API dependencies."""
from typing import Optional, Tuple

from fastapi import Query

from vidtube.core.auth import optional_actor, require_actor
from vidtube.core.config import settings
from vidtube.core.database import get_db
from vidtube.services.relations import clamp_page

__all__ = ["get_db", "settings", "require_actor", "optional_actor", "pagination"]


def pagination(default_limit: int = None):
    """Build a dependency yielding (page, limit) clamped to [1, max_page_size]."""
    default_limit = default_limit or settings.default_page_size

    def _params(
        page: Optional[int] = Query(None, description="1-based page number"),
        limit: Optional[int] = Query(None, description="Page size"),
    ) -> Tuple[int, int]:
        return clamp_page(page, limit, default_limit)

    return _params
