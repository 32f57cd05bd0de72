"""Ownership-gated mutations shared by comments, playlists, tweets and videos."""
import logging
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from vidtube.core.errors import ForbiddenError
from vidtube.services.relations import get_or_404

logger = logging.getLogger(__name__)


def load_owned(
    db: Session,
    model,
    entity_id: Any,
    actor_id: str,
    label: str,
    action: str = "modify",
    owner_attr: str = "owner_id",
):
    """
    Load an entity and verify the actor owns it.

    Raises:
        InvalidArgumentError: malformed id
        NotFoundError: entity does not exist
        ForbiddenError: actor is not the owner
    """
    entity = get_or_404(db, model, entity_id, label)
    if getattr(entity, owner_attr) != actor_id:
        logger.warning("%s %s: %s denied for %s", label, entity.id, action, actor_id)
        raise ForbiddenError(f"You are not authorized to {action} this {label.lower()}")
    return entity


def apply_patch(entity, changes: Dict[str, Any]) -> list:
    """Set only the provided fields. Empty strings are values, not omissions."""
    applied = []
    for name, value in changes.items():
        setattr(entity, name, value)
        applied.append(name)
    return applied


def update_owned(
    db: Session,
    model,
    entity_id: Any,
    actor_id: str,
    label: str,
    changes: Dict[str, Any],
):
    """Partially update an owned entity and return it refreshed."""
    entity = load_owned(db, model, entity_id, actor_id, label, action="update")
    applied = apply_patch(entity, changes)
    db.commit()
    db.refresh(entity)
    logger.info("%s %s updated by %s: %s", label, entity.id, actor_id, ", ".join(applied) or "no fields")
    return entity


def delete_owned(
    db: Session,
    model,
    entity_id: Any,
    actor_id: str,
    label: str,
    before_delete: Optional[Callable[[Session, Any], None]] = None,
) -> str:
    """
    Delete an owned entity, running ``before_delete`` (dependent rows) in the
    same transaction. Returns the deleted id.
    """
    entity = load_owned(db, model, entity_id, actor_id, label, action="delete")
    entity_id = entity.id
    try:
        if before_delete:
            before_delete(db, entity)
        db.delete(entity)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("%s %s: delete failed, rolled back", label, entity_id)
        raise
    logger.info("%s %s deleted by %s", label, entity_id, actor_id)
    return entity_id
