"""Generic relation helpers: toggle an actor->target edge and read
paginated, denormalized views of relation records.

Likes (video/comment/tweet) and channel subscriptions are instances of
``RelationSpec``; every list endpoint goes through ``paginate``.
"""
import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from vidtube.core.config import settings
from vidtube.core.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


def parse_id(value: Any, label: str) -> str:
    """Validate an entity identifier, returning its canonical form."""
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, TypeError, AttributeError):
        raise InvalidArgumentError(f"Invalid {label} ID")


def get_or_404(db: Session, model, entity_id: Any, label: str):
    """Load an entity by id or raise NotFound."""
    entity = db.get(model, parse_id(entity_id, label))
    if entity is None:
        raise NotFoundError(f"{label} not found")
    return entity


# ============================================
# Relationship toggle
# ============================================

@dataclass(frozen=True)
class RelationSpec:
    """Describes one kind of actor->target relation."""
    label: str                   # "Video", "Comment", "Tweet", "Channel"
    model: type                  # relation record model
    actor_column: str            # column holding the actor id
    target_column: str           # column holding the target id
    target_model: type           # model the target id refers to
    active_message: str
    inactive_message: str
    guard: Optional[Callable[[str, Any], None]] = field(default=None, compare=False)

    def actor_attr(self):
        return getattr(self.model, self.actor_column)

    def target_attr(self):
        return getattr(self.model, self.target_column)


@dataclass
class ToggleResult:
    """Outcome of a toggle: new state plus fresh target count."""
    active: bool
    total_count: int
    target_id: str
    message: str

    def to_dict(self, active_key: str, count_key: str, id_key: str) -> dict:
        return {
            active_key: self.active,
            count_key: self.total_count,
            id_key: self.target_id,
            "active": self.active,
            "totalCount": self.total_count,
            "targetId": self.target_id,
        }


def count_relations(db: Session, spec: RelationSpec, target_id: str) -> int:
    """Count relation records pointing at a target."""
    return db.query(func.count(spec.model.id)).filter(spec.target_attr() == target_id).scalar() or 0


def has_relation(db: Session, spec: RelationSpec, actor_id: Optional[str], target_id: str) -> bool:
    if not actor_id:
        return False
    return db.query(spec.model.id).filter(
        spec.actor_attr() == actor_id,
        spec.target_attr() == target_id,
    ).first() is not None


def toggle_relation(db: Session, spec: RelationSpec, actor_id: str, target_id: Any) -> ToggleResult:
    """
    Flip membership of the (actor, target) relation.

    Deletes an existing record (inactive) or inserts a new one (active).
    The insert is guarded by a unique constraint on (actor, target): when a
    concurrent toggle inserted first, the IntegrityError is rolled back and
    the relation is reported as it now stands in the database. A target
    deleted meanwhile (foreign key failure) raises NotFound.

    Raises:
        InvalidArgumentError: target_id is not a valid identifier
        NotFoundError: target does not exist
    """
    target = get_or_404(db, spec.target_model, target_id, spec.label)
    target_id = target.id

    if spec.guard:
        spec.guard(actor_id, target)

    deleted = db.query(spec.model).filter(
        spec.actor_attr() == actor_id,
        spec.target_attr() == target_id,
    ).delete(synchronize_session=False)

    if deleted:
        db.commit()
        active = False
    else:
        db.add(spec.model(**{spec.actor_column: actor_id, spec.target_column: target_id}))
        try:
            db.commit()
            active = True
        except IntegrityError:
            db.rollback()
            target_exists = db.query(spec.target_model.id).filter(
                spec.target_model.id == target_id
            ).first() is not None
            if not target_exists:
                logger.info("%s %s deleted during toggle by %s", spec.label, target_id, actor_id)
                raise NotFoundError(f"{spec.label} not found")
            active = has_relation(db, spec, actor_id, target_id)
            logger.info("%s relation %s->%s already exists, treating as toggled", spec.label, actor_id, target_id)

    total = count_relations(db, spec, target_id)
    logger.info(
        "%s toggle by %s on %s: active=%s total=%d",
        spec.label, actor_id, target_id, active, total,
    )
    return ToggleResult(
        active=active,
        total_count=total,
        target_id=target_id,
        message=spec.active_message if active else spec.inactive_message,
    )


# ============================================
# Paginated reader
# ============================================

# (page - 1) * max_page_size must fit a 64-bit OFFSET
MAX_PAGE = 10 ** 9


@dataclass
class Page:
    """One page of a filtered, ordered result set."""
    items: List[dict]
    total_count: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.limit) if self.total_count > 0 else 0

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self, alias: Optional[str] = None, count_alias: Optional[str] = None) -> dict:
        result = {
            "items": self.items,
            "totalCount": self.total_count,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            "hasMore": self.has_more,
        }
        if alias:
            result[alias] = self.items
        if count_alias:
            result[count_alias] = self.total_count
        return result


def clamp_page(page: Optional[int], limit: Optional[int], default_limit: int) -> Tuple[int, int]:
    """Apply defaults, clamp page to [1, MAX_PAGE] and limit to [1, max_page_size]."""
    page = min(max(1, page or 1), MAX_PAGE)
    if limit is None:
        limit = default_limit
    limit = max(1, min(limit, settings.max_page_size))
    return page, limit


def paginate(
    query: Query,
    page: int,
    limit: int,
    shape: Callable[[Any], dict],
    order_by: Sequence = (),
) -> Page:
    """
    Count the full query, then fetch and shape one ordered slice of it.

    Args:
        query: Filtered query (unordered)
        page: 1-based page number
        limit: Page size
        shape: Converts a row to its read shape
        order_by: Ordering; should end in a unique column so pages are stable
    """
    total = query.order_by(None).count()
    rows = query.order_by(*order_by).offset((page - 1) * limit).limit(limit).all()
    return Page(items=[shape(row) for row in rows], total_count=total, page=page, limit=limit)


def read_relation(
    db: Session,
    spec: RelationSpec,
    by: str,
    value: str,
    page: int,
    limit: int,
    shape: Callable[[Any], dict],
    joins: Sequence = (),
    filters: Sequence = (),
    options: Sequence = (),
) -> Page:
    """
    List relation records for one side of the edge, newest first.

    Args:
        by: "target" to list records pointing at ``value`` (e.g. a channel's
            subscribers), "actor" to list records created by ``value``
            (e.g. the channels a user subscribes to)
        joins: (model, onclause) pairs joined before filtering
        filters: Extra filter expressions (e.g. published videos only)
    """
    column = spec.target_attr() if by == "target" else spec.actor_attr()
    query = db.query(spec.model)
    for model, onclause in joins:
        query = query.join(model, onclause)
    query = query.filter(column == value, *filters)
    if options:
        query = query.options(*options)
    return paginate(
        query, page, limit, shape,
        order_by=(spec.model.created_at.desc(), spec.model.id.desc()),
    )
