"""
Stamps ``created_by`` / ``updated_by`` on flush.

The request's principal is stored in ``Session.info`` by the API layer; any
AuditMixin row written through that session picks it up.
"""
from typing import Optional

from sqlalchemy import event
from sqlalchemy.orm import Session

from infrastructure.db.models import AuditMixin

ACTOR_KEY = "actor"


def set_actor(session: Session, actor: Optional[str]) -> None:
    """Record who is acting through ``session``."""
    session.info[ACTOR_KEY] = actor


@event.listens_for(Session, "before_flush")
def _stamp_actor(session: Session, flush_context, instances) -> None:
    actor = session.info.get(ACTOR_KEY)
    if actor is None:
        return
    for obj in session.new:
        if isinstance(obj, AuditMixin):
            obj.created_by = obj.created_by or actor
            obj.updated_by = actor
    for obj in session.dirty:
        if isinstance(obj, AuditMixin) and session.is_modified(obj):
            obj.updated_by = actor
