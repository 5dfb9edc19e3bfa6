"""Audit trail writer.

Handlers describe what they just did as an :class:`AuditEvent` and hand it
to :meth:`AuditWriter.emit` after their own commit. The writer uses a
separate session, so a failed audit write can neither roll back nor fail the
mutation it describes; the failure is logged here and nowhere else.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from hotel_ops.database import get_db
from hotel_ops.models.log import Log, LogAction, LogTarget

logger = logging.getLogger(__name__)


@dataclass
class AuditEvent:
    """One attributable mutation."""
    action: LogAction
    details: str
    user_id: Optional[int]
    target: Optional[LogTarget] = None
    target_id: Optional[int] = None
    room_id: Optional[int] = None


class AuditWriter:
    """Append-only writer for the ``logs`` table."""

    def __init__(self, bind):
        self.bind = bind

    def emit(self, event: AuditEvent) -> bool:
        """Record an event. Returns False instead of raising on failure."""
        if not event.user_id:
            logger.warning("Skipping audit entry without an acting user: %s", event.action.value)
            return False
        try:
            self._write(event)
        except Exception:
            logger.exception(
                "Error creating log entry (%s %s)",
                event.action.value,
                event.target.value if event.target else "-",
            )
            return False
        logger.debug("Log created: %s %s", event.action.value, event.details)
        return True

    def _write(self, event: AuditEvent) -> None:
        session = Session(bind=self.bind)
        try:
            session.add(Log(
                action=event.action,
                target=event.target,
                target_id=event.target_id,
                room_id=event.room_id,
                user_id=event.user_id,
                details=event.details,
            ))
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


def get_audit_writer(db: Session = Depends(get_db)) -> AuditWriter:
    """Audit writer bound to the same database as the request session."""
    return AuditWriter(db.get_bind())
