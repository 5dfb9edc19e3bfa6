"""Audit log model."""
import enum
from sqlalchemy import Column, Integer, Text, Enum, DateTime, ForeignKey
from sqlalchemy.sql import func

from hotel_ops.database import Base


class LogAction(str, enum.Enum):
    """Kinds of audited mutations."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class LogTarget(str, enum.Enum):
    """Kinds of entities an audit entry can point at."""
    ROOM = "room"
    CATEGORY = "category"
    ISSUE = "issue"
    USER = "user"


class Log(Base):
    """
    Append-only audit entry.
    
    ``details`` is a human readable narrative ("Room 101: Created issue ...").
    ``target_id`` and ``room_id`` are plain integers rather than foreign keys
    so that entries survive deletion of what they describe. ``user_id`` is
    nullable only so deleting a user never fails on their history.
    """
    __tablename__ = "logs"
    
    id = Column(Integer, primary_key=True, index=True)
    action = Column(Enum(LogAction), nullable=False, index=True)
    target = Column(Enum(LogTarget), nullable=True)
    target_id = Column(Integer, nullable=True)
    room_id = Column(Integer, nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    details = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
