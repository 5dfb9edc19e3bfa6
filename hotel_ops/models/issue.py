"""Issue title (category) and issue models."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hotel_ops.database import Base


class IssueTitle(Base):
    """Category of issues within a room, e.g. "Plumbing"."""
    __tablename__ = "issue_titles"
    
    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    # Relationships
    room = relationship("Room", back_populates="titles")
    created_by = relationship("User")
    issues = relationship(
        "Issue",
        back_populates="title",
        passive_deletes=True,
        order_by=lambda: [Issue.created_at.desc(), Issue.id.desc()],
    )


class Issue(Base):
    """A single reported maintenance problem."""
    __tablename__ = "issues"
    
    id = Column(Integer, primary_key=True, index=True)
    title_id = Column(Integer, ForeignKey("issue_titles.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    # Relationships
    title = relationship("IssueTitle", back_populates="issues")
    created_by = relationship("User")
