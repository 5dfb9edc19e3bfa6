"""Audit log schemas."""
from datetime import datetime
from pydantic import BaseModel, Field

from hotel_ops.models.log import LogAction


class PerformedBy(BaseModel):
    """Actor of an audited action."""
    username: str


class LogEntryResponse(BaseModel):
    """Projection of a log entry returned by GET /logs."""
    id: int
    action: LogAction
    details: str
    performed_by: PerformedBy = Field(..., alias="performedBy")
    timestamp: datetime
    
    class Config:
        populate_by_name = True
