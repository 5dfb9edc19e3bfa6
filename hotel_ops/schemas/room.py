"""Room schemas for request/response validation."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from hotel_ops.models.room import RoomStatus


class RoomBase(BaseModel):
    """Base room schema."""
    number: str = Field("", max_length=10)
    type: str = Field(..., min_length=1, max_length=50)

    class Config:
        str_strip_whitespace = True


class RoomCreate(RoomBase):
    """Schema for creating a room. ``number`` is ignored for the Other type."""
    pass


class RoomUpdate(RoomBase):
    """Schema for updating a room."""
    status: Optional[RoomStatus] = None


class RoomResponse(RoomBase):
    """Schema for room response."""
    id: int
    status: RoomStatus
    floor: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True


class FloorGroup(BaseModel):
    """Rooms sharing a floor."""
    floor: int
    label: str
    rooms: List[RoomResponse] = []
