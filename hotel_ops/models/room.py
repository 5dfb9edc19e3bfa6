"""Room model."""
import enum
import re
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hotel_ops.database import Base

# The single non-numeric room used for facilities that are not guest rooms.
OTHER_ROOM_NUMBER = "OTHER"
OTHER_ROOM_TYPE = "Other"

ROOM_NUMBER_PATTERN = re.compile(r"^\d{3}$")


class RoomStatus(str, enum.Enum):
    """Occupancy status of a room."""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


def is_other_type(room_type: str) -> bool:
    """Whether a room type label designates the sentinel room."""
    return (room_type or "").strip().lower() == OTHER_ROOM_TYPE.lower()


def floor_for(number: str) -> int:
    """
    Floor derived from a room number.
    
    Numeric numbers map to ``number // 100`` ("101" -> 1). The sentinel
    room and anything else non-numeric go to floor 0, which is shown as
    the ground floor; no attempt is made to guess a better floor.
    """
    if number and number.isdigit():
        return int(number) // 100
    return 0


def floor_label(floor: int) -> str:
    """Display name for a floor bucket."""
    return "Ground Floor" if floor == 0 else f"Floor {floor}"


class Room(Base):
    """Room model - owns issue titles (categories)."""
    __tablename__ = "rooms"
    
    id = Column(Integer, primary_key=True, index=True)
    number = Column(String(10), unique=True, index=True, nullable=False)
    type = Column(String(50), nullable=False)
    status = Column(Enum(RoomStatus), default=RoomStatus.AVAILABLE, nullable=False)
    floor = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    # Children are removed explicitly by the cascade helpers
    titles = relationship("IssueTitle", back_populates="room", passive_deletes=True)
