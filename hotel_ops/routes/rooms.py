"""Room routes."""
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hotel_ops.audit import AuditEvent, AuditWriter, get_audit_writer
from hotel_ops.auth import TokenClaims, get_current_user, require_viewer
from hotel_ops.database import get_db
from hotel_ops.models.log import LogAction, LogTarget
from hotel_ops.models.room import (
    OTHER_ROOM_NUMBER,
    ROOM_NUMBER_PATTERN,
    Room,
    RoomStatus,
    floor_for,
    floor_label,
    is_other_type,
)
from hotel_ops.schemas.room import FloorGroup, RoomCreate, RoomResponse, RoomUpdate
from hotel_ops.schemas.user import MessageResponse
from hotel_ops.services.cascade import delete_room_cascade

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms", tags=["Rooms"])


def get_room_or_404(db: Session, room_id: int) -> Room:
    """Load a room or raise 404."""
    room = db.query(Room).filter(Room.id == room_id).first()
    if not room:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Room not found"
        )
    return room


def normalize_room_number(number: str, room_type: str) -> str:
    """
    Return the number to store for a room.
    
    The Other type always gets the sentinel number; every other type must
    use a three digit number.
    """
    if is_other_type(room_type):
        return OTHER_ROOM_NUMBER
    number = number or ""
    if not ROOM_NUMBER_PATTERN.match(number):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Room number must be 3 digits"
        )
    return number


def ensure_number_available(db: Session, number: str, exclude_id: Optional[int] = None):
    """Raise 400 if another room already uses ``number``."""
    query = db.query(Room).filter(Room.number == number)
    if exclude_id is not None:
        query = query.filter(Room.id != exclude_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Room number already exists"
        )


def commit_room(db: Session) -> None:
    """Commit a room write; a concurrent insert of the same number is a 400."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Room number already exists"
        )


@router.get("", response_model=List[RoomResponse])
async def list_rooms(
    db: Session = Depends(get_db),
    principal=Depends(require_viewer)
):
    """List all rooms ordered by number (token or PIN)."""
    return db.query(Room).order_by(Room.number).all()


@router.get("/floors", response_model=List[FloorGroup])
async def list_rooms_by_floor(
    db: Session = Depends(get_db),
    principal=Depends(require_viewer)
):
    """Rooms grouped by floor; the Other room sits on the ground floor."""
    groups: Dict[int, List[Room]] = {}
    for room in db.query(Room).order_by(Room.number).all():
        groups.setdefault(room.floor, []).append(room)
    return [
        FloorGroup(
            floor=floor,
            label=floor_label(floor),
            rooms=[RoomResponse.model_validate(r) for r in rooms],
        )
        for floor, rooms in sorted(groups.items())
    ]


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: int,
    db: Session = Depends(get_db),
    principal=Depends(require_viewer)
):
    """Get a specific room (token or PIN)."""
    return get_room_or_404(db, room_id)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    room_data: RoomCreate,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Create a room."""
    number = normalize_room_number(room_data.number, room_data.type)
    ensure_number_available(db, number)
    
    room = Room(
        number=number,
        type=room_data.type,
        status=RoomStatus.AVAILABLE,
        floor=floor_for(number),
    )
    db.add(room)
    commit_room(db)
    db.refresh(room)
    logger.info("Room %s created by %s", room.number, current_user.username)
    
    audit.emit(AuditEvent(
        action=LogAction.CREATE,
        details=f"Added room {room.number}",
        user_id=current_user.id,
        target=LogTarget.ROOM,
        target_id=room.id,
        room_id=room.id,
    ))
    return room


@router.put("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: int,
    room_update: RoomUpdate,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Update a room's number, type and optionally status."""
    number = normalize_room_number(room_update.number, room_update.type)
    room = get_room_or_404(db, room_id)
    ensure_number_available(db, number, exclude_id=room.id)
    
    room.number = number
    room.type = room_update.type
    room.floor = floor_for(number)
    if room_update.status is not None:
        room.status = room_update.status
    
    commit_room(db)
    db.refresh(room)
    logger.info("Room %s updated by %s", room.number, current_user.username)
    
    audit.emit(AuditEvent(
        action=LogAction.UPDATE,
        details=f"Updated room {room.number}",
        user_id=current_user.id,
        target=LogTarget.ROOM,
        target_id=room.id,
        room_id=room.id,
    ))
    return room


@router.delete("/{room_id}", response_model=MessageResponse)
async def delete_room(
    room_id: int,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Delete a room together with its categories and issues."""
    room = get_room_or_404(db, room_id)
    number = room.number
    
    titles_deleted, issues_deleted = delete_room_cascade(db, room_id)
    logger.info(
        "Room %s deleted by %s (%d categories, %d issues)",
        number, current_user.username, titles_deleted, issues_deleted,
    )
    
    audit.emit(AuditEvent(
        action=LogAction.DELETE,
        details=f"Deleted room {number} with {titles_deleted} categories and {issues_deleted} issues",
        user_id=current_user.id,
        target=LogTarget.ROOM,
        target_id=room_id,
        room_id=room_id,
    ))
    return {"message": "Room deleted successfully"}
