"""Issue title (category) routes, scoped under a room."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload

from hotel_ops.audit import AuditEvent, AuditWriter, get_audit_writer
from hotel_ops.auth import TokenClaims, get_current_user, require_viewer
from hotel_ops.database import get_db
from hotel_ops.models.issue import Issue, IssueTitle
from hotel_ops.models.log import LogAction, LogTarget
from hotel_ops.routes.rooms import get_room_or_404
from hotel_ops.schemas.issue import IssueTitleCreate, IssueTitleResponse, IssueTitleUpdate
from hotel_ops.schemas.user import MessageResponse
from hotel_ops.services.cascade import delete_title_cascade

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms/{room_id}/titles", tags=["Categories"])


def get_title_in_room_or_404(db: Session, room_id: int, title_id: int) -> IssueTitle:
    """Load a category that belongs to the given room, or raise 404."""
    title = db.query(IssueTitle).filter(
        IssueTitle.id == title_id,
        IssueTitle.room_id == room_id
    ).first()
    if not title:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Title not found or does not belong to this room"
        )
    return title


@router.get("", response_model=List[IssueTitleResponse])
async def list_titles(
    room_id: int,
    db: Session = Depends(get_db),
    principal=Depends(require_viewer)
):
    """List a room's categories with their issues (token or PIN)."""
    get_room_or_404(db, room_id)
    return (
        db.query(IssueTitle)
        .options(
            selectinload(IssueTitle.created_by),
            selectinload(IssueTitle.issues).selectinload(Issue.created_by),
        )
        .filter(IssueTitle.room_id == room_id)
        .order_by(IssueTitle.created_at, IssueTitle.id)
        .all()
    )


@router.post("", response_model=IssueTitleResponse, status_code=status.HTTP_201_CREATED)
async def create_title(
    room_id: int,
    title_data: IssueTitleCreate,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Create a category in a room."""
    room = get_room_or_404(db, room_id)
    
    title = IssueTitle(
        room_id=room.id,
        title=title_data.title,
        created_by_id=current_user.id,
    )
    db.add(title)
    db.commit()
    db.refresh(title)
    logger.info("Category %r created in room %s", title.title, room.number)
    
    audit.emit(AuditEvent(
        action=LogAction.CREATE,
        details=f'Room {room.number}: Created category "{title.title}"',
        user_id=current_user.id,
        target=LogTarget.CATEGORY,
        target_id=title.id,
        room_id=room.id,
    ))
    return title


@router.put("/{title_id}", response_model=IssueTitleResponse)
async def update_title(
    room_id: int,
    title_id: int,
    title_update: IssueTitleUpdate,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Rename a category."""
    room = get_room_or_404(db, room_id)
    title = get_title_in_room_or_404(db, room_id, title_id)
    
    old_name = title.title
    title.title = title_update.title
    db.commit()
    db.refresh(title)
    
    audit.emit(AuditEvent(
        action=LogAction.UPDATE,
        details=f'Room {room.number}: Renamed category "{old_name}" to "{title.title}"',
        user_id=current_user.id,
        target=LogTarget.CATEGORY,
        target_id=title.id,
        room_id=room.id,
    ))
    return title


@router.delete("/{title_id}", response_model=MessageResponse)
async def delete_title(
    room_id: int,
    title_id: int,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Delete a category and every issue under it."""
    room = get_room_or_404(db, room_id)
    title = get_title_in_room_or_404(db, room_id, title_id)
    room_number, name = room.number, title.title
    
    issues_deleted = delete_title_cascade(db, title_id)
    logger.info("Category %r deleted from room %s (%d issues)", name, room_number, issues_deleted)
    
    audit.emit(AuditEvent(
        action=LogAction.DELETE,
        details=f'Room {room_number}: Deleted category "{name}" and its {issues_deleted} issues',
        user_id=current_user.id,
        target=LogTarget.CATEGORY,
        target_id=title_id,
        room_id=room_id,
    ))
    return {"message": "Title and associated issues deleted successfully"}
