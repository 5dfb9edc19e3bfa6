"""Issue routes, scoped under a room and category."""
import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hotel_ops.audit import AuditEvent, AuditWriter, get_audit_writer
from hotel_ops.auth import TokenClaims, get_current_user
from hotel_ops.database import get_db
from hotel_ops.models.issue import Issue, IssueTitle
from hotel_ops.models.log import LogAction, LogTarget
from hotel_ops.models.room import Room
from hotel_ops.schemas.issue import IssueCreate, IssueResponse, IssueUpdate
from hotel_ops.schemas.user import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms/{room_id}/titles/{title_id}/issues", tags=["Issues"])


def resolve_context(
    db: Session,
    room_id: int,
    title_id: int,
    issue_id: Optional[int] = None,
) -> Tuple[Room, IssueTitle, Optional[Issue]]:
    """
    Load the room, its category and optionally one of the category's issues.
    
    Any missing link, including a category from another room or an issue
    from another category, is a 404.
    """
    room = db.query(Room).filter(Room.id == room_id).first()
    title = db.query(IssueTitle).filter(
        IssueTitle.id == title_id,
        IssueTitle.room_id == room_id
    ).first()
    issue = None
    if issue_id is not None:
        issue = db.query(Issue).filter(
            Issue.id == issue_id,
            Issue.title_id == title_id
        ).first()
    
    if not room or not title or (issue_id is not None and not issue):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Issue, room, or title not found"
        )
    return room, title, issue


@router.get("", response_model=List[IssueResponse])
async def list_issues(
    room_id: int,
    title_id: int,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user)
):
    """List a category's issues, newest first."""
    resolve_context(db, room_id, title_id)
    return (
        db.query(Issue)
        .filter(Issue.title_id == title_id)
        .order_by(Issue.created_at.desc(), Issue.id.desc())
        .all()
    )


@router.get("/{issue_id}", response_model=IssueResponse)
async def get_issue(
    room_id: int,
    title_id: int,
    issue_id: int,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Get a single issue."""
    _, _, issue = resolve_context(db, room_id, title_id, issue_id)
    return issue


@router.post("", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
async def create_issue(
    room_id: int,
    title_id: int,
    issue_data: IssueCreate,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Report an issue under a category."""
    room, title, _ = resolve_context(db, room_id, title_id)
    description = issue_data.description
    
    issue = Issue(
        title_id=title.id,
        description=description,
        created_by_id=current_user.id,
    )
    db.add(issue)
    db.commit()
    db.refresh(issue)
    logger.info("Issue %s created in room %s", issue.id, room.number)
    
    audit.emit(AuditEvent(
        action=LogAction.CREATE,
        details=f'Room {room.number}: Created issue "{description}" under category "{title.title}"',
        user_id=current_user.id,
        target=LogTarget.ISSUE,
        target_id=issue.id,
        room_id=room.id,
    ))
    return issue


@router.put("/{issue_id}", response_model=IssueResponse)
async def update_issue(
    room_id: int,
    title_id: int,
    issue_id: int,
    issue_update: IssueUpdate,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Edit an issue's description."""
    room, title, issue = resolve_context(db, room_id, title_id, issue_id)
    old_description = issue.description
    new_description = issue_update.description
    
    issue.description = new_description
    db.commit()
    db.refresh(issue)
    logger.info("Issue %s updated in room %s", issue.id, room.number)
    
    audit.emit(AuditEvent(
        action=LogAction.UPDATE,
        details=(
            f'Room {room.number}: Updated issue under "{title.title}" '
            f'from "{old_description}" to "{new_description}"'
        ),
        user_id=current_user.id,
        target=LogTarget.ISSUE,
        target_id=issue.id,
        room_id=room.id,
    ))
    return issue


@router.delete("/{issue_id}", response_model=MessageResponse)
async def delete_issue(
    room_id: int,
    title_id: int,
    issue_id: int,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(get_current_user)
):
    """Delete an issue."""
    room, title, issue = resolve_context(db, room_id, title_id, issue_id)
    description = issue.description
    
    db.delete(issue)
    db.commit()
    logger.info("Issue %s deleted from room %s", issue_id, room.number)
    
    audit.emit(AuditEvent(
        action=LogAction.DELETE,
        details=f'Room {room.number}: Deleted issue "{description}" from category "{title.title}"',
        user_id=current_user.id,
        target=LogTarget.ISSUE,
        target_id=issue_id,
        room_id=room.id,
    ))
    return {"message": "Issue deleted successfully"}
