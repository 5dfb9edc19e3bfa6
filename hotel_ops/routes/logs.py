"""Audit log routes (admin only, read-only)."""
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from hotel_ops.auth import TokenClaims, require_admin
from hotel_ops.database import get_db
from hotel_ops.models.log import Log, LogAction
from hotel_ops.models.user import User
from hotel_ops.schemas.log import LogEntryResponse, PerformedBy

router = APIRouter(prefix="/logs", tags=["Logs"])

# Shown when the acting user no longer exists
SYSTEM_USERNAME = "System"


@router.get("", response_model=List[LogEntryResponse])
async def list_logs(
    action: Optional[LogAction] = Query(None, description="Filter by action"),
    user: Optional[str] = Query(None, description="Username contains (case-insensitive)"),
    start_date: Optional[date] = Query(None, alias="startDate", description="First day, inclusive"),
    end_date: Optional[date] = Query(None, alias="endDate", description="Last day, inclusive"),
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin)
):
    """List audit entries, newest first."""
    query = db.query(Log, User.username).outerjoin(User, Log.user_id == User.id)
    
    if action:
        query = query.filter(Log.action == action)
    
    if user:
        user_ids = [
            row[0] for row in db.query(User.id).filter(
                func.lower(User.username).contains(user.lower(), autoescape=True)
            ).all()
        ]
        query = query.filter(Log.user_id.in_(user_ids))
    
    if start_date:
        # Strictly after the previous day so a stored "YYYY-MM-DD 00:00:00" still matches
        day_before = datetime.combine(start_date - timedelta(days=1), time.max)
        query = query.filter(Log.created_at > day_before)
    if end_date:
        query = query.filter(Log.created_at <= datetime.combine(end_date, time.max))
    
    rows = query.order_by(Log.created_at.desc(), Log.id.desc()).all()
    return [
        LogEntryResponse(
            id=log.id,
            action=log.action,
            details=log.details,
            performed_by=PerformedBy(username=username or SYSTEM_USERNAME),
            timestamp=log.created_at,
        )
        for log, username in rows
    ]
