"""User management routes (admin only)."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hotel_ops.audit import AuditEvent, AuditWriter, get_audit_writer
from hotel_ops.auth import TokenClaims, get_password_hash, require_admin
from hotel_ops.database import get_db
from hotel_ops.models.log import LogAction, LogTarget
from hotel_ops.models.user import User
from hotel_ops.schemas.user import (
    MessageResponse,
    PasswordUpdate,
    RoleUpdate,
    UserCreate,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_or_404(db: Session, user_id: int) -> User:
    """Load a user or raise 404."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


def username_taken() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Username already exists"
    )


def ensure_username_available(db: Session, username: str):
    """Raise 400 if the username is already in use."""
    if db.query(User).filter(User.username == username).first():
        raise username_taken()


@router.get("", response_model=List[UserResponse])
async def list_users(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin)
):
    """List all users."""
    return db.query(User).order_by(User.username).all()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(require_admin)
):
    """Create a new user."""
    username = user_data.username
    ensure_username_available(db, username)
    
    user = User(
        username=username,
        hashed_password=get_password_hash(user_data.password),
        role=user_data.role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise username_taken()
    db.refresh(user)
    logger.info("User %s created by %s", user.username, current_user.username)
    
    audit.emit(AuditEvent(
        action=LogAction.CREATE,
        details=f"User Management: Created user {user.username} with role {user.role.value}",
        user_id=current_user.id,
        target=LogTarget.USER,
        target_id=user.id,
    ))
    return user


@router.put("/{user_id}/password", response_model=MessageResponse)
async def update_password(
    user_id: int,
    password_data: PasswordUpdate,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(require_admin)
):
    """Reset a user's password."""
    user = get_user_or_404(db, user_id)
    user.hashed_password = get_password_hash(password_data.password)
    db.commit()
    logger.info("Password reset for user %s by %s", user.username, current_user.username)
    
    audit.emit(AuditEvent(
        action=LogAction.UPDATE,
        details=f"User Management: Updated password for {user.username}",
        user_id=current_user.id,
        target=LogTarget.USER,
        target_id=user.id,
    ))
    return {"message": "Password updated successfully"}


@router.put("/{user_id}/role", response_model=UserResponse)
async def update_role(
    user_id: int,
    role_data: RoleUpdate,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(require_admin)
):
    """Change another user's role."""
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot change your own role"
        )
    
    user = get_user_or_404(db, user_id)
    old_role = user.role
    user.role = role_data.role
    db.commit()
    db.refresh(user)
    logger.info("Role of %s changed to %s", user.username, user.role.value)
    
    audit.emit(AuditEvent(
        action=LogAction.UPDATE,
        details=(
            f"User Management: Changed {user.username}'s role "
            f"from {old_role.value} to {user.role.value}"
        ),
        user_id=current_user.id,
        target=LogTarget.USER,
        target_id=user.id,
    ))
    return user


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    audit: AuditWriter = Depends(get_audit_writer),
    current_user: TokenClaims = Depends(require_admin)
):
    """Delete a user other than the caller."""
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account"
        )
    
    user = get_user_or_404(db, user_id)
    username = user.username
    db.delete(user)
    db.commit()
    logger.info("User %s deleted by %s", username, current_user.username)
    
    audit.emit(AuditEvent(
        action=LogAction.DELETE,
        details=f"User Management: Deleted user {username}",
        user_id=current_user.id,
        target=LogTarget.USER,
        target_id=user_id,
    ))
    return {"message": "User deleted successfully"}
