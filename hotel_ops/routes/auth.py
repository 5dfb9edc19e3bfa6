"""Login and PIN routes."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from hotel_ops.auth import create_access_token, verify_password, verify_pin
from hotel_ops.database import get_db
from hotel_ops.models.user import User
from hotel_ops.schemas.user import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    MessageResponse,
    PinRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/auth/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """Exchange a username and password for a signed token."""
    user = db.query(User).filter(User.username == credentials.username).first()
    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.warning("Failed login for %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )
    
    logger.info("User %s logged in", user.username)
    return LoginResponse(
        token=create_access_token(user),
        user=LoginUser(id=user.id, username=user.username, role=user.role),
    )


@router.post("/verify-pin", response_model=MessageResponse)
async def verify_view_pin(body: PinRequest):
    """Check the shared read-only PIN."""
    if not verify_pin(body.pin):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid PIN"
        )
    return {"message": "PIN verified"}


@router.post("/auth/pin")
async def pin_login(body: PinRequest):
    """PIN check used by the view screen; tolerates surrounding whitespace."""
    if body.pin and verify_pin(body.pin.strip()):
        return {"success": True}
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "message": "Invalid PIN"},
    )


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "message": "Server is running"}
