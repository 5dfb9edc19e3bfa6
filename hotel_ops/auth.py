"""Authentication and authorization.

Three ways into the API:

- a bearer token (``Authorization: Bearer <jwt>``) for staff and admins,
- the same token plus an admin role check for user management and logs,
- the shared view PIN (``X-View-Pin``) for read-only access without login.

Routes declare the minimum :class:`Capability` they need instead of
inspecting headers themselves.
"""
import enum
import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, Header, HTTPException, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from hotel_ops.config import settings
from hotel_ops.database import get_db
from hotel_ops.models.user import User, UserRole

logger = logging.getLogger(__name__)

PIN_HEADER = "X-View-Pin"


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token carrying the user's id, username and role."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    role = user.role.value if isinstance(user.role, UserRole) else user.role
    claims = {
        "sub": user.username,
        "id": user.id,
        "username": user.username,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@dataclass
class TokenClaims:
    """Decoded token attached to the request."""
    id: int
    username: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def decode_access_token(token: str) -> TokenClaims:
    """Verify and decode a token. Raises JWTError, KeyError or ValueError."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    return TokenClaims(
        id=int(payload["id"]),
        username=payload["username"],
        role=UserRole(payload["role"]),
    )


def verify_pin(pin: Optional[str]) -> bool:
    """Compare a supplied PIN with the configured one."""
    if not pin:
        return False
    return hmac.compare_digest(pin.encode("utf-8"), settings.VIEW_PIN.encode("utf-8"))


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def _claims_from_header(authorization: Optional[str]) -> TokenClaims:
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided"
        )
    try:
        return decode_access_token(token)
    except (JWTError, KeyError, ValueError, TypeError):
        logger.warning("Rejected invalid or expired token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token"
        )


class Capability(int, enum.Enum):
    """Access levels, ordered from weakest to strongest.

    Admin is not a level here: ``require_admin`` re-reads the role from the
    database because it may have changed since the token was issued.
    """
    ANONYMOUS = 0
    PIN_VIEWER = 1
    STAFF = 2


@dataclass
class Principal:
    """Who is calling and what they may do."""
    capability: Capability
    claims: Optional[TokenClaims] = None


async def resolve_principal(
    authorization: Optional[str] = Header(None),
    x_view_pin: Optional[str] = Header(None, alias=PIN_HEADER),
) -> Principal:
    """
    Work out the caller's capability from the request headers.

    A bearer token wins when both headers are present. Without a token the
    PIN must match; with neither the caller is anonymous.
    """
    try:
        if authorization:
            claims = _claims_from_header(authorization)
            return Principal(capability=Capability.STAFF, claims=claims)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Auth middleware error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication error"
        )

    if x_view_pin is None:
        return Principal(capability=Capability.ANONYMOUS)
    if not verify_pin(x_view_pin):
        logger.warning("Rejected view PIN")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid PIN"
        )
    return Principal(capability=Capability.PIN_VIEWER)


def require_capability(minimum: Capability):
    """Build a dependency that admits principals at or above ``minimum``."""
    async def capability_checker(
        principal: Principal = Depends(resolve_principal),
    ) -> Principal:
        if principal.capability >= minimum:
            return principal
        # Staff routes only accept a token, so the PIN never counts there
        if minimum >= Capability.STAFF:
            detail = "No token provided"
        else:
            detail = "Authentication required"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail
        )
    return capability_checker


# Dual-mode read routes and token-only write routes
require_viewer = require_capability(Capability.PIN_VIEWER)
require_staff = require_capability(Capability.STAFF)


async def get_current_user(
    principal: Principal = Depends(require_staff),
) -> TokenClaims:
    """Token variant: any authenticated user."""
    return principal.claims


async def require_admin(
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TokenClaims:
    """Role variant: the token's user must still exist and be an admin."""
    user = db.query(User).filter(User.id == current_user.id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    if user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user
