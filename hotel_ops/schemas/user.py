"""User and authentication schemas."""
from datetime import datetime
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, Field, field_validator

from hotel_ops.models.user import UserRole

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def check_password_length(password: str) -> str:
    """Reject passwords whose UTF-8 encoding is too long for bcrypt."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


Password = Annotated[str, Field(min_length=1), AfterValidator(check_password_length)]


class UserSummary(BaseModel):
    """Minimal user reference embedded in other responses."""
    id: int
    username: str
    
    class Config:
        from_attributes = True


class UserCreate(BaseModel):
    """Schema for creating a user."""
    username: str = Field(..., min_length=1, max_length=50)
    password: Password
    role: UserRole = UserRole.STAFF
    
    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value


class UserResponse(BaseModel):
    """Schema for user response. Never carries the password hash."""
    id: int
    username: str
    role: UserRole
    created_at: datetime
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True


class PasswordUpdate(BaseModel):
    """Schema for resetting a user's password."""
    password: Password
    


class RoleUpdate(BaseModel):
    """Schema for changing a user's role."""
    role: UserRole


class LoginRequest(BaseModel):
    """Credentials for POST /auth/login."""
    username: str
    password: str


class LoginUser(BaseModel):
    """User block returned alongside a token."""
    id: int
    username: str
    role: UserRole


class LoginResponse(BaseModel):
    """JWT token schema."""
    token: str
    token_type: str = "bearer"
    user: LoginUser


class PinRequest(BaseModel):
    """Body for the PIN endpoints."""
    pin: Optional[str] = None


class MessageResponse(BaseModel):
    """Plain confirmation body."""
    message: str
