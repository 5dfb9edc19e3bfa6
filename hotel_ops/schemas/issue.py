"""Issue title (category) and issue schemas."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from hotel_ops.schemas.user import UserSummary


class IssueTitleCreate(BaseModel):
    """Schema for creating or renaming a category."""
    title: str = Field(..., min_length=1, max_length=200)
    
    class Config:
        str_strip_whitespace = True


IssueTitleUpdate = IssueTitleCreate


class IssueCreate(BaseModel):
    """Schema for creating or editing an issue."""
    description: str = Field(..., min_length=1)
    
    class Config:
        str_strip_whitespace = True


IssueUpdate = IssueCreate


class IssueResponse(BaseModel):
    """Schema for issue response."""
    id: int
    title_id: int
    description: str
    created_by: Optional[UserSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True


class IssueTitleResponse(BaseModel):
    """Schema for a category with its issues populated."""
    id: int
    room_id: int
    title: str
    created_by: Optional[UserSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    issues: List[IssueResponse] = []
    
    class Config:
        from_attributes = True
