"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, EmailStr, Field


SessionStatusLiteral = Literal["draft", "published"]


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)."""
    id: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    email: EmailStr
    password: str


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    """Response model for authentication."""
    token: str
    user: UserResponse


class MeResponse(BaseModel):
    user: UserResponse


class SessionPayload(BaseModel):
    """Body of save-draft and publish requests.

    `id` is omitted on the first save of a brand-new session.
    """
    id: Optional[str] = Field(None, description="Existing session ID to update")
    title: Optional[str] = ""
    tags: list[str] = Field(default_factory=list)
    json_file_url: Optional[str] = ""


class OwnerInfo(BaseModel):
    id: str
    email: Optional[str] = None


class SessionResponse(BaseModel):
    """Response model for a session record."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Session ID")
    user_id: str = Field(..., description="Owner user ID")
    title: str
    tags: list[str]
    json_file_url: str
    status: SessionStatusLiteral
    created_at: datetime
    updated_at: datetime
    owner: Optional[OwnerInfo] = Field(None, description="Owner details (public listing only)")


class PaginationInfo(BaseModel):
    """Pagination block, camelCase on the wire."""
    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_sessions: int = Field(..., alias="totalSessions")
    has_next_page: bool = Field(..., alias="hasNextPage")


class SessionListResponse(BaseModel):
    """Response model for session list with pagination."""
    sessions: list[SessionResponse]
    pagination: PaginationInfo


class SessionMutationResponse(BaseModel):
    """Response model for save-draft and publish."""
    message: str
    session: SessionResponse


class MessageResponse(BaseModel):
    message: str
