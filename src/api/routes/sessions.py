"""Wellness session routes.

Endpoints:
- GET /sessions: Public listing of published sessions (tags, search, pagination)
- GET /my-sessions: Caller's own sessions (status filter, pagination)
- GET /my-sessions/{id}: One owned session
- POST /my-sessions/save-draft: Create or update a draft
- POST /my-sessions/publish: Create or update and publish
- DELETE /my-sessions/{id}: Delete an owned session

Flow:
    Editor → POST /my-sessions/save-draft (no id) → session.id allocated
    Editor → POST /my-sessions/save-draft (id)    → same record updated
    Editor → POST /my-sessions/publish (id)       → visible in GET /sessions
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_session_repo, get_user_repo
from api.models import (
    MessageResponse,
    OwnerInfo,
    PaginationInfo,
    SessionListResponse,
    SessionMutationResponse,
    SessionPayload,
    SessionResponse,
    UserResponse,
)
from api.security import get_current_user_required
from domain.model.errors import DomainError, NotFoundError, ValidationError
from domain.model.session import SessionPage, SessionStatus, WellnessSession
from port.session_repository import SessionRepository
from port.user_repository import UserRepository
from services import session_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sessions"])


def _clamp_paging(page: int, limit: int) -> tuple[int, int]:
    return max(page, 1), min(max(limit, 1), session_service.MAX_PAGE_SIZE)


def _to_response(session: WellnessSession, owner: OwnerInfo | None = None) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        user_id=session.user_id,
        title=session.title,
        tags=session.tags,
        json_file_url=session.json_file_url,
        status=session.status.value,
        created_at=session.created_at,
        updated_at=session.updated_at,
        owner=owner,
    )


def _to_pagination(result: SessionPage) -> PaginationInfo:
    return PaginationInfo(
        current_page=result.page,
        total_pages=result.total_pages,
        total_sessions=result.total,
        has_next_page=result.has_next_page,
    )


def _raise_http(e: DomainError, fallback: str):
    """Map a domain error to the matching HTTPException."""
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=404, detail="Session not found")
    if isinstance(e, ValidationError):
        raise HTTPException(status_code=400, detail=str(e))
    logger.error(fallback, extra={"error": str(e)})
    raise HTTPException(status_code=500, detail=fallback)


@router.get("/sessions", response_model=SessionListResponse)
async def list_published_sessions(
    page: int = 1,
    limit: int = session_service.DEFAULT_PAGE_SIZE,
    tags: Optional[str] = None,
    search: Optional[str] = None,
    repo: SessionRepository = Depends(get_session_repo),
    user_repo: UserRepository = Depends(get_user_repo),
):
    """List published sessions. `tags` is comma-separated; any match counts."""
    page, limit = _clamp_paging(page, limit)
    try:
        result = session_service.list_published(repo, page=page, limit=limit, tags=tags, search=search)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    owners: dict[str, OwnerInfo] = {}
    for session in result.items:
        if session.user_id not in owners:
            user = user_repo.get_by_id(session.user_id)
            owners[session.user_id] = OwnerInfo(id=session.user_id, email=user.email if user else None)

    return SessionListResponse(
        sessions=[_to_response(s, owners[s.user_id]) for s in result.items],
        pagination=_to_pagination(result),
    )


@router.get("/my-sessions", response_model=SessionListResponse)
async def list_my_sessions(
    status: Optional[str] = None,
    page: int = 1,
    limit: int = session_service.DEFAULT_PAGE_SIZE,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: SessionRepository = Depends(get_session_repo),
):
    """List the caller's sessions. Unknown status values are ignored."""
    page, limit = _clamp_paging(page, limit)
    status_filter = None
    if status in (SessionStatus.DRAFT.value, SessionStatus.PUBLISHED.value):
        status_filter = SessionStatus(status)

    result = session_service.list_own(repo, current_user.id, status=status_filter, page=page, limit=limit)
    return SessionListResponse(
        sessions=[_to_response(s) for s in result.items],
        pagination=_to_pagination(result),
    )


@router.get("/my-sessions/{session_id}", response_model=SessionResponse)
async def get_my_session(
    session_id: str,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: SessionRepository = Depends(get_session_repo),
):
    """Get one of the caller's sessions."""
    try:
        session = session_service.get_own(repo, current_user.id, session_id)
    except DomainError as e:
        _raise_http(e, "Failed to fetch session")
    return _to_response(session)


@router.post("/my-sessions/save-draft", response_model=SessionMutationResponse)
async def save_draft(
    payload: SessionPayload,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: SessionRepository = Depends(get_session_repo),
):
    """Create a draft (no id) or overwrite an owned session as a draft."""
    try:
        session = session_service.save_draft(
            repo,
            current_user.id,
            title=payload.title,
            tags=payload.tags,
            json_file_url=payload.json_file_url,
            session_id=payload.id,
        )
    except DomainError as e:
        _raise_http(e, "Failed to save draft")

    return SessionMutationResponse(message="Draft saved successfully", session=_to_response(session))


@router.post("/my-sessions/publish", response_model=SessionMutationResponse)
async def publish_session(
    payload: SessionPayload,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: SessionRepository = Depends(get_session_repo),
):
    """Publish a session. Title and a valid http(s) URL are required."""
    try:
        session = session_service.publish(
            repo,
            current_user.id,
            title=payload.title,
            tags=payload.tags,
            json_file_url=payload.json_file_url,
            session_id=payload.id,
        )
    except DomainError as e:
        _raise_http(e, "Failed to publish session")

    return SessionMutationResponse(message="Session published successfully", session=_to_response(session))


@router.delete("/my-sessions/{session_id}", response_model=MessageResponse)
async def delete_my_session(
    session_id: str,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: SessionRepository = Depends(get_session_repo),
):
    """Delete one of the caller's sessions."""
    try:
        session_service.delete_own(repo, current_user.id, session_id)
    except DomainError as e:
        _raise_http(e, "Failed to delete session")
    return MessageResponse(message="Session deleted successfully")
