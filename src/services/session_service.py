"""Session service: draft/publish workflow and listings.

API-side flows:
    save draft: load owned (or create) → overwrite fields → status draft → save
    publish:    validate title/url → load owned (or create) → status published → save

Records that are missing or owned by someone else are reported as NotFoundError
so existence never leaks to non-owners.
"""

import logging

from domain.model.errors import DomainError, NotFoundError
from domain.model.session import (
    SessionPage,
    SessionStatus,
    WellnessSession,
    check_publishable,
    normalize_tags,
)
from port.session_repository import SessionRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def parse_tag_filter(tags: str | None) -> list[str]:
    """Turn the CSV `tags` query parameter into a list of normalized tags."""
    if not tags:
        return []
    return normalize_tags(tags.split(','))


def list_published(
    repo: SessionRepository,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    tags: str | None = None,
    search: str | None = None,
) -> SessionPage:
    """List published sessions, newest update first."""
    search = search.strip() if search else None
    return repo.find_many(
        page=page,
        limit=limit,
        status=SessionStatus.PUBLISHED,
        tags=parse_tag_filter(tags) or None,
        search=search or None,
    )


def list_own(
    repo: SessionRepository,
    user_id: str,
    status: SessionStatus | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> SessionPage:
    """List the caller's own sessions, optionally narrowed by status."""
    return repo.find_many(page=page, limit=limit, status=status, user_id=user_id)


def get_own(repo: SessionRepository, user_id: str, session_id: str) -> WellnessSession:
    """Return an owned session.

    Raises:
        NotFoundError: missing or not owned by user_id
    """
    session = repo.get_owned(session_id, user_id)
    if not session:
        raise NotFoundError("Session not found")
    return session


def _load_or_create(repo: SessionRepository, user_id: str, session_id: str | None) -> WellnessSession:
    if session_id:
        return get_own(repo, user_id, session_id)
    return WellnessSession.create(user_id)


def _persist(repo: SessionRepository, session: WellnessSession) -> WellnessSession:
    if not repo.save(session):
        raise DomainError("Failed to save session to repository")
    return session


def save_draft(
    repo: SessionRepository,
    user_id: str,
    title: str | None,
    tags: list[str] | None,
    json_file_url: str | None,
    session_id: str | None = None,
) -> WellnessSession:
    """Create or update a draft. Drafts may have an empty title or URL.

    Saving a published session as a draft takes it out of the public listing.

    Raises:
        NotFoundError: session_id given but not owned by user_id
        ValidationError: title or tag length limits exceeded
    """
    session = _load_or_create(repo, user_id, session_id)
    session.save_as_draft(title or '', tags, json_file_url or '')
    _persist(repo, session)

    logger.info("Draft saved", extra={"sessionId": session.id, "userId": user_id})
    return session


def publish(
    repo: SessionRepository,
    user_id: str,
    title: str | None,
    tags: list[str] | None,
    json_file_url: str | None,
    session_id: str | None = None,
) -> WellnessSession:
    """Create or update a session and publish it.

    Validation happens before the store is touched.

    Raises:
        ValidationError: title missing, URL missing or not http(s)
        NotFoundError: session_id given but not owned by user_id
    """
    check_publishable(title, json_file_url)
    session = _load_or_create(repo, user_id, session_id)
    session.publish(title, tags, json_file_url)
    _persist(repo, session)

    logger.info("Session published", extra={"sessionId": session.id, "userId": user_id})
    return session


def delete_own(repo: SessionRepository, user_id: str, session_id: str) -> None:
    """Delete an owned session.

    Raises:
        NotFoundError: missing or not owned by user_id
    """
    if not repo.delete_owned(session_id, user_id):
        raise NotFoundError("Session not found")
    logger.info("Session deleted", extra={"sessionId": session_id, "userId": user_id})
