# domain/model/session.py

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from urllib.parse import urlparse

from domain.model.errors import ValidationError

TITLE_MAX_LENGTH = 200
TAG_MAX_LENGTH = 50

TITLE_REQUIRED_MESSAGE = "Title is required for publishing"
URL_REQUIRED_MESSAGE = "JSON file URL is required for publishing"
URL_INVALID_MESSAGE = "Please enter a valid URL (must start with http:// or https://)"


class SessionStatus(str, Enum):
    """Lifecycle status of a wellness session."""
    DRAFT = 'draft'
    PUBLISHED = 'published'


# ── Field rules ──────────────────────────────────────────


def normalize_title(title: str | None) -> str:
    """Trim a title and enforce the length limit."""
    title = (title or '').strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title cannot exceed {TITLE_MAX_LENGTH} characters", field='title')
    return title


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Trim and lowercase tags, dropping blanks.

    Order is preserved and duplicates are kept.
    """
    result = []
    for tag in tags or []:
        tag = tag.strip().lower()
        if not tag:
            continue
        if len(tag) > TAG_MAX_LENGTH:
            raise ValidationError(f"Tag cannot exceed {TAG_MAX_LENGTH} characters", field='tags')
        result.append(tag)
    return result


def parse_tag_input(text: str) -> list[str]:
    """Split comma-separated tag input ("Yoga, Calm") into normalized tags."""
    return [tag.strip().lower() for tag in text.split(',') if tag.strip()]


def is_valid_url(url: str | None) -> bool:
    """True for absolute http(s) URLs with a host."""
    if not url:
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def check_publishable(title: str | None, json_file_url: str | None) -> None:
    """Raise ValidationError naming the first field that blocks publishing."""
    if not (title or '').strip():
        raise ValidationError(TITLE_REQUIRED_MESSAGE, field='title')
    if not (json_file_url or '').strip():
        raise ValidationError(URL_REQUIRED_MESSAGE, field='json_file_url')
    if not is_valid_url(json_file_url):
        raise ValidationError(URL_INVALID_MESSAGE, field='json_file_url')


# ── Session Domain Model ─────────────────────────────────


@dataclass
class WellnessSession:
    """Domain model representing a wellness session record."""
    id: str
    user_id: str
    title: str
    status: SessionStatus
    created_at: datetime
    updated_at: datetime
    json_file_url: str = ''
    tags: list[str] = field(default_factory=list)

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(user_id: str, title: str = '', tags: list[str] | None = None,
               json_file_url: str = '') -> 'WellnessSession':
        """Create a new draft owned by user_id."""
        now = datetime.now(timezone.utc)
        return WellnessSession(
            id=uuid.uuid4().hex,
            user_id=user_id,
            title=normalize_title(title),
            tags=normalize_tags(tags),
            json_file_url=(json_file_url or '').strip(),
            status=SessionStatus.DRAFT,
            created_at=now,
            updated_at=now,
        )

    # ── queries ───────────────────────────────────────────

    @property
    def is_published(self) -> bool:
        return self.status == SessionStatus.PUBLISHED

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    # ── state transitions ─────────────────────────────────

    def save_as_draft(self, title: str, tags: list[str] | None, json_file_url: str) -> None:
        """Overwrite the editable fields and (re)enter draft status."""
        self.title = normalize_title(title)
        self.tags = normalize_tags(tags)
        self.json_file_url = (json_file_url or '').strip()
        self.status = SessionStatus.DRAFT
        self.updated_at = datetime.now(timezone.utc)

    def publish(self, title: str, tags: list[str] | None, json_file_url: str) -> None:
        """Overwrite the editable fields and publish.

        Raises ValidationError if title or URL would break the published invariant.
        """
        check_publishable(title, json_file_url)
        self.title = normalize_title(title)
        self.tags = normalize_tags(tags)
        self.json_file_url = json_file_url.strip()
        self.status = SessionStatus.PUBLISHED
        self.updated_at = datetime.now(timezone.utc)


# ── Paginated results ────────────────────────────────────


@dataclass
class SessionPage:
    """One page of sessions plus pagination metadata."""
    items: list[WellnessSession]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next_page(self) -> bool:
        return self.page * self.limit < self.total
