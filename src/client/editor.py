"""Session editor: local edit buffer with debounced auto-save and gated publish.

States (derived from the `dirty` and `saving` flags):

    CLEAN  --edit-->            DIRTY   (delay restarted on every edit)
    DIRTY  --delay elapsed-->   SAVING  (skipped while the buffer is empty)
    any    --save_draft()-->    SAVING  (immediate, even when empty)
    SAVING --success-->         CLEAN   (DIRTY again if edited mid-flight)
    SAVING --failure-->         DIRTY

Only one persist runs at a time; requests made while saving are skipped.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable

from client.config import AUTO_SAVE_DELAY_SECONDS
from client.debounce import DelayedTask
from client.errors import ApiError
from client.notifier import LoggingNotifier
from domain.model.errors import ValidationError
from domain.model.session import SessionStatus, check_publishable, is_valid_url, parse_tag_input
from port.notifier import Notifier
from port.session_gateway import SessionGateway

logger = logging.getLogger(__name__)


class EditorState(str, Enum):
    CLEAN = 'clean'
    DIRTY = 'dirty'
    SAVING = 'saving'


class SaveOutcome(str, Enum):
    SAVED = 'saved'
    SKIPPED = 'skipped'
    FAILED = 'failed'


class PublishRejectedError(Exception):
    """Publish refused locally; nothing was sent to the server."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(reason)


@dataclass
class EditorBuffer:
    """The in-progress copy of one session record."""
    id: str | None = None
    title: str = ''
    tags: list[str] = field(default_factory=list)
    json_file_url: str = ''
    status: str = SessionStatus.DRAFT.value

    @property
    def is_empty(self) -> bool:
        return not self.title.strip() and not self.json_file_url.strip() and not self.tags

    def to_payload(self) -> dict[str, Any]:
        payload = {
            'title': self.title,
            'tags': list(self.tags),
            'json_file_url': self.json_file_url,
        }
        if self.id:
            payload['id'] = self.id
        return payload

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> 'EditorBuffer':
        return cls(
            id=record.get('id'),
            title=record.get('title') or '',
            tags=list(record.get('tags') or []),
            json_file_url=record.get('json_file_url') or '',
            status=record.get('status') or SessionStatus.DRAFT.value,
        )


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    return None


class SessionEditor:
    def __init__(
        self,
        gateway: SessionGateway,
        notifier: Notifier | None = None,
        auto_save_delay: float = AUTO_SAVE_DELAY_SECONDS,
        clock: Callable[[], datetime] | None = None,
    ):
        self.gateway = gateway
        self.notifier = notifier or LoggingNotifier()
        self.auto_save_delay = auto_save_delay
        self._clock = clock or (lambda: datetime.now(timezone.utc))

        self.buffer = EditorBuffer()
        self.dirty = False
        self.saving = False
        self.last_saved_at: datetime | None = None
        self.tag_input = ''

        self._timer = DelayedTask()
        # Bumped on every edit so a save can tell whether it captured the latest buffer
        self._revision = 0

    # ── queries ───────────────────────────────────────────

    @property
    def state(self) -> EditorState:
        if self.saving:
            return EditorState.SAVING
        return EditorState.DIRTY if self.dirty else EditorState.CLEAN

    @property
    def auto_save_pending(self) -> bool:
        return self._timer.pending

    @property
    def can_publish(self) -> bool:
        return not self.saving and bool(self.buffer.title.strip()) and bool(self.buffer.json_file_url.strip())

    def publish_requirements(self) -> dict[str, bool]:
        """Checklist shown next to the publish button."""
        url = self.buffer.json_file_url
        return {
            'title': bool(self.buffer.title.strip()),
            'json_file_url': bool(url.strip()) and is_valid_url(url),
        }

    @property
    def status_text(self) -> str:
        if self.saving:
            return "Saving..."
        if self.dirty and not self.buffer.is_empty:
            return f"Auto-save in {self.auto_save_delay:g}s..."
        if self.last_saved_at:
            return f"Saved at {self.last_saved_at.astimezone().strftime('%H:%M:%S')}"
        return ''

    # ── loading ───────────────────────────────────────────

    async def load(self, session_id: str) -> None:
        """Replace the buffer with a stored session. Raises ApiError on failure.

        A save still in flight for the previous buffer finishes against that
        buffer and leaves the loaded one untouched.
        """
        try:
            record = await self.gateway.get_session(session_id)
        except ApiError as e:
            self.notifier.notify('error', 'Failed to load session')
            logger.warning("Failed to load session", extra={"sessionId": session_id, "error": e.message})
            raise

        self._timer.cancel()
        self.buffer = EditorBuffer.from_record(record)
        self.tag_input = ', '.join(self.buffer.tags)
        self.last_saved_at = _parse_timestamp(record.get('updated_at'))
        self.dirty = False

    # ── edits ─────────────────────────────────────────────

    def set_title(self, title: str) -> None:
        self.buffer.title = title
        self._edited()

    def set_json_file_url(self, url: str) -> None:
        self.buffer.json_file_url = url
        self._edited()

    def set_tags(self, tags: list[str]) -> None:
        self.buffer.tags = list(tags)
        self.tag_input = ', '.join(self.buffer.tags)
        self._edited()

    def set_tag_input(self, text: str) -> None:
        """Raw comma-separated input; tags are lowercased and blanks dropped."""
        self.tag_input = text
        self.buffer.tags = parse_tag_input(text)
        self._edited()

    def remove_tag(self, index: int) -> None:
        self.buffer.tags = [t for i, t in enumerate(self.buffer.tags) if i != index]
        self.tag_input = ', '.join(self.buffer.tags)
        self._edited()

    def _edited(self) -> None:
        self._revision += 1
        self.dirty = True
        self._timer.schedule(self.auto_save_delay, self._auto_save)

    # ── persistence ───────────────────────────────────────

    async def _auto_save(self) -> SaveOutcome:
        if not self.dirty or self.saving:
            return SaveOutcome.SKIPPED
        if self.buffer.is_empty:
            logger.debug("Auto-save skipped for empty buffer")
            return SaveOutcome.SKIPPED
        return await self._persist_draft(automatic=True)

    async def save_draft(self) -> SaveOutcome:
        """Persist now as a draft, bypassing the delay and the empty-buffer guard."""
        if self.saving:
            logger.debug("Save ignored, another save is in flight", extra={"sessionId": self.buffer.id})
            return SaveOutcome.SKIPPED
        self._timer.cancel()
        return await self._persist_draft(automatic=False)

    async def _send(self, send: Callable[[dict[str, Any]], Awaitable[dict[str, Any]]],
                    buffer: EditorBuffer) -> dict[str, Any]:
        self.saving = True
        try:
            return await send(buffer.to_payload())
        finally:
            self.saving = False

    async def _persist_draft(self, automatic: bool) -> SaveOutcome:
        buffer, revision = self.buffer, self._revision
        try:
            record = await self._send(self.gateway.save_draft, buffer)
        except ApiError as e:
            logger.warning(
                "Draft save failed",
                extra={"sessionId": buffer.id, "automatic": automatic, "error": e.message},
            )
            self.notifier.notify('error', 'Auto-save failed' if automatic else e.message or 'Failed to save draft')
            self._rearm_if_edited_since(revision)
            return SaveOutcome.FAILED

        self._settle(buffer, revision, record, SessionStatus.DRAFT)
        logger.info("Draft saved", extra={"sessionId": buffer.id, "automatic": automatic})
        self.notifier.notify('success', 'Auto-saved' if automatic else 'Draft saved successfully!')
        return SaveOutcome.SAVED

    async def publish(self) -> SaveOutcome:
        """Validate locally, then persist with status published.

        Raises PublishRejectedError (before any network call) when the title is
        blank or the URL is blank or not http(s).
        """
        try:
            check_publishable(self.buffer.title, self.buffer.json_file_url)
        except ValidationError as e:
            self.notifier.notify('error', str(e))
            raise PublishRejectedError(e.field, str(e)) from e

        if self.saving:
            logger.debug("Publish ignored, another save is in flight", extra={"sessionId": self.buffer.id})
            return SaveOutcome.SKIPPED

        self._timer.cancel()
        buffer, revision = self.buffer, self._revision
        try:
            record = await self._send(self.gateway.publish_session, buffer)
        except ApiError as e:
            logger.warning("Publish failed", extra={"sessionId": buffer.id, "error": e.message})
            self.notifier.notify('error', e.message or 'Failed to publish session')
            self._rearm_if_edited_since(revision)
            return SaveOutcome.FAILED

        self._settle(buffer, revision, record, SessionStatus.PUBLISHED)
        logger.info("Session published", extra={"sessionId": buffer.id})
        self.notifier.notify('success', 'Session published successfully!')
        return SaveOutcome.SAVED

    def _settle(self, buffer: EditorBuffer, revision: int, record: dict[str, Any],
                status: SessionStatus) -> None:
        """Apply a successful persist to the buffer it was taken from."""
        if not buffer.id and record.get('id'):
            buffer.id = record['id']
        buffer.status = status.value
        if buffer is not self.buffer:
            # another session was loaded while this one was in flight
            return

        self.last_saved_at = self._clock()
        if self._revision == revision:
            self.dirty = False
        else:
            self._rearm_if_edited_since(revision)

    def _rearm_if_edited_since(self, revision: int) -> None:
        if self._revision != revision and not self._timer.pending:
            self._timer.schedule(self.auto_save_delay, self._auto_save)

    # ── teardown ──────────────────────────────────────────

    async def wait_for_saves(self) -> None:
        """Wait for auto-saves that have already started."""
        await self._timer.wait_running()

    def close(self) -> bool:
        """Stop auto-saving. Returns True (and warns) if there are unsaved changes.

        A save that is already in flight keeps running.
        """
        self._timer.cancel()
        if self.dirty:
            self.notifier.notify('warning', 'You have unsaved changes')
        return self.dirty
