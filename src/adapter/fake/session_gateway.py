"""In-memory implementation of SessionGateway for editor tests."""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Any

from client.errors import NotFoundApiError


class FakeSessionGateway:
    """Records every persist call; can be told to fail or to stall."""

    def __init__(self, delay: float = 0.0):
        self.records: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.delay = delay
        self.fail_with: Exception | None = None

    async def _persist(self, kind: str, payload: dict[str, Any], status: str) -> dict[str, Any]:
        self.calls.append((kind, dict(payload)))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with

        session_id = payload.get('id') or uuid.uuid4().hex
        record = {
            'id': session_id,
            'title': payload.get('title', ''),
            'tags': list(payload.get('tags', [])),
            'json_file_url': payload.get('json_file_url', ''),
            'status': status,
            'updated_at': datetime.now(timezone.utc).isoformat(),
        }
        self.records[session_id] = record
        return dict(record)

    async def get_session(self, session_id: str) -> dict[str, Any]:
        if session_id not in self.records:
            raise NotFoundApiError(404, "Session not found")
        return dict(self.records[session_id])

    async def save_draft(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._persist('save_draft', payload, 'draft')

    async def publish_session(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._persist('publish', payload, 'published')
