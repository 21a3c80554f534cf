"""In-memory implementation of SessionRepository for testing."""

import copy

from domain.model.session import SessionPage, SessionStatus, WellnessSession


class FakeSessionRepository:
    def __init__(self):
        self.store: dict[str, WellnessSession] = {}

    # ── write operations ─────────────────────────────────────

    def save(self, session: WellnessSession) -> bool:
        existing = self.store.get(session.id)
        stored = copy.deepcopy(session)
        if existing:
            # owner and creation time are fixed at insert
            stored.user_id = existing.user_id
            stored.created_at = existing.created_at
        self.store[session.id] = stored
        return True

    def delete_owned(self, session_id: str, user_id: str) -> bool:
        session = self.store.get(session_id)
        if not session or not session.is_owned_by(user_id):
            return False
        del self.store[session_id]
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, session_id: str) -> WellnessSession | None:
        session = self.store.get(session_id)
        return copy.deepcopy(session) if session else None

    def get_owned(self, session_id: str, user_id: str) -> WellnessSession | None:
        session = self.store.get(session_id)
        if not session or not session.is_owned_by(user_id):
            return None
        return copy.deepcopy(session)

    def find_many(
        self,
        page: int = 1,
        limit: int = 20,
        status: SessionStatus | None = None,
        user_id: str | None = None,
        tags: list[str] | None = None,
        search: str | None = None,
    ) -> SessionPage:
        results = list(self.store.values())

        if status:
            results = [s for s in results if s.status == status]
        if user_id:
            results = [s for s in results if s.user_id == user_id]
        if tags:
            results = [s for s in results if set(s.tags) & set(tags)]
        if search:
            needle = search.lower()
            results = [
                s for s in results
                if needle in s.title.lower() or any(needle in t for t in s.tags)
            ]

        results.sort(key=lambda s: s.updated_at, reverse=True)
        skip = (page - 1) * limit
        items = [copy.deepcopy(s) for s in results[skip:skip + limit]]
        return SessionPage(items=items, total=len(results), page=page, limit=limit)
