"""Port definition for SessionRepository."""

from typing import Protocol

from domain.model.session import SessionPage, SessionStatus, WellnessSession


class SessionRepository(Protocol):
    def save(self, session: WellnessSession) -> bool: ...

    def get_by_id(self, session_id: str) -> WellnessSession | None: ...

    def get_owned(self, session_id: str, user_id: str) -> WellnessSession | None: ...

    def find_many(
        self,
        page: int = 1,
        limit: int = 20,
        status: SessionStatus | None = None,
        user_id: str | None = None,
        tags: list[str] | None = None,
        search: str | None = None,
    ) -> SessionPage: ...

    def delete_owned(self, session_id: str, user_id: str) -> bool: ...
