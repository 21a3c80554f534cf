"""Port definition for the editor's persistence collaborator.

The editor talks to the REST API through this interface; tests swap in
an in-memory fake.
"""

from typing import Any, Protocol


class SessionGateway(Protocol):
    async def get_session(self, session_id: str) -> dict[str, Any]: ...

    async def save_draft(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Persist payload as a draft. Return the stored session record."""
        ...

    async def publish_session(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Persist payload as published. Return the stored session record."""
        ...
