"""Port definition for persisted client credentials."""

from typing import Any, Protocol

from client.storage import StoredCredentials


class CredentialStorage(Protocol):
    def load(self) -> StoredCredentials | None: ...

    def save(self, token: str, user: dict[str, Any]) -> None: ...

    def clear(self) -> None: ...
