"""Persistent storage for the client's token and user.

The file-backed store plays the role a browser's localStorage plays for a web
client: it survives restarts so AuthSession.init_from_storage can resume.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from client.config import CREDENTIALS_PATH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredCredentials:
    token: str
    user: dict[str, Any]


class FileCredentialStorage:
    def __init__(self, path: Path = CREDENTIALS_PATH):
        self.path = Path(path)

    def load(self) -> StoredCredentials | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return StoredCredentials(token=data["token"], user=data["user"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable credentials file", extra={"path": str(self.path), "error": str(e)})
            return None

    def save(self, token: str, user: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token, "user": user}), encoding="utf-8")
        os.chmod(self.path, 0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryCredentialStorage:
    def __init__(self, credentials: StoredCredentials | None = None):
        self.credentials = credentials

    def load(self) -> StoredCredentials | None:
        return self.credentials

    def save(self, token: str, user: dict[str, Any]) -> None:
        self.credentials = StoredCredentials(token=token, user=user)

    def clear(self) -> None:
        self.credentials = None
