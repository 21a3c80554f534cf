"""Client-side authentication state.

An AuthSession is created explicitly and handed to whatever needs the current
user; there is no process-wide auth state.

Lifecycle:
    session = AuthSession(api, storage)
    await session.init_from_storage()   # resume a stored login if still valid
    await session.login(email, password)
    session.teardown()                  # logout, or automatically on any 401
"""

import logging
from typing import Any

from client.api_client import WellnessApiClient
from client.errors import ApiError
from port.credential_storage import CredentialStorage

logger = logging.getLogger(__name__)


class AuthSession:
    def __init__(self, api: WellnessApiClient, storage: CredentialStorage):
        self.api = api
        self.storage = storage
        self.token: str | None = None
        self.user: dict[str, Any] | None = None
        api.on_unauthorized(self.teardown)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    async def init_from_storage(self) -> bool:
        """Restore a stored login after checking it against /auth/me.

        Returns True when a valid session was restored. An invalid or expired
        token is cleared from storage.
        """
        stored = self.storage.load()
        if not stored:
            return False

        self.api.set_token(stored.token)
        try:
            data = await self.api.get_current_user()
        except ApiError as e:
            logger.warning("Stored token validation failed", extra={"error": e.message})
            self.teardown()
            return False

        self.token = stored.token
        self.user = data["user"]
        return True

    async def login(self, email: str, password: str) -> dict[str, Any]:
        data = await self.api.login(email, password)
        self._establish(data["token"], data["user"])
        logger.info("Logged in", extra={"userId": self.user.get("id")})
        return self.user

    async def register(self, email: str, password: str) -> dict[str, Any]:
        data = await self.api.register(email, password)
        self._establish(data["token"], data["user"])
        logger.info("Registered", extra={"userId": self.user.get("id")})
        return self.user

    def _establish(self, token: str, user: dict[str, Any]) -> None:
        self.token = token
        self.user = user
        self.storage.save(token, user)
        self.api.set_token(token)

    def teardown(self) -> None:
        """Forget the token and user everywhere. Safe to call repeatedly."""
        if self.token is not None:
            logger.info("Auth session torn down", extra={"userId": (self.user or {}).get("id")})
        self.token = None
        self.user = None
        self.storage.clear()
        self.api.set_token(None)

    logout = teardown
