"""Async HTTP client for the wellness sessions REST API.

Bearer token handling and error mapping live here so callers only deal with
decoded JSON or an ApiError subclass.
"""

import logging
from typing import Any, Callable

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from client.config import API_BASE_URL, API_TIMEOUT_SECONDS
from client.errors import ApiError, NetworkError, error_from_response

logger = logging.getLogger(__name__)

INVALID_RESPONSE_MESSAGE = "Invalid response from server"


def _session_record(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict) or not isinstance(data.get("session"), dict):
        raise ApiError(None, INVALID_RESPONSE_MESSAGE)
    return data["session"]


class WellnessApiClient:
    """Thin wrapper over httpx.AsyncClient, one method per endpoint.

    A 401 from any endpoint calls every handler registered with
    on_unauthorized before the AuthError is raised.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        self._token: str | None = None
        self._unauthorized_handlers: list[Callable[[], None]] = []

    async def __aenter__(self) -> "WellnessApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── auth plumbing ────────────────────────────────────────

    @property
    def token(self) -> str | None:
        return self._token

    def set_token(self, token: str | None) -> None:
        self._token = token

    def on_unauthorized(self, handler: Callable[[], None]) -> None:
        self._unauthorized_handlers.append(handler)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.RequestError as e:
            logger.warning(
                "API request failed",
                extra={"method": method, "path": path, "error_type": type(e).__name__},
            )
            raise NetworkError(str(e) or "Network error") from e

        if response.status_code == 401:
            for handler in list(self._unauthorized_handlers):
                handler()

        if response.is_error:
            error = error_from_response(response)
            logger.debug(
                "API error response",
                extra={"method": method, "path": path, "status_code": response.status_code},
            )
            raise error

        try:
            return response.json()
        except ValueError as e:
            logger.warning("API returned a non-JSON body", extra={"method": method, "path": path})
            raise ApiError(response.status_code, INVALID_RESPONSE_MESSAGE) from e

    @retry(
        retry=retry_if_exception_type(NetworkError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        reraise=True,
    )
    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET with retry on transport failures. Writes are never retried here."""
        return await self._request("GET", path, params=params)

    # ── auth endpoints ───────────────────────────────────────

    async def register(self, email: str, password: str) -> dict[str, Any]:
        return await self._request("POST", "/auth/register", json={"email": email, "password": password})

    async def login(self, email: str, password: str) -> dict[str, Any]:
        return await self._request("POST", "/auth/login", json={"email": email, "password": password})

    async def get_current_user(self) -> dict[str, Any]:
        return await self._get("/auth/me")

    # ── session endpoints ────────────────────────────────────

    async def get_public_sessions(
        self,
        page: int | None = None,
        limit: int | None = None,
        tags: list[str] | None = None,
        search: str | None = None,
    ) -> dict[str, Any]:
        params = {
            "page": page,
            "limit": limit,
            "tags": ",".join(tags) if tags else None,
            "search": search,
        }
        return await self._get("/sessions", params=params)

    async def get_user_sessions(
        self,
        status: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        return await self._get("/my-sessions", params={"status": status, "page": page, "limit": limit})

    async def get_session(self, session_id: str) -> dict[str, Any]:
        return await self._get(f"/my-sessions/{session_id}")

    async def save_draft(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Save payload as a draft and return the stored session record."""
        data = await self._request("POST", "/my-sessions/save-draft", json=payload)
        return _session_record(data)

    async def publish_session(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Publish payload and return the stored session record."""
        data = await self._request("POST", "/my-sessions/publish", json=payload)
        return _session_record(data)

    async def delete_session(self, session_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/my-sessions/{session_id}")

    async def health_check(self) -> dict[str, Any]:
        return await self._request("GET", "/health")
