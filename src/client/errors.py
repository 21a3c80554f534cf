"""Client-side API errors.

Every failure from WellnessApiClient is an ApiError; the subclass tells the
caller how to react (re-login, show "not found", fix a field, retry later).
"""

import httpx

DEFAULT_ERROR_MESSAGE = "An error occurred"


class ApiError(Exception):
    """Request failed. `message` is the server's detail when it sent one."""

    def __init__(self, status_code: int | None, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class AuthError(ApiError):
    """Token missing, expired or invalid (401)."""


class NotFoundApiError(ApiError):
    """Record missing or not owned by the caller (404)."""


class ValidationApiError(ApiError):
    """Server rejected the input (400/409/422)."""


class NetworkError(ApiError):
    """Transport-level failure; no HTTP response was received."""

    def __init__(self, message: str):
        super().__init__(None, message)


def _extract_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR_MESSAGE
    if not isinstance(body, dict):
        return DEFAULT_ERROR_MESSAGE

    detail = body.get("detail") or body.get("error")
    if isinstance(detail, str):
        return detail
    # FastAPI request validation errors: list of {"msg": ...}
    if isinstance(detail, list) and detail:
        return ", ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
    return DEFAULT_ERROR_MESSAGE


def error_from_response(response: httpx.Response) -> ApiError:
    """Build the ApiError subclass matching an error response."""
    message = _extract_message(response)
    status_code = response.status_code
    if status_code == 401:
        return AuthError(status_code, message)
    if status_code == 404:
        return NotFoundApiError(status_code, message)
    if status_code in (400, 409, 422):
        return ValidationApiError(status_code, message)
    return ApiError(status_code, message)
