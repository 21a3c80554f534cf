"""JWT authentication and security dependencies."""

import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt

from api.dependencies import get_user_repo
from api.models import UserResponse
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

# JWT Configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY environment variable is required. "
        "Generate a secure key with: openssl rand -hex 32"
    )
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = 7

security = HTTPBearer(auto_error=False)


def to_user_response(user: User) -> UserResponse:
    """Convert domain User to API UserResponse."""
    return UserResponse(
        id=user.id,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
        last_login=user.last_login,
    )


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token for user."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=JWT_EXPIRATION_DAYS))
    payload = {
        "sub": user_id,
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def _decode_subject(token: str) -> Optional[str]:
    """Decode token and return its subject. Lets JWTError (incl. expiry) propagate."""
    payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    return payload.get("sub")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_repo: UserRepository = Depends(get_user_repo),
) -> UserResponse:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    try:
        user_id = _decode_subject(credentials.credentials)
    except ExpiredSignatureError:
        raise _unauthorized("Token expired. Please login again.")
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        user_id = None

    if not user_id:
        raise _unauthorized("Invalid authentication credentials")

    user = user_repo.get_by_id(user_id)
    if not user:
        raise _unauthorized("User not found")

    return to_user_response(user)
