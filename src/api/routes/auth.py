"""Authentication routes (register, login, current user)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserResponse
from api.security import create_access_token, get_current_user_required, to_user_response
from domain.model.errors import DomainError, DuplicateError, ValidationError
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, repo: UserRepository = Depends(get_user_repo)):
    """Register a new user.

    Raises:
        HTTPException: 409 Conflict if email already exists, 400 Bad Request if validation fails
    """
    try:
        user = auth_service.register(repo, request.email, request.password)
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    token = create_access_token(user.id)
    return AuthResponse(token=token, user=to_user_response(user))


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, repo: UserRepository = Depends(get_user_repo)):
    """Login user and return JWT token.

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    try:
        user = auth_service.authenticate(repo, request.email, request.password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    token = create_access_token(user.id)
    logger.info("User logged in", extra={"userId": user.id})

    return AuthResponse(token=token, user=to_user_response(user))


@router.get("/me", response_model=MeResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return MeResponse(user=current_user)
