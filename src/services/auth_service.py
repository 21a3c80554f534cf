"""Auth service: registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

import bcrypt

from domain.model.errors import DomainError, DuplicateError, ValidationError
from domain.model.user import User, normalize_email
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
PASSWORD_MIN_LENGTH = 6


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _validate_password(password: str) -> None:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters", field="password"
        )


def register(repo: UserRepository, email: str, password: str) -> User:
    """Register a new user.

    Returns the created User domain object.

    Raises:
        DuplicateError: email already registered (case-insensitive)
        ValidationError: password too short
    """
    email = normalize_email(email)
    if repo.get_by_email(email):
        raise DuplicateError("Email already registered")

    _validate_password(password)
    password_hash = _hash_password(password)

    user = repo.create(email=email, password_hash=password_hash)
    if not user:
        raise DomainError("Failed to create user")

    logger.info("User registered", extra={"userId": user.id})
    return user


def authenticate(repo: UserRepository, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Doesn't reveal whether the email exists.

    Raises:
        ValidationError: invalid credentials (deliberately vague)
    """
    user = repo.get_by_email(email)
    if not user or not _verify_password(password, user.password_hash):
        raise ValidationError("Invalid email or password")

    # Login succeeds even if the timestamp update fails
    repo.update_last_login(user.id)
    return user
