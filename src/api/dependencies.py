from fastapi import HTTPException

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.session_repository import MongoSessionRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.session_repository import SessionRepository
from port.user_repository import UserRepository


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_session_repo() -> SessionRepository:
    return MongoSessionRepository(_get_db())
