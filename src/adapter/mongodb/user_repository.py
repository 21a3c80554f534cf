"""MongoDB implementation of UserRepository.

Documents are keyed by a uuid hex `_id`; emails are stored normalized and
guarded by a unique index, so duplicate registrations surface as
DuplicateKeyError on insert.
"""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.user import User, normalize_email

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Unique index on the normalized email."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    @staticmethod
    def _to_domain(doc: dict) -> User:
        return User(
            id=doc['_id'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            last_login=doc.get('last_login'),
            password_hash=doc.get('password_hash'),
        )

    def _find_one(self, query: dict) -> User | None:
        try:
            doc = self.collection.find_one(query)
        except PyMongoError as e:
            logger.error("User lookup failed", extra={"query": list(query), "error": str(e)})
            return None
        return self._to_domain(doc) if doc else None

    # ── writes ───────────────────────────────────────────────

    def create(self, email: str, password_hash: str) -> User | None:
        """Insert a user. Returns None on duplicate email or database error."""
        now = datetime.now(timezone.utc)
        doc = {
            '_id': uuid.uuid4().hex,
            'email': normalize_email(email),
            'password_hash': password_hash,
            'created_at': now,
            'updated_at': now,
            'last_login': None,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("Email already registered", extra={"email": doc['email']})
            return None
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": doc['email'], "error": str(e)})
            return None

        logger.info("User created", extra={"userId": doc['_id']})
        return self._to_domain(doc)

    def update_last_login(self, user_id: str) -> bool:
        now = datetime.now(timezone.utc)
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now, 'updated_at': now}}
            )
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False
        return result.modified_count > 0

    # ── reads ────────────────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        return self._find_one({'email': normalize_email(email)})

    def get_by_id(self, user_id: str) -> User | None:
        return self._find_one({'_id': user_id})
