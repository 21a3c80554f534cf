"""MongoDB implementation of SessionRepository."""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import SESSIONS_COLLECTION_NAME
from domain.model.session import SessionPage, SessionStatus, WellnessSession

logger = getLogger(__name__)


class MongoSessionRepository:
    def __init__(self, db: Database):
        self.collection = db[SESSIONS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for sessions collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('user_id', 1), ('status', 1)], 'idx_user_status')
            create_index_safe(self.collection, [('status', 1), ('updated_at', -1)], 'idx_status_updated_at')
            create_index_safe(self.collection, [('tags', 1), ('status', 1)], 'idx_tags_status')
            create_index_safe(self.collection, [('title', 'text'), ('tags', 'text')], 'idx_text_search')
            return True
        except Exception as e:
            logger.error("Failed to create sessions indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> WellnessSession:
        """Convert MongoDB document to WellnessSession domain model."""
        return WellnessSession(
            id=doc['_id'],
            user_id=doc['user_id'],
            title=doc.get('title', ''),
            tags=list(doc.get('tags', [])),
            json_file_url=doc.get('json_file_url', ''),
            status=SessionStatus(doc['status']),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
        )

    # ── write operations ─────────────────────────────────────

    def save(self, session: WellnessSession) -> bool:
        """Save entire session (upsert). Owner and created_at are only set on insert."""
        try:
            doc = {
                'title': session.title,
                'tags': session.tags,
                'json_file_url': session.json_file_url,
                'status': session.status.value,
                'updated_at': session.updated_at,
            }

            self.collection.update_one(
                {'_id': session.id},
                {
                    '$set': doc,
                    '$setOnInsert': {
                        '_id': session.id,
                        'user_id': session.user_id,
                        'created_at': session.created_at,
                    },
                },
                upsert=True,
            )

            logger.info("Session saved", extra={"sessionId": session.id, "status": session.status.value})
            return True
        except PyMongoError as e:
            logger.error("Failed to save session", extra={"sessionId": session.id, "error": str(e)})
            return False

    def delete_owned(self, session_id: str, user_id: str) -> bool:
        """Hard delete a session if user_id owns it."""
        try:
            result = self.collection.delete_one({'_id': session_id, 'user_id': user_id})

            if result.deleted_count == 0:
                logger.warning("Session not found for deletion", extra={"sessionId": session_id, "userId": user_id})
                return False

            logger.info("Session deleted", extra={"sessionId": session_id, "userId": user_id})
            return True
        except PyMongoError as e:
            logger.error("Failed to delete session", extra={"sessionId": session_id, "error": str(e)})
            return False

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, session_id: str) -> WellnessSession | None:
        """Retrieve session by ID."""
        try:
            doc = self.collection.find_one({'_id': session_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to retrieve session", extra={"sessionId": session_id, "error": str(e)})
            return None

    def get_owned(self, session_id: str, user_id: str) -> WellnessSession | None:
        """Retrieve session by ID only if user_id owns it."""
        try:
            doc = self.collection.find_one({'_id': session_id, 'user_id': user_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to retrieve session", extra={"sessionId": session_id, "error": str(e)})
            return None

    def find_many(
        self,
        page: int = 1,
        limit: int = 20,
        status: SessionStatus | None = None,
        user_id: str | None = None,
        tags: list[str] | None = None,
        search: str | None = None,
    ) -> SessionPage:
        """List sessions with filtering, sorting, and pagination."""
        try:
            query: dict = {}
            if status:
                query['status'] = status.value
            if user_id:
                query['user_id'] = user_id
            if tags:
                query['tags'] = {'$in': tags}
            if search:
                query['$text'] = {'$search': search}

            total_count = self.collection.count_documents(query)
            docs = (
                self.collection.find(query)
                .sort('updated_at', -1)
                .skip((page - 1) * limit)
                .limit(limit)
            )

            sessions = [self._to_domain(doc) for doc in docs]
            logger.info("Listed sessions", extra={"count": len(sessions), "total": total_count})
            return SessionPage(items=sessions, total=total_count, page=page, limit=limit)
        except PyMongoError as e:
            logger.error("Failed to list sessions", extra={"error": str(e)})
            return SessionPage(items=[], total=0, page=page, limit=limit)
