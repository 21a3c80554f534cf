"""Unit tests for FakeSessionRepository: verifies Port contract compliance."""

import unittest
from datetime import datetime, timedelta, timezone

from adapter.fake.session_repository import FakeSessionRepository
from domain.model.session import SessionStatus, WellnessSession


class TestFakeSessionRepository(unittest.TestCase):
    """Tests that FakeSessionRepository correctly implements SessionRepository Protocol."""

    def setUp(self):
        self.repo = FakeSessionRepository()

    def _make(self, user_id='user-1', title='Calm', tags=None, published=False, age_minutes=0):
        session = WellnessSession.create(user_id, title=title, tags=tags or [])
        if published:
            session.publish(title, tags or [], 'https://example.com/a.json')
        session.updated_at = datetime.now(timezone.utc) - timedelta(minutes=age_minutes)
        self.repo.save(session)
        return session

    # ── save + get (round-trip) ───────────────────────────────

    def test_save_and_get_by_id(self):
        session = self._make(tags=['yoga'])
        stored = self.repo.get_by_id(session.id)
        self.assertEqual(stored.title, 'Calm')
        self.assertEqual(stored.tags, ['yoga'])
        self.assertEqual(stored.status, SessionStatus.DRAFT)

    def test_returned_objects_are_copies(self):
        session = self._make()
        stored = self.repo.get_by_id(session.id)
        stored.title = 'changed'
        self.assertEqual(self.repo.get_by_id(session.id).title, 'Calm')

    def test_save_keeps_original_owner(self):
        session = self._make(user_id='owner')
        session.user_id = 'intruder'
        self.repo.save(session)
        self.assertEqual(self.repo.get_by_id(session.id).user_id, 'owner')

    # ── ownership ─────────────────────────────────────────────

    def test_get_owned_hides_other_users_sessions(self):
        session = self._make(user_id='owner')
        self.assertIsNotNone(self.repo.get_owned(session.id, 'owner'))
        self.assertIsNone(self.repo.get_owned(session.id, 'someone-else'))

    def test_delete_owned(self):
        session = self._make(user_id='owner')
        self.assertFalse(self.repo.delete_owned(session.id, 'someone-else'))
        self.assertTrue(self.repo.delete_owned(session.id, 'owner'))
        self.assertIsNone(self.repo.get_by_id(session.id))
        self.assertFalse(self.repo.delete_owned(session.id, 'owner'))

    # ── find_many ─────────────────────────────────────────────

    def test_find_many_sorts_by_updated_at_desc(self):
        old = self._make(title='old', age_minutes=10)
        new = self._make(title='new', age_minutes=1)
        page = self.repo.find_many()
        self.assertEqual([s.id for s in page.items], [new.id, old.id])

    def test_find_many_filters(self):
        self._make(user_id='a', title='Morning Yoga', tags=['yoga'], published=True)
        self._make(user_id='a', title='Evening Calm', tags=['calm'])
        self._make(user_id='b', title='Deep Sleep', tags=['sleep'], published=True)

        self.assertEqual(self.repo.find_many(status=SessionStatus.PUBLISHED).total, 2)
        self.assertEqual(self.repo.find_many(user_id='a').total, 2)
        self.assertEqual(self.repo.find_many(tags=['calm', 'sleep']).total, 2)
        self.assertEqual(self.repo.find_many(search='yoga').items[0].title, 'Morning Yoga')

    def test_find_many_paginates(self):
        for i in range(5):
            self._make(title=f's{i}', age_minutes=i)
        page = self.repo.find_many(page=2, limit=2)
        self.assertEqual([s.title for s in page.items], ['s2', 's3'])
        self.assertEqual(page.total, 5)
        self.assertTrue(page.has_next_page)


if __name__ == '__main__':
    unittest.main()
