"""Unit tests for session_service module."""

import unittest
from unittest.mock import MagicMock

from adapter.fake.session_repository import FakeSessionRepository
from domain.model.errors import DomainError, NotFoundError, ValidationError
from domain.model.session import SessionStatus
from services import session_service

URL = 'https://example.com/data/flow.json'


class TestSaveDraft(unittest.TestCase):

    def setUp(self):
        self.repo = FakeSessionRepository()

    def test_first_save_allocates_identity(self):
        session = session_service.save_draft(self.repo, 'user-1', 'Morning Flow', ['Yoga'], URL)

        self.assertIsNotNone(session.id)
        stored = self.repo.get_owned(session.id, 'user-1')
        self.assertEqual(stored.title, 'Morning Flow')
        self.assertEqual(stored.tags, ['yoga'])
        self.assertEqual(stored.status, SessionStatus.DRAFT)

    def test_save_with_id_updates_same_record(self):
        first = session_service.save_draft(self.repo, 'user-1', 'v1', [], '')
        second = session_service.save_draft(self.repo, 'user-1', 'v2', [], '', session_id=first.id)

        self.assertEqual(first.id, second.id)
        self.assertEqual(len(self.repo.store), 1)
        self.assertEqual(self.repo.get_by_id(first.id).title, 'v2')

    def test_draft_allows_empty_fields(self):
        session = session_service.save_draft(self.repo, 'user-1', None, None, None)
        self.assertEqual(session.title, '')
        self.assertEqual(session.json_file_url, '')

    def test_other_users_session_is_not_found(self):
        session = session_service.save_draft(self.repo, 'owner', 'Mine', [], '')
        with self.assertRaises(NotFoundError):
            session_service.save_draft(self.repo, 'intruder', 'Hijack', [], '', session_id=session.id)
        self.assertEqual(self.repo.get_by_id(session.id).title, 'Mine')

    def test_repository_failure_raises_domain_error(self):
        repo = MagicMock()
        repo.save.return_value = False
        with self.assertRaises(DomainError):
            session_service.save_draft(repo, 'user-1', 'x', [], '')


class TestPublish(unittest.TestCase):

    def setUp(self):
        self.repo = FakeSessionRepository()

    def test_publish_new_session(self):
        session = session_service.publish(self.repo, 'user-1', ' Morning Flow ', ['calm'], URL)
        self.assertEqual(self.repo.get_by_id(session.id).status, SessionStatus.PUBLISHED)
        self.assertEqual(self.repo.get_by_id(session.id).title, 'Morning Flow')

    def test_publish_existing_draft(self):
        draft = session_service.save_draft(self.repo, 'user-1', 'Flow', [], URL)
        published = session_service.publish(self.repo, 'user-1', 'Flow', [], URL, session_id=draft.id)
        self.assertEqual(published.id, draft.id)
        self.assertEqual(len(self.repo.store), 1)

    def test_blank_title_rejected_before_store(self):
        repo = MagicMock()
        with self.assertRaises(ValidationError) as ctx:
            session_service.publish(repo, 'user-1', '  ', [], URL, session_id='sess-1')
        self.assertEqual(ctx.exception.field, 'title')
        repo.get_owned.assert_not_called()
        repo.save.assert_not_called()

    def test_invalid_url_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            session_service.publish(self.repo, 'user-1', 'Morning Flow', [], 'not-a-url')
        self.assertEqual(ctx.exception.field, 'json_file_url')
        self.assertEqual(self.repo.store, {})

    def test_publish_other_users_session_is_not_found(self):
        draft = session_service.save_draft(self.repo, 'owner', 'Flow', [], URL)
        with self.assertRaises(NotFoundError):
            session_service.publish(self.repo, 'intruder', 'Flow', [], URL, session_id=draft.id)


class TestListingsAndDelete(unittest.TestCase):

    def setUp(self):
        self.repo = FakeSessionRepository()
        session_service.publish(self.repo, 'a', 'Morning Yoga', ['Yoga'], URL)
        session_service.publish(self.repo, 'b', 'Deep Sleep', ['sleep'], URL)
        session_service.save_draft(self.repo, 'a', 'Secret draft', ['yoga'], '')

    def test_list_published_excludes_drafts(self):
        page = session_service.list_published(self.repo)
        self.assertEqual(page.total, 2)
        self.assertTrue(all(s.is_published for s in page.items))

    def test_list_published_tag_csv(self):
        page = session_service.list_published(self.repo, tags=' YOGA , ')
        self.assertEqual([s.title for s in page.items], ['Morning Yoga'])

    def test_list_published_search(self):
        page = session_service.list_published(self.repo, search='sleep')
        self.assertEqual([s.title for s in page.items], ['Deep Sleep'])

    def test_blank_search_is_ignored(self):
        self.assertEqual(session_service.list_published(self.repo, search='   ').total, 2)

    def test_list_own_with_status(self):
        self.assertEqual(session_service.list_own(self.repo, 'a').total, 2)
        drafts = session_service.list_own(self.repo, 'a', status=SessionStatus.DRAFT)
        self.assertEqual([s.title for s in drafts.items], ['Secret draft'])

    def test_delete_own(self):
        session = session_service.list_own(self.repo, 'b').items[0]
        with self.assertRaises(NotFoundError):
            session_service.delete_own(self.repo, 'a', session.id)
        session_service.delete_own(self.repo, 'b', session.id)
        with self.assertRaises(NotFoundError):
            session_service.get_own(self.repo, 'b', session.id)

    def test_parse_tag_filter(self):
        self.assertEqual(session_service.parse_tag_filter('Yoga, calm'), ['yoga', 'calm'])
        self.assertEqual(session_service.parse_tag_filter(None), [])


if __name__ == '__main__':
    unittest.main()
