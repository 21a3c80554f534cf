"""Tests for index creation and MongoDB client caching."""

import unittest
from unittest.mock import MagicMock, patch

from pymongo.errors import OperationFailure

from adapter.mongodb import connection
from adapter.mongodb.indexes import create_index_safe, ensure_all_indexes


class TestCreateIndexSafe(unittest.TestCase):

    def test_creates_index(self):
        collection = MagicMock()

        self.assertTrue(create_index_safe(collection, [('user_id', 1)], 'idx_user'))
        collection.create_index.assert_called_once_with([('user_id', 1)], name='idx_user')

    def test_recreates_index_with_same_name_and_new_keys(self):
        collection = MagicMock()
        collection.create_index.side_effect = [OperationFailure("Index already exists with a different name"), None]
        collection.index_information.return_value = {
            '_id_': {'key': [('_id', 1)]},
            'idx_user': {'key': [('user_id', 1)]},
        }

        result = create_index_safe(collection, [('user_id', 1), ('status', 1)], 'idx_user')

        self.assertTrue(result)
        collection.drop_index.assert_called_once_with('idx_user')

    def test_unrelated_errors_propagate(self):
        collection = MagicMock()
        collection.create_index.side_effect = OperationFailure("not authorized")

        with self.assertRaises(OperationFailure):
            create_index_safe(collection, [('user_id', 1)], 'idx_user')


class TestEnsureAllIndexes(unittest.TestCase):

    def test_covers_sessions_and_users(self):
        db = MagicMock()

        self.assertTrue(ensure_all_indexes(db))

        names = {call.kwargs['name'] for call in db.__getitem__.return_value.create_index.call_args_list}
        self.assertIn('idx_users_email', names)
        self.assertIn('idx_user_status', names)


class TestGetMongodbClient(unittest.TestCase):

    def setUp(self):
        connection.reset_client()

    def tearDown(self):
        connection.reset_client()

    @patch.object(connection, 'MONGO_URL', None)
    def test_missing_url_returns_none(self):
        self.assertIsNone(connection.get_mongodb_client())

    @patch.object(connection, 'MONGO_URL', 'mongodb://localhost:27017')
    @patch.object(connection, 'MongoClient')
    def test_client_is_cached(self, mock_client_class):
        first = connection.get_mongodb_client()
        second = connection.get_mongodb_client()

        self.assertIs(first, second)
        mock_client_class.assert_called_once()


if __name__ == '__main__':
    unittest.main()
