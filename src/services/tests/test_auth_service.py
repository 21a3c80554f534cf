"""Unit tests for auth_service module."""

import unittest
from unittest.mock import patch

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError, ValidationError
from services import auth_service


@patch('services.auth_service.BCRYPT_ROUNDS', 4)
class TestAuthService(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_register_hashes_password_and_lowercases_email(self):
        user = auth_service.register(self.repo, ' Alice@Example.com ', 'secret1')
        self.assertEqual(user.email, 'alice@example.com')
        self.assertNotEqual(user.password_hash, 'secret1')
        self.assertTrue(user.password_hash.startswith('$2'))

    def test_register_duplicate_email_any_case(self):
        auth_service.register(self.repo, 'alice@example.com', 'secret1')
        with self.assertRaises(DuplicateError):
            auth_service.register(self.repo, 'ALICE@example.com', 'secret2')

    def test_register_short_password(self):
        with self.assertRaises(ValidationError) as ctx:
            auth_service.register(self.repo, 'bob@example.com', '12345')
        self.assertEqual(ctx.exception.field, 'password')
        self.assertIsNone(self.repo.get_by_email('bob@example.com'))

    def test_authenticate_success_stamps_last_login(self):
        auth_service.register(self.repo, 'alice@example.com', 'secret1')
        user = auth_service.authenticate(self.repo, 'Alice@example.com', 'secret1')
        self.assertIsNotNone(user.last_login)

    def test_authenticate_wrong_password(self):
        auth_service.register(self.repo, 'alice@example.com', 'secret1')
        with self.assertRaises(ValidationError):
            auth_service.authenticate(self.repo, 'alice@example.com', 'wrong-pass')

    def test_authenticate_unknown_email_same_error(self):
        with self.assertRaises(ValidationError) as ctx:
            auth_service.authenticate(self.repo, 'nobody@example.com', 'secret1')
        self.assertEqual(str(ctx.exception), "Invalid email or password")


if __name__ == '__main__':
    unittest.main()
