"""Tests for FileCredentialStorage."""

import os
import stat
import tempfile
import unittest
from pathlib import Path

from client.storage import FileCredentialStorage, StoredCredentials


class TestFileCredentialStorage(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "nested" / "credentials.json"
        self.storage = FileCredentialStorage(self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_load_missing_file(self):
        self.assertIsNone(self.storage.load())

    def test_save_then_load(self):
        self.storage.save("tok", {"id": "u1", "email": "alice@example.com"})

        self.assertEqual(
            self.storage.load(),
            StoredCredentials(token="tok", user={"id": "u1", "email": "alice@example.com"}),
        )

    def test_file_is_private(self):
        self.storage.save("tok", {})
        mode = stat.S_IMODE(os.stat(self.path).st_mode)
        self.assertEqual(mode, 0o600)

    def test_clear(self):
        self.storage.save("tok", {})
        self.storage.clear()
        self.storage.clear()

        self.assertFalse(self.path.exists())
        self.assertIsNone(self.storage.load())

    def test_corrupt_file_ignored(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")

        self.assertIsNone(self.storage.load())


if __name__ == '__main__':
    unittest.main()
