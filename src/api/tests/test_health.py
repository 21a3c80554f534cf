"""Tests for root and health endpoints."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi.testclient import TestClient

from api.main import app, SERVICE_NAME


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    def test_root(self):
        data = self.client.get("/").json()
        self.assertEqual(data["service"], SERVICE_NAME)
        self.assertEqual(data["status"], "running")

    @patch('api.routes.health.get_mongodb_client')
    def test_healthy_when_mongodb_pings(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["services"]["mongodb"]["status"], "healthy")

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_mongodb_missing(self, mock_get_client):
        mock_get_client.return_value = None

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "degraded")


if __name__ == '__main__':
    unittest.main()
