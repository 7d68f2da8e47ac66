"""
Tests for health check and monitoring functionality.
"""

import json
from unittest import mock

from django.db import DatabaseError
from django.test import Client, TestCase
from django.urls import reverse


class HealthCheckTests(TestCase):
    """Test cases for the health check endpoint."""

    def setUp(self):
        """Set up test client."""
        self.client = Client()
        self.url = reverse("citizenvote:health")

    def test_health_check_is_public_json(self):
        """The endpoint answers without authentication."""
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "application/json")

    def test_health_check_response_format(self):
        """Test that the health check returns expected JSON format."""
        response = self.client.get(self.url)

        data = json.loads(response.content)

        self.assertIn("status", data)
        self.assertIn("timestamp", data)
        self.assertIn("checks", data)
        self.assertEqual(data["version"], "0.1.0")
        self.assertIsInstance(data["timestamp"], (int, float))

    def test_health_check_database_and_cache(self):
        """With working database and cache, everything reports healthy."""
        data = json.loads(self.client.get(self.url).content)

        self.assertEqual(data["status"], "healthy")
        self.assertEqual(data["checks"]["database"], "healthy")
        self.assertEqual(data["checks"]["cache"], "healthy")

    def test_health_check_database_failure(self):
        """A failing database turns the report unhealthy with status 503."""
        with mock.patch(
            "citizenvote.views.health.connection.cursor",
            side_effect=DatabaseError("unreachable"),
        ):
            response = self.client.get(self.url)

        data = json.loads(response.content)
        self.assertEqual(response.status_code, 503)
        self.assertEqual(data["status"], "unhealthy")
        self.assertEqual(data["checks"]["database"], "error: unreachable")

    def test_health_check_rejects_post(self):
        response = self.client.post(self.url)

        self.assertEqual(response.status_code, 405)
