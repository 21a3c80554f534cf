"""Shared pytest setup: test configuration must exist before api.security is imported."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
