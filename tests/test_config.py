"""Unit tests for app.core.config: required and validated settings."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from app.core.config import Settings


def _settings(**env: str) -> Settings:
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


class TestDatabaseUrl(unittest.TestCase):
    """The store connection string is mandatory."""

    def test_missing_database_url_is_fatal(self) -> None:
        with self.assertRaises(ValidationError):
            _settings()

    def test_blank_database_url_is_fatal(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="   ")

    def test_unsupported_scheme_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mongodb://localhost/conspiralab")

    def test_postgres_url_accepted(self) -> None:
        s = _settings(DATABASE_URL=" postgresql://u:p@localhost:5432/conspiralab ")
        self.assertEqual(s.DATABASE_URL, "postgresql://u:p@localhost:5432/conspiralab")


class TestSessionSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings(DATABASE_URL="sqlite://")
        self.assertEqual(s.SESSION_COOKIE_NAME, "conspiralab_session")
        self.assertEqual(s.LOGIN_PATH, "/login")
        self.assertEqual(s.SESSION_MAX_AGE_MINUTES, 1440)
        self.assertFalse(s.SESSION_COOKIE_SECURE)

    def test_login_path_must_be_absolute(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="sqlite://", LOGIN_PATH="login")

    def test_max_age_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="sqlite://", SESSION_MAX_AGE_MINUTES="0")

    def test_cookie_name_must_be_a_token(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="sqlite://", SESSION_COOKIE_NAME="bad name;")

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(DATABASE_URL="sqlite://", LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="sqlite://", LOG_LEVEL="chatty")


if __name__ == "__main__":
    unittest.main()
