"""Unit and integration tests for expired-session cleanup: run_session_cleanup."""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from app.models import SessionRecord
from app.services.retention import run_session_cleanup
from tests.support import TempDatabase


class TestCleanupDisabled(unittest.TestCase):
    """When SESSION_CLEANUP_ENABLED is False, run_session_cleanup does nothing."""

    def test_returns_zero_and_does_not_query(self) -> None:
        settings = MagicMock()
        settings.SESSION_CLEANUP_ENABLED = False
        session = MagicMock()
        self.assertEqual(run_session_cleanup(session, settings), 0)
        session.query.assert_not_called()
        session.commit.assert_not_called()


class TestCleanupDeletes(unittest.TestCase):
    """When enabled, the delete count from the query is returned and committed."""

    def test_returns_deleted_count(self) -> None:
        settings = MagicMock()
        settings.SESSION_CLEANUP_ENABLED = True
        session = MagicMock()
        session.query.return_value.filter.return_value.delete.return_value = 3
        self.assertEqual(run_session_cleanup(session, settings), 3)
        session.commit.assert_called_once()


class TestCleanupIntegration(unittest.TestCase):
    """Against a real SQLite database: expired rows go, live rows stay."""

    def setUp(self) -> None:
        self.database = TempDatabase()
        self.db = self.database.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        self.database.close()

    def test_only_expired_sessions_deleted(self) -> None:
        now = datetime.now(timezone.utc)
        self.db.add_all(
            [
                SessionRecord(id="old", data={}, expires_at=now - timedelta(hours=1)),
                SessionRecord(id="live", data={}, expires_at=now + timedelta(hours=1)),
            ]
        )
        self.db.commit()
        settings = MagicMock()
        settings.SESSION_CLEANUP_ENABLED = True

        self.assertEqual(run_session_cleanup(self.db, settings), 1)
        remaining = [r.id for r in self.db.query(SessionRecord).all()]
        self.assertEqual(remaining, ["live"])
        # Idempotent
        self.assertEqual(run_session_cleanup(self.db, settings), 0)


if __name__ == "__main__":
    unittest.main()
