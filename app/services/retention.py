"""Session retention: delete server-side sessions whose expiry has passed."""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.models import SessionRecord

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def run_session_cleanup(session: Session, settings: "Settings") -> int:
    """
    Delete expired session rows and return how many were removed.

    Idempotent: safe to run repeatedly. Live sessions are never touched.
    """
    if not settings.SESSION_CLEANUP_ENABLED:
        logger.info("Session cleanup is disabled (SESSION_CLEANUP_ENABLED=false); skipping.")
        return 0

    now = datetime.now(timezone.utc)
    deleted_count = (
        session.query(SessionRecord)
        .filter(SessionRecord.expires_at <= now)
        .delete(synchronize_session=False)
    )
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Session cleanup: cutoff=%s, sessions_deleted=%s",
            now.isoformat(),
            deleted_count,
        )
    return deleted_count
