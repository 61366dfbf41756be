"""Server-side session store: opaque cookie id -> SessionData row in the sessions table."""

import logging
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.security import new_session_id
from app.models import SessionRecord
from app.schemas.auth import Role, SessionData

logger = logging.getLogger(__name__)


class SessionContext:
    """
    Per-request view of one session.

    Mutations only flip ``modified`` when the payload actually changes, so
    callers can repeat them freely and the store sees no write for a no-op.
    """

    def __init__(
        self,
        session_id: str | None = None,
        data: SessionData | None = None,
        expires_at: datetime | None = None,
    ) -> None:
        self.session_id = session_id
        self.data = data or SessionData()
        self.expires_at = expires_at
        self.modified = False
        self.destroyed = False
        self.previous_id: str | None = None

    @property
    def is_new(self) -> bool:
        return self.session_id is None

    @property
    def user_id(self) -> str | None:
        return self.data.user_id

    @property
    def role(self) -> Role | None:
        return self.data.role

    @property
    def has_identity_reference(self) -> bool:
        return bool(self.data.user_id)

    def seconds_left(self, now: datetime | None = None) -> int | None:
        """Remaining lifetime of the stored row, or None before the first save."""
        if self.expires_at is None:
            return None
        now = now or datetime.now(timezone.utc)
        return max(0, int((self.expires_at - now).total_seconds()))

    def login(self, user_id: str, role: Role) -> None:
        """Store the identity reference and cached role after a successful login."""
        updated = SessionData(user_id=user_id, role=role)
        if updated != self.data:
            self.data = updated
            self.modified = True

    def clear_identity(self) -> None:
        """Drop the identity reference and cached role. Idempotent."""
        if self.data.user_id is None and self.data.role is None:
            return
        self.data = SessionData()
        self.modified = True

    def rotate(self) -> None:
        """Issue a new identifier (on login); the old record is removed on commit."""
        if self.session_id is not None and self.previous_id is None:
            self.previous_id = self.session_id
        self.session_id = new_session_id()
        self.modified = True

    def invalidate(self) -> None:
        """Mark the session for deletion (logout)."""
        self.data = SessionData()
        self.destroyed = True


class SessionStore:
    """Load, save and destroy session rows using one SQLAlchemy session."""

    def __init__(self, db: Session, max_age: timedelta) -> None:
        self.db = db
        self.max_age = max_age

    def load(self, session_id: str | None) -> SessionContext:
        """
        Resolve a cookie value into a SessionContext.

        Unknown, expired or malformed sessions resolve to a fresh, empty
        context; the stale id is not reused.
        """
        if not session_id:
            return SessionContext()
        now = datetime.now(timezone.utc)
        record = (
            self.db.query(SessionRecord)
            .filter(SessionRecord.id == session_id, SessionRecord.expires_at > now)
            .first()
        )
        if record is None:
            return SessionContext()
        try:
            data = SessionData.model_validate(record.data or {})
        except ValidationError as e:
            logger.warning(
                "Discarding session with invalid payload: errors=%s", e.error_count()
            )
            return SessionContext()
        return SessionContext(
            session_id=record.id, data=data, expires_at=_as_utc(record.expires_at)
        )

    def save(self, context: SessionContext) -> None:
        """Persist the context, creating the row on first save. Commits."""
        if context.session_id is None:
            context.session_id = new_session_id()
        if context.previous_id is not None:
            self._delete(context.previous_id)
            context.previous_id = None
        payload = context.data.model_dump(mode="json")
        record = self.db.get(SessionRecord, context.session_id)
        if record is None:
            record = SessionRecord(
                id=context.session_id,
                data=payload,
                expires_at=datetime.now(timezone.utc) + self.max_age,
            )
            self.db.add(record)
        else:
            # Saving never extends the lifetime fixed at creation.
            record.data = payload
        self.db.commit()
        context.expires_at = _as_utc(record.expires_at)
        context.modified = False

    def destroy(self, context: SessionContext) -> None:
        """Delete the row(s) behind the context. Commits."""
        for session_id in (context.session_id, context.previous_id):
            if session_id:
                self._delete(session_id)
        self.db.commit()

    def _delete(self, session_id: str) -> None:
        self.db.query(SessionRecord).filter(SessionRecord.id == session_id).delete(
            synchronize_session=False
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for DateTime(timezone=True) columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
