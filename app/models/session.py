"""ORM model for server-side session records keyed by the cookie identifier."""

from sqlalchemy import JSON, Column, DateTime, String, func

from app.models.base import Base


class SessionRecord(Base):
    """
    One row per active browser session.

    data holds the SessionData payload (user_id, role). The password digest
    is never stored here.
    """

    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
