"""
View-context enrichment: resolve the session's identity reference into a
PublicIdentityView for every response.

Fails open: a store error degrades the request to anonymous and is logged,
it never reaches the handler. A reference to a user that no longer exists
is cleared from the session so later requests skip the lookup.
"""

import logging
from typing import Protocol

from sqlalchemy.orm import Session

from app.models import User
from app.schemas.auth import PublicIdentityView
from app.services.session_store import SessionContext

logger = logging.getLogger(__name__)


class IdentityLookup(Protocol):
    """Credential store read contract used by the enricher."""

    def find_identity_by_reference(self, ref: str) -> User | None: ...


class SqlUserRepository:
    """IdentityLookup backed by the users table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_identity_by_reference(self, ref: str) -> User | None:
        try:
            return self.db.get(User, ref)
        except Exception:
            # Leave the session usable for the rest of the request.
            self.db.rollback()
            raise

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()


def to_public_view(user: User) -> PublicIdentityView:
    """Project a user onto the four public fields; nothing else is copied."""
    return PublicIdentityView(
        id=str(user.id),
        display_name=user.display_name,
        email=user.email,
        role=user.role,
    )


def enrich_view_context(
    session: SessionContext,
    lookup: IdentityLookup,
) -> PublicIdentityView | None:
    """
    Return the current identity for presentation, or None for anonymous.

    Never raises. At most one store read; the only write is the idempotent
    clear of a stale reference on the session context.
    """
    current_user: PublicIdentityView | None = None

    ref = session.user_id
    if not ref:
        return current_user

    try:
        user = lookup.find_identity_by_reference(ref)
    except Exception:
        logger.exception("Failed to load user for session; continuing as anonymous")
        return current_user

    if user is None:
        logger.debug("Session references missing user %s; clearing identity", ref)
        session.clear_identity()
        return current_user

    try:
        current_user = to_public_view(user)
    except Exception:
        logger.exception("Stored user %s failed public view validation", ref)
    return current_user
