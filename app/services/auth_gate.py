"""
Authentication gate for protected routes.

A presence check on the session's identity reference, nothing more: no store
access, so it cannot fail open. Whether the referenced user still exists is
settled by view-context enrichment, which must run first in the pipeline.
"""

from app.services.session_store import SessionContext


class LoginRequired(Exception):
    """Raised when a protected operation is reached without an identity reference."""

    def __init__(self, message: str = "Authentication required") -> None:
        self.message = message
        super().__init__(message)


def enforce_authentication(session: SessionContext) -> None:
    """Raise LoginRequired unless the session carries an identity reference."""
    if not session.has_identity_reference:
        raise LoginRequired()
