"""
Request pipeline dependencies.

Order within a request: session context (middleware) -> attach_current_user
(enrichment, runs for every route) -> require_authentication (gate). The gate
declares the enricher as a sub-dependency, so a stale reference is already
cleared when the gate looks at the session.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.auth import PublicIdentityView
from app.services.auth_gate import LoginRequired, enforce_authentication
from app.services.session_store import SessionContext
from app.services.view_context import SqlUserRepository, enrich_view_context


def get_session_context(request: Request) -> SessionContext:
    """The SessionContext resolved by ServerSessionMiddleware for this request."""
    context = getattr(request.state, "session", None)
    if context is None:
        raise RuntimeError("ServerSessionMiddleware is not installed")
    return context


def attach_current_user(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[Session, Depends(get_db)],
) -> PublicIdentityView | None:
    """Dependency: enrich the request with the public view of the current user (or None)."""
    current_user = enrich_view_context(session, SqlUserRepository(db))
    request.state.current_user = current_user
    return current_user


def require_authentication(
    session: Annotated[SessionContext, Depends(get_session_context)],
    _current_user: Annotated[PublicIdentityView | None, Depends(attach_current_user)],
) -> SessionContext:
    """Dependency: redirect to login unless the session has an identity reference."""
    enforce_authentication(session)
    return session


def require_current_user(
    _session: Annotated[SessionContext, Depends(require_authentication)],
    current_user: Annotated[PublicIdentityView | None, Depends(attach_current_user)],
) -> PublicIdentityView:
    """
    Dependency for handlers that need the identity itself.

    If enrichment could not resolve the reference (store error), the handler
    is not reached: the request is sent to login rather than run without a user.
    """
    if current_user is None:
        raise LoginRequired()
    return current_user


def require_admin(
    current_user: Annotated[PublicIdentityView, Depends(require_current_user)],
) -> PublicIdentityView:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
