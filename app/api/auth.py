"""Session login routes: the login entry point, login, logout and the current user."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import attach_current_user, get_session_context
from app.core.config import settings
from app.core.database import get_db
from app.core.security import verify_password
from app.schemas.auth import (
    CurrentUserResponse,
    LoginPageResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PublicIdentityView,
)
from app.services.session_store import SessionContext
from app.services.view_context import SqlUserRepository, to_public_view

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid email or password."


@router.get(settings.LOGIN_PATH, response_model=LoginPageResponse)
def login_page(
    current_user: Annotated[PublicIdentityView | None, Depends(attach_current_user)],
) -> LoginPageResponse:
    """Login entry point; protected routes redirect here when there is no session."""
    if current_user is not None:
        return LoginPageResponse(message="Already logged in.", current_user=current_user)
    return LoginPageResponse(
        message=f"POST email and password to {settings.LOGIN_PATH} to log in.",
        current_user=None,
    )


@router.post(settings.LOGIN_PATH, response_model=LoginResponse)
def login(
    body: LoginRequest,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with email and password and start a session.
    The session cookie is set on the response; the identifier is rotated on every login.
    """
    user = SqlUserRepository(db).find_by_email(body.email)
    # Same response for unknown email, wrong password and corrupt digest.
    if user is None or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login attempt for email=%s", body.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )
    session.rotate()
    session.login(str(user.id), user.role)
    logger.info("User logged in: id=%s role=%s", user.id, user.role)
    return LoginResponse(current_user=to_public_view(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    session: Annotated[SessionContext, Depends(get_session_context)],
) -> MessageResponse:
    """End the session: the server-side record is deleted and the cookie cleared."""
    if session.user_id:
        logger.info("User logged out: id=%s", session.user_id)
    session.invalidate()
    return MessageResponse(message="Logged out.")


@router.get("/me", response_model=CurrentUserResponse)
def me(
    current_user: Annotated[PublicIdentityView | None, Depends(attach_current_user)],
) -> CurrentUserResponse:
    """Return the current user's public view, or null when anonymous."""
    return CurrentUserResponse(current_user=current_user)
