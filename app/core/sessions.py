"""Starlette middleware that resolves the session cookie into request.state.session."""

import logging
from collections.abc import Callable
from datetime import timedelta

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.services.session_store import SessionContext, SessionStore

logger = logging.getLogger(__name__)


class ServerSessionMiddleware(BaseHTTPMiddleware):
    """
    Load the server-side session before the route runs and persist it after.

    The cookie holds only the opaque session id. A store failure while loading
    leaves the request with an empty (anonymous) context; a failure while
    saving is logged and the cookie is not issued. The cookie max age tracks
    the remaining lifetime of the stored row.
    """

    def __init__(
        self,
        app: ASGIApp,
        session_factory: Callable[[], Session],
        cookie_name: str,
        max_age_minutes: int,
        https_only: bool = False,
    ) -> None:
        super().__init__(app)
        self.session_factory = session_factory
        self.cookie_name = cookie_name
        self.max_age = timedelta(minutes=max_age_minutes)
        self.https_only = https_only

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        session_id = request.cookies.get(self.cookie_name)
        context = await run_in_threadpool(self._load, session_id)
        request.state.session = context

        response = await call_next(request)

        if context.destroyed:
            await run_in_threadpool(self._destroy, context)
            response.delete_cookie(self.cookie_name, path="/")
        elif context.modified:
            saved = await run_in_threadpool(self._save, context)
            if saved:
                self._set_cookie(response, context)
        return response

    def _load(self, session_id: str | None) -> SessionContext:
        if not session_id:
            return SessionContext()
        db = self.session_factory()
        try:
            return SessionStore(db, self.max_age).load(session_id)
        except Exception:
            logger.exception("Failed to load session; treating request as anonymous")
            return SessionContext()
        finally:
            db.close()

    def _save(self, context: SessionContext) -> bool:
        if context.is_new and not context.has_identity_reference:
            # Nothing worth persisting for an anonymous visitor.
            return False
        db = self.session_factory()
        try:
            SessionStore(db, self.max_age).save(context)
            return True
        except Exception:
            db.rollback()
            logger.exception("Failed to save session")
            return False
        finally:
            db.close()

    def _destroy(self, context: SessionContext) -> None:
        if context.is_new and context.previous_id is None:
            return
        db = self.session_factory()
        try:
            SessionStore(db, self.max_age).destroy(context)
        except Exception:
            db.rollback()
            logger.exception("Failed to destroy session")
        finally:
            db.close()

    def _set_cookie(self, response: Response, context: SessionContext) -> None:
        response.set_cookie(
            self.cookie_name,
            context.session_id or "",
            max_age=context.seconds_left(),
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.https_only,
        )
