"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.api import auth
from app.api.deps import attach_current_user
from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.database import SessionLocal, check_db_connected
from app.core.sessions import ServerSessionMiddleware
from app.schemas.auth import CurrentUserResponse, PublicIdentityView
from app.services.auth_gate import LoginRequired

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def create_app(session_factory: Callable[[], Session] = SessionLocal) -> FastAPI:
    """Build the application; session_factory backs the server-side session store."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        db = session_factory()
        try:
            if not check_db_connected(db):
                logger.critical("Database is unreachable. Check DATABASE_URL.")
                raise RuntimeError("Database is unreachable")
        finally:
            db.close()
        yield

    app = FastAPI(
        title="ConspiraLab API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        # Every route gets the current user resolved before its own dependencies.
        dependencies=[Depends(attach_current_user)],
    )

    app.add_middleware(
        ServerSessionMiddleware,
        session_factory=session_factory,
        cookie_name=settings.SESSION_COOKIE_NAME,
        max_age_minutes=settings.SESSION_MAX_AGE_MINUTES,
        https_only=settings.SESSION_COOKIE_SECURE,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LoginRequired)
    async def redirect_to_login(_request: Request, _exc: LoginRequired) -> RedirectResponse:
        return RedirectResponse(settings.LOGIN_PATH, status_code=status.HTTP_302_FOUND)

    app.include_router(auth.router, tags=["auth"])
    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/", response_model=CurrentUserResponse)
    def root(request: Request) -> CurrentUserResponse:
        """Root route; the presentation context for the landing page."""
        current_user: PublicIdentityView | None = request.state.current_user
        return CurrentUserResponse(current_user=current_user)

    return app


app = create_app()
