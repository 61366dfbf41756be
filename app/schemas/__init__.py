"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    PublicIdentityView,
    Role,
    SessionData,
    UserCreate,
)
from app.schemas.health import HealthResponse
from app.schemas.theory import (
    CommentCreate,
    CommentOut,
    ComplexityLevel,
    TheoryCreate,
    TheoryDetail,
    TheorySummary,
    TheoryUpdate,
)

__all__ = [
    "CommentCreate",
    "CommentOut",
    "ComplexityLevel",
    "CurrentUserResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "PublicIdentityView",
    "Role",
    "SessionData",
    "TheoryCreate",
    "TheoryDetail",
    "TheorySummary",
    "TheoryUpdate",
    "UserCreate",
]
