"""Request/response schemas for login, sessions and the public identity view."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.security import (
    DISPLAY_NAME_MAX_LEN,
    DISPLAY_NAME_MIN_LEN,
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)

Role = Literal["admin", "user"]


def normalize_email(value: str) -> str:
    """Emails are the login key: trimmed and lower-cased before any comparison."""
    return value.strip().lower()


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v: object) -> object:
        return normalize_email(v) if isinstance(v, str) else v


class UserCreate(BaseModel):
    """Validated input for creating a user (CLI and seed)."""

    email: str = Field(..., min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN)
    display_name: str = Field(
        ..., min_length=DISPLAY_NAME_MIN_LEN, max_length=DISPLAY_NAME_MAX_LEN
    )
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: Role = "user"

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v: object) -> object:
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("display_name", mode="before")
    @classmethod
    def _strip_display_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class SessionData(BaseModel):
    """
    Fixed shape of a server-side session payload.

    Only the identity reference and a cached role are allowed; anything else
    (a password digest included) is rejected when the payload is loaded or saved.
    """

    model_config = ConfigDict(extra="forbid")

    user_id: str | None = None
    role: Role | None = None


class PublicIdentityView(BaseModel):
    """
    Renderer-safe projection of a User: id, displayName, email, role.

    Built field by field from the user record, so the password digest and
    any other column can never leak into a response.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    id: str
    display_name: str = Field(..., alias="displayName")
    email: str
    role: Role


class CurrentUserResponse(BaseModel):
    """Presentation context: the current identity or null for anonymous visitors."""

    current_user: PublicIdentityView | None = None


class LoginPageResponse(CurrentUserResponse):
    """Response for GET /login (the login entry point)."""

    message: str


class LoginResponse(BaseModel):
    """Response after a successful login."""

    current_user: PublicIdentityView


class MessageResponse(BaseModel):
    message: str


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: str
    role: Role


class UsersListResponse(BaseModel):
    """Response for GET /admin/users (admin only)."""

    users: list[UserListItem]
