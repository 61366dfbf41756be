"""Pydantic schemas for the theory catalog and comments."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.auth import PublicIdentityView

ComplexityLevel = Literal["low", "medium", "high"]

TITLE_MIN_LEN = 3
TITLE_MAX_LEN = 200
SUMMARY_MIN_LEN = 10
SUMMARY_MAX_LEN = 500
CONTENT_MIN_LEN = 20
COMMENT_MIN_LEN = 2
COMMENT_MAX_LEN = 2000
MAX_TAGS = 20
TAG_MAX_LEN = 50


def _strip(v: object) -> object:
    return v.strip() if isinstance(v, str) else v


def _normalize_tags(tags: list[str]) -> list[str]:
    """Trim, lower-case, drop empties and duplicates; keep first-seen order."""
    seen: list[str] = []
    for tag in tags:
        t = tag.strip().lower()
        if not t:
            continue
        if len(t) > TAG_MAX_LEN:
            raise ValueError(f"Tags must be at most {TAG_MAX_LEN} characters.")
        if t not in seen:
            seen.append(t)
    return seen


class TheoryCreate(BaseModel):
    """Body for creating a theory (admin)."""

    title: str = Field(..., min_length=TITLE_MIN_LEN, max_length=TITLE_MAX_LEN)
    summary: str = Field(..., min_length=SUMMARY_MIN_LEN, max_length=SUMMARY_MAX_LEN)
    content: str = Field(..., min_length=CONTENT_MIN_LEN)
    complexity_level: ComplexityLevel = "medium"
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)

    @field_validator("title", "summary", "content", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return _strip(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _normalize_tags(v)


class TheoryUpdate(BaseModel):
    """Partial update for a theory (admin). Omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=TITLE_MIN_LEN, max_length=TITLE_MAX_LEN)
    summary: str | None = Field(
        default=None, min_length=SUMMARY_MIN_LEN, max_length=SUMMARY_MAX_LEN
    )
    content: str | None = Field(default=None, min_length=CONTENT_MIN_LEN)
    complexity_level: ComplexityLevel | None = None
    tags: list[str] | None = Field(default=None, max_length=MAX_TAGS)

    @field_validator("title", "summary", "content", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return _strip(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _normalize_tags(v)


class CommentCreate(BaseModel):
    """Body for posting a comment; the author is the logged-in user."""

    text: str = Field(..., min_length=COMMENT_MIN_LEN, max_length=COMMENT_MAX_LEN)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return _strip(v)


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_name: str
    text: str
    created_at: datetime | None = None


class TheorySummary(BaseModel):
    """Catalog list entry (no body, no comments)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    summary: str
    complexity_level: ComplexityLevel
    tags: list[str]
    created_at: datetime | None = None


class TheoryDetail(TheorySummary):
    """Full theory with content and comments."""

    content: str
    comments: list[CommentOut] = Field(default_factory=list)
    updated_at: datetime | None = None


class TheoryListResponse(BaseModel):
    current_user: PublicIdentityView | None = None
    theories: list[TheorySummary]


class TheoryDetailResponse(BaseModel):
    current_user: PublicIdentityView | None = None
    theory: TheoryDetail
