"""Public catalog: list and read theories; logged-in users may comment."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import attach_current_user, require_current_user
from app.core.database import get_db
from app.schemas.auth import PublicIdentityView
from app.schemas.theory import (
    CommentCreate,
    CommentOut,
    TheoryDetail,
    TheoryDetailResponse,
    TheoryListResponse,
    TheorySummary,
)
from app.services.theories import (
    TheoryNotFoundError,
    add_comment,
    get_theory_by_slug,
    list_theories,
)

router = APIRouter()


@router.get("", response_model=TheoryListResponse)
def get_theories(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[PublicIdentityView | None, Depends(attach_current_user)],
    tag: Annotated[str | None, Query(max_length=50)] = None,
) -> TheoryListResponse:
    """List theories, newest first. Optional ?tag= filter."""
    theories = list_theories(db, tag=tag)
    return TheoryListResponse(
        current_user=current_user,
        theories=[TheorySummary.model_validate(t) for t in theories],
    )


@router.get("/{slug}", response_model=TheoryDetailResponse)
def get_theory_detail(
    slug: str,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[PublicIdentityView | None, Depends(attach_current_user)],
) -> TheoryDetailResponse:
    """Theory detail page with comments."""
    try:
        theory = get_theory_by_slug(db, slug)
    except TheoryNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Theory not found")
    return TheoryDetailResponse(
        current_user=current_user,
        theory=TheoryDetail.model_validate(theory),
    )


@router.post("/{slug}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def post_comment(
    slug: str,
    body: CommentCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[PublicIdentityView, Depends(require_current_user)],
) -> CommentOut:
    """Add a comment signed with the current user's display name."""
    try:
        theory = get_theory_by_slug(db, slug)
    except TheoryNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Theory not found")
    comment = add_comment(db, theory, author_name=current_user.display_name, text=body.text)
    return CommentOut.model_validate(comment)
