"""Administration: theory CRUD, comment moderation and the user list (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.core.database import get_db
from app.models import User
from app.schemas.theory import TheoryCreate, TheoryDetail, TheorySummary, TheoryUpdate
from app.schemas.auth import UserListItem, UsersListResponse
from app.services.theories import (
    CommentNotFoundError,
    TheoryNotFoundError,
    create_theory,
    delete_comment,
    delete_theory,
    get_theory,
    list_theories,
    update_theory,
)

router = APIRouter(dependencies=[Depends(require_admin)])


def _not_found(detail: str = "Theory not found") -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


@router.get("/theories", response_model=list[TheorySummary])
def admin_list_theories(db: Annotated[Session, Depends(get_db)]) -> list[TheorySummary]:
    return [TheorySummary.model_validate(t) for t in list_theories(db)]


@router.post("/theories", response_model=TheoryDetail, status_code=status.HTTP_201_CREATED)
def admin_create_theory(
    body: TheoryCreate,
    db: Annotated[Session, Depends(get_db)],
) -> TheoryDetail:
    """Create a theory; the slug is derived from the title and made unique."""
    return TheoryDetail.model_validate(create_theory(db, body))


@router.get("/theories/{theory_id}", response_model=TheoryDetail)
def admin_get_theory(
    theory_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> TheoryDetail:
    try:
        return TheoryDetail.model_validate(get_theory(db, theory_id))
    except TheoryNotFoundError:
        raise _not_found()


@router.put("/theories/{theory_id}", response_model=TheoryDetail)
def admin_update_theory(
    theory_id: str,
    body: TheoryUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> TheoryDetail:
    """Partial update; changing the title regenerates the slug."""
    try:
        return TheoryDetail.model_validate(update_theory(db, theory_id, body))
    except TheoryNotFoundError:
        raise _not_found()


@router.delete("/theories/{theory_id}", status_code=status.HTTP_204_NO_CONTENT)
def admin_delete_theory(
    theory_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete a theory and its comments."""
    try:
        delete_theory(db, theory_id)
    except TheoryNotFoundError:
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/theories/{theory_id}/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def admin_delete_comment(
    theory_id: str,
    comment_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    try:
        delete_comment(db, theory_id, comment_id)
    except CommentNotFoundError:
        raise _not_found("Comment not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/users", response_model=UsersListResponse)
def admin_list_users(db: Annotated[Session, Depends(get_db)]) -> UsersListResponse:
    """List all users without password digests."""
    users = db.query(User).order_by(User.email).all()
    return UsersListResponse(users=[UserListItem.model_validate(u) for u in users])
