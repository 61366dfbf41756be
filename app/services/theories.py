"""Theory catalog: slug generation, CRUD and comments."""

import logging
import re
import unicodedata

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Comment, Theory
from app.schemas.theory import TheoryCreate, TheoryUpdate

logger = logging.getLogger(__name__)

_INVALID_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_REPEATED_HYPHENS = re.compile(r"-+")

# Commits attempted when another writer takes the chosen slug first.
SLUG_COMMIT_ATTEMPTS = 5


class TheoryNotFoundError(Exception):
    """Raised when a theory id or slug does not exist."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Theory not found: {key}")


class CommentNotFoundError(Exception):
    """Raised when a comment does not exist on the given theory."""

    def __init__(self, theory_id: str, comment_id: int) -> None:
        self.theory_id = theory_id
        self.comment_id = comment_id
        super().__init__(f"Comment {comment_id} not found on theory {theory_id}")


def slugify(title: str) -> str:
    """
    URL slug from a title: accents removed, lower-case, hyphen-separated.

    "Os patos dos jardins públicos" -> "os-patos-dos-jardins-publicos"
    """
    decomposed = unicodedata.normalize("NFD", title)
    without_accents = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = without_accents.lower().strip()
    slug = _INVALID_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug.strip("-") or "theory"


def unique_slug(db: Session, title: str, exclude_id: str | None = None) -> str:
    """Slug for title that no other theory uses; appends -2, -3, ... on collision."""
    base = slugify(title)
    candidate = base
    n = 1
    while True:
        query = db.query(Theory.id).filter(Theory.slug == candidate)
        if exclude_id is not None:
            query = query.filter(Theory.id != exclude_id)
        if query.first() is None:
            return candidate
        n += 1
        candidate = f"{base}-{n}"


def list_theories(db: Session, tag: str | None = None) -> list[Theory]:
    """All theories, newest first; optionally only those carrying tag."""
    theories = db.query(Theory).order_by(Theory.created_at.desc(), Theory.title).all()
    if tag:
        wanted = tag.strip().lower()
        theories = [t for t in theories if wanted in (t.tags or [])]
    return theories


def get_theory(db: Session, theory_id: str) -> Theory:
    theory = db.get(Theory, theory_id)
    if theory is None:
        raise TheoryNotFoundError(theory_id)
    return theory


def get_theory_by_slug(db: Session, slug: str) -> Theory:
    theory = db.query(Theory).filter(Theory.slug == slug).first()
    if theory is None:
        raise TheoryNotFoundError(slug)
    return theory


def create_theory(db: Session, body: TheoryCreate) -> Theory:
    for attempt in range(1, SLUG_COMMIT_ATTEMPTS + 1):
        theory = Theory(
            title=body.title,
            slug=unique_slug(db, body.title),
            summary=body.summary,
            content=body.content,
            complexity_level=body.complexity_level,
            tags=list(body.tags),
        )
        db.add(theory)
        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            if attempt == SLUG_COMMIT_ATTEMPTS:
                raise
            logger.warning("Slug taken concurrently, retrying: slug=%s", theory.slug)
    db.refresh(theory)
    logger.info("Theory created: id=%s slug=%s", theory.id, theory.slug)
    return theory


def update_theory(db: Session, theory_id: str, body: TheoryUpdate) -> Theory:
    """Apply the fields present in body; a new title regenerates the slug."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    for attempt in range(1, SLUG_COMMIT_ATTEMPTS + 1):
        theory = get_theory(db, theory_id)
        retitled = "title" in changes and changes["title"] != theory.title
        if retitled:
            theory.slug = unique_slug(db, changes["title"], exclude_id=theory.id)
        for field, value in changes.items():
            setattr(theory, field, value)
        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            if not retitled or attempt == SLUG_COMMIT_ATTEMPTS:
                raise
            logger.warning(
                "Slug taken concurrently, retrying: theory_id=%s title=%s",
                theory_id,
                changes["title"],
            )
    db.refresh(theory)
    logger.info("Theory updated: id=%s fields=%s", theory.id, sorted(changes))
    return theory


def delete_theory(db: Session, theory_id: str) -> None:
    theory = get_theory(db, theory_id)
    db.delete(theory)
    db.commit()
    logger.info("Theory deleted: id=%s", theory_id)


def add_comment(db: Session, theory: Theory, author_name: str, text: str) -> Comment:
    comment = Comment(theory_id=theory.id, author_name=author_name, text=text)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, theory_id: str, comment_id: int) -> None:
    comment = (
        db.query(Comment)
        .filter(Comment.id == comment_id, Comment.theory_id == theory_id)
        .first()
    )
    if comment is None:
        raise CommentNotFoundError(theory_id, comment_id)
    db.delete(comment)
    db.commit()
    logger.info("Comment deleted: theory_id=%s comment_id=%s", theory_id, comment_id)
