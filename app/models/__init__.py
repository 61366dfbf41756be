"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.session import SessionRecord
from app.models.theory import Comment, Theory
from app.models.user import User

__all__ = ["Base", "Comment", "SessionRecord", "Theory", "User"]
