"""ORM models for the theory catalog and its comments."""

import uuid

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base


def _new_theory_id() -> str:
    return str(uuid.uuid4())


class Theory(Base):
    """A catalog article, addressed publicly by slug and administratively by id."""

    __tablename__ = "theories"

    id = Column(String(36), primary_key=True, default=_new_theory_id)
    title = Column(String(200), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    summary = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    complexity_level = Column(String(16), nullable=False, default="medium")
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    comments = relationship(
        "Comment",
        back_populates="theory",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )


class Comment(Base):
    """Reader comment attached to a theory."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    theory_id = Column(
        String(36),
        ForeignKey("theories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_name = Column(String(255), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    theory = relationship("Theory", back_populates="comments")
