"""SQLAlchemy declarative Base shared by every table."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for users, sessions, theories and comments."""
