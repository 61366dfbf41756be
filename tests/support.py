"""Shared builders for tests: throwaway SQLite databases, users and app clients."""

import shutil
import tempfile
from collections.abc import Callable, Generator

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from app.core.database import build_engine, get_db
from app.core.security import hash_password
from app.main import create_app
from app.models import Base, User

# Low bcrypt cost keeps the suite fast; verify_password reads the cost from the digest.
TEST_BCRYPT_ROUNDS = 4


class TempDatabase:
    """File-backed SQLite database with all tables created; call close() when done."""

    def __init__(self) -> None:
        self._dir = tempfile.mkdtemp(prefix="conspiralab-test-")
        self.engine = build_engine(f"sqlite:///{self._dir}/test.db")
        Base.metadata.create_all(self.engine)
        self.session_factory: Callable[[], Session] = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def close(self) -> None:
        self.engine.dispose()
        shutil.rmtree(self._dir, ignore_errors=True)


def make_user(
    db: Session,
    email: str = "ana@x.com",
    display_name: str = "Ana",
    password: str = "secret123",
    role: str = "user",
    user_id: str | None = None,
) -> User:
    user = User(
        email=email,
        display_name=display_name,
        password_hash=hash_password(password, rounds=TEST_BCRYPT_ROUNDS),
        role=role,
    )
    if user_id is not None:
        user.id = user_id
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_client(session_factory: Callable[[], Session]) -> TestClient:
    """App wired to session_factory for both the session store and get_db."""
    app = create_app(session_factory=session_factory)

    def _get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    return TestClient(app)
